"""Artifact-building stages."""

from .aggregate import FrequencyTable, read_bigram_counts, read_unigram_counts
from .bigram_table import BigramBuildResult, build_bigram_table, pack_key, unpack_key
from .term_index import OOV_ID, TermIndex, build_term_index
from .weights import compute_weights, neg_log_weight

__all__ = [
    "FrequencyTable",
    "read_bigram_counts",
    "read_unigram_counts",
    "BigramBuildResult",
    "build_bigram_table",
    "pack_key",
    "unpack_key",
    "OOV_ID",
    "TermIndex",
    "build_term_index",
    "compute_weights",
    "neg_log_weight",
]
