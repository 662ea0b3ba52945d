"""Two-phase unigram/bigram artifact build."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .artifacts.writer import SavedArtifacts, save_gram_artifacts
from .building.aggregate import Bigram, FrequencyTable, read_bigram_counts, read_unigram_counts
from .building.bigram_table import build_bigram_table
from .building.term_index import build_term_index
from .building.weights import compute_weights
from .config import BuildConfig
from .errors import EmptyCorpusError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GramBuildReport:
    unigram_entries: int
    bigram_entries: int
    vocab_size: int
    bigrams_retained: int
    bigrams_dropped: int
    skipped_lines: int
    artifacts: SavedArtifacts


@dataclass
class GramBuilder:
    """Aggregate both corpora completely, then derive and save every artifact.

    `load()` is phase one and `build()` is phase two. The unigram and bigram
    totals are only final once `load()` returns, so weights are never
    computed while reading.
    """

    config: BuildConfig = field(default_factory=BuildConfig)
    unigrams: Optional[FrequencyTable[str]] = None
    bigrams: Optional[FrequencyTable[Bigram]] = None

    def load_unigrams(self, path: str | Path) -> FrequencyTable[str]:
        self.unigrams = read_unigram_counts(path, progress=self.config.progress)
        return self.unigrams

    def load_bigrams(self, path: str | Path) -> FrequencyTable[Bigram]:
        self.bigrams = read_bigram_counts(path, progress=self.config.progress)
        return self.bigrams

    def load(self, unigram_path: str | Path, bigram_path: str | Path) -> None:
        self.load_unigrams(unigram_path)
        self.load_bigrams(bigram_path)

    def build(self) -> GramBuildReport:
        if self.unigrams is None or self.bigrams is None:
            raise RuntimeError("GramBuilder.build() called before load().")
        if self.unigrams.total <= 0:
            raise EmptyCorpusError("Unigram corpus is empty; nothing to index.")

        weights = compute_weights(self.unigrams)
        index, weight_array = build_term_index(weights)
        result = build_bigram_table(self.bigrams, index)
        saved = save_gram_artifacts(self.config, index, weight_array, result.table)
        logger.info(
            "Saved %d terms and %d bigrams to %s",
            len(index),
            result.retained,
            self.config.output_dir,
        )
        return GramBuildReport(
            unigram_entries=len(self.unigrams),
            bigram_entries=len(self.bigrams),
            vocab_size=len(index),
            bigrams_retained=result.retained,
            bigrams_dropped=result.dropped,
            skipped_lines=self.unigrams.skipped + self.bigrams.skipped,
            artifacts=saved,
        )


def build_gram_artifacts(
    unigram_path: str | Path,
    bigram_path: str | Path,
    config: BuildConfig | None = None,
) -> GramBuildReport:
    builder = GramBuilder(config or BuildConfig())
    builder.load(unigram_path, bigram_path)
    return builder.build()
