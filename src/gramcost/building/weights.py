"""Negative log-probability weights."""

from __future__ import annotations

import math
from typing import Dict, TypeVar

from ..errors import EmptyCorpusError
from .aggregate import FrequencyTable

K = TypeVar("K")


def neg_log_weight(count: float, total: float) -> float:
    """Return -ln(count / total); non-positive counts cost infinity."""
    if total <= 0:
        raise EmptyCorpusError(f"Total count must be positive, got {total}")
    if count <= 0:
        return math.inf
    return -math.log(count / total)


def compute_weights(table: FrequencyTable[K]) -> Dict[K, float]:
    """Weight every entry of a fully aggregated table."""
    if table.total <= 0:
        raise EmptyCorpusError(
            f"Cannot derive weights from an empty corpus ({len(table)} entries, total={table.total})"
        )
    return {key: neg_log_weight(count, table.total) for key, count in table.counts.items()}
