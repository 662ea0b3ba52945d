"""Loading built artifacts for cost lookups."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from ..building.bigram_table import pack_key
from ..building.term_index import OOV_ID, TermIndex
from ..config import ArtifactNames
from ..errors import GramIOError
from ..structures.static_hashtable import StaticHashTable


def load_weight_array(path: str | Path) -> np.ndarray:
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise GramIOError(f"Unable to read weight array ({exc.strerror})", path) from exc
    if len(data) % 4:
        raise GramIOError(f"Weight array size {len(data)} is not a multiple of 4", path)
    return np.frombuffer(data, dtype="<f4")


@dataclass
class GramModel:
    """Read-only view over the unigram and bigram artifacts."""

    index: TermIndex
    weights: np.ndarray
    bigrams: StaticHashTable

    @classmethod
    def load(cls, directory: str | Path, names: ArtifactNames | None = None) -> "GramModel":
        directory = Path(directory)
        names = names or ArtifactNames()
        return cls(
            index=TermIndex.load(directory / names.unigram_index),
            weights=load_weight_array(directory / names.unigram_data),
            bigrams=StaticHashTable.load(directory / names.bigram),
        )

    def term_id(self, term: str) -> int:
        term_id = self.index.get(term, -1)
        return term_id if term_id > 0 else OOV_ID

    def unigram_cost(self, term: str) -> float:
        return float(self.weights[self.term_id(term)])

    def bigram_cost(self, left: str, right: str, default: Optional[float] = None) -> Optional[float]:
        left_id = self.term_id(left)
        right_id = self.term_id(right)
        if left_id == OOV_ID or right_id == OOV_ID:
            return default
        return self.bigrams.get(pack_key(left_id, right_id), default)
