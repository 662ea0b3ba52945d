"""Dense term ids over a prefix-tree index."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Mapping, Set, Tuple

import numpy as np

from ..structures.trie import TermTrie

logger = logging.getLogger(__name__)

OOV_ID = 0
OOV_WEIGHT = 0.0


class TermIndex:
    """Write-once `term -> id` mapping. Id 0 is reserved for OOV."""

    def __init__(self, trie: TermTrie | None = None) -> None:
        self._trie = trie if trie is not None else TermTrie()
        self._ids: Set[int] = {value for _, value in self._trie.items()}

    def __len__(self) -> int:
        return len(self._trie)

    def __contains__(self, term: str) -> bool:
        return term in self._trie

    @property
    def trie(self) -> TermTrie:
        return self._trie

    def put(self, term: str, term_id: int) -> None:
        if term_id <= OOV_ID:
            raise ValueError(f"Term id must be positive, got {term_id} for {term!r}")
        if term in self._trie:
            raise ValueError(f"Term already indexed: {term!r}")
        if term_id in self._ids:
            raise ValueError(f"Term id already assigned: {term_id}")
        self._trie.put(term, term_id)
        self._ids.add(term_id)

    def get(self, term: str, default: int = -1) -> int:
        return self._trie.get(term, default)

    def items(self) -> Iterator[Tuple[str, int]]:
        return self._trie.items()

    def to_bytes(self) -> bytes:
        return self._trie.to_bytes()

    def save(self, path: str | Path) -> None:
        self._trie.save(path)

    @classmethod
    def load(cls, path: str | Path) -> "TermIndex":
        return cls(TermTrie.load(path))


def build_term_index(weights: Mapping[str, float]) -> Tuple[TermIndex, np.ndarray]:
    """Assign ids 1..N in ascending term order and collect the weight array.

    The returned array is float32 with `array[0] == 0.0` for OOV and
    `array[id]` holding the weight of the term that owns `id`.
    """
    index = TermIndex()
    ordered = [OOV_WEIGHT]
    for term in sorted(weights):
        index.put(term, len(ordered))
        ordered.append(weights[term])
    logger.info("Indexed %d terms", len(index))
    return index, np.asarray(ordered, dtype=np.float32)
