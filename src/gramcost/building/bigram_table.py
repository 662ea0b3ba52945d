"""Bigram weights packed into a static hash table keyed by id pairs."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

from ..structures.static_hashtable import StaticHashTable
from .aggregate import Bigram, FrequencyTable
from .term_index import TermIndex
from .weights import neg_log_weight

logger = logging.getLogger(__name__)

ID_LIMIT = 1 << 31
_LOW_MASK = 0xFFFFFFFF


def pack_key(left_id: int, right_id: int) -> int:
    for term_id in (left_id, right_id):
        if not 0 < term_id < ID_LIMIT:
            raise ValueError(f"Term id out of range [1, 2**31): {term_id}")
    return (left_id << 32) | right_id


def unpack_key(key: int) -> Tuple[int, int]:
    return key >> 32, key & _LOW_MASK


@dataclass(frozen=True)
class BigramBuildResult:
    table: StaticHashTable
    retained: int
    dropped: int


def build_bigram_table(bigrams: FrequencyTable[Bigram], index: TermIndex) -> BigramBuildResult:
    """Resolve each pair through `index` and build the table in one shot.

    Pairs with a term missing from the index are dropped. The weight
    transform only runs when at least one pair survives.
    """
    keys: List[int] = []
    values: List[float] = []
    dropped = 0
    for (left, right), count in bigrams.sorted_items():
        left_id = index.get(left, -1)
        right_id = index.get(right, -1)
        if left_id > 0 and right_id > 0:
            keys.append(pack_key(left_id, right_id))
            values.append(neg_log_weight(count, bigrams.total))
        else:
            dropped += 1

    table = StaticHashTable.build(keys, values)
    if dropped:
        logger.info("Dropped %d bigram(s) with out-of-vocabulary terms", dropped)
    return BigramBuildResult(table=table, retained=len(keys), dropped=dropped)
