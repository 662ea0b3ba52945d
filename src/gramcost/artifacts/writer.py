"""Serialization of build artifacts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np

from ..errors import GramIOError

if TYPE_CHECKING:
    from ..building.term_index import TermIndex
    from ..config import BuildConfig
    from ..structures.static_hashtable import StaticHashTable

logger = logging.getLogger(__name__)


def write_artifact(path: str | Path, payload: bytes) -> None:
    """Write `payload` to `path`; the handle is closed on every exit path."""
    path = Path(path)
    try:
        with path.open("wb") as handle:
            handle.write(payload)
    except OSError as exc:
        raise GramIOError(f"Unable to write artifact ({exc.strerror})", path) from exc
    logger.debug("Wrote %d bytes to %s", len(payload), path)


def weight_array_bytes(weights: np.ndarray) -> bytes:
    return np.asarray(weights, dtype="<f4").tobytes()


def write_weight_array(path: str | Path, weights: np.ndarray) -> None:
    write_artifact(path, weight_array_bytes(weights))


@dataclass(frozen=True)
class SavedArtifacts:
    unigram_data: Path
    unigram_index: Path
    bigram: Path


def save_gram_artifacts(
    config: "BuildConfig",
    index: "TermIndex",
    weights: np.ndarray,
    table: "StaticHashTable",
) -> SavedArtifacts:
    """Write weight array, term index and bigram table, stopping at the first failure.

    Files written before a failure are left in place.
    """
    try:
        config.output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise GramIOError(f"Unable to create output directory ({exc.strerror})", config.output_dir) from exc
    saved = SavedArtifacts(
        unigram_data=config.unigram_data_path,
        unigram_index=config.unigram_index_path,
        bigram=config.bigram_path,
    )
    write_weight_array(saved.unigram_data, weights)
    try:
        write_artifact(saved.unigram_index, index.to_bytes())
    except GramIOError as exc:
        reason = getattr(exc.__cause__, "strerror", None) or exc.__cause__
        raise GramIOError(f"Unable to save unigram index data ({reason})", exc.path) from exc
    write_artifact(saved.bigram, table.to_bytes())
    return saved
