"""Frequency aggregation over line-oriented count corpora."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

from tqdm import tqdm

from ..errors import GramIOError

logger = logging.getLogger(__name__)

K = TypeVar("K")

Bigram = Tuple[str, str]

# ASCII whitespace only; U+00A0, U+3000 and friends stay inside a term.
_FIELD_SEP = re.compile(r"[ \t\n\r\f\v]+")
_ASCII_WS = " \t\n\r\f\v"


@dataclass
class FrequencyTable(Generic[K]):
    """Accumulated counts per key plus the grand total of accepted counts."""

    counts: Dict[K, float] = field(default_factory=dict)
    total: float = 0
    skipped: int = 0

    def add(self, key: K, count: float) -> None:
        self.counts[key] = self.counts.get(key, 0) + count
        self.total += count

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, key: object) -> bool:
        return key in self.counts

    def sorted_items(self) -> List[Tuple[K, float]]:
        return sorted(self.counts.items())


def split_fields(line: str) -> List[str]:
    stripped = line.strip(_ASCII_WS)
    if not stripped:
        return []
    return _FIELD_SEP.split(stripped)


def parse_unigram_line(line: str) -> Optional[Tuple[str, float]]:
    """Parse `term count`; returns None for lines that do not fit."""
    fields = split_fields(line)
    if len(fields) < 2:
        return None
    try:
        count = float(fields[1])
    except ValueError:
        return None
    if not math.isfinite(count):
        return None
    return fields[0], count


def parse_bigram_line(line: str) -> Optional[Tuple[Bigram, int]]:
    """Parse `left right count`; returns None for lines that do not fit."""
    fields = split_fields(line)
    if len(fields) < 3:
        return None
    try:
        count = int(fields[2])
    except ValueError:
        return None
    return (fields[0], fields[1]), count


def _iter_lines(path: Path, progress: bool, desc: str) -> Iterator[str]:
    with path.open("rb") as handle:
        bar = None
        if progress:
            bar = tqdm(
                total=path.stat().st_size,
                desc=desc,
                unit="B",
                unit_scale=True,
                dynamic_ncols=True,
            )
        try:
            for raw in handle:
                if bar is not None:
                    bar.update(len(raw))
                yield raw.decode("utf-8")
        finally:
            if bar is not None:
                bar.close()


def _aggregate(
    path: str | Path,
    parse: Callable[[str], Optional[Tuple[K, float]]],
    progress: bool,
    desc: str,
) -> FrequencyTable[K]:
    path = Path(path)
    table: FrequencyTable[K] = FrequencyTable()
    try:
        for line in _iter_lines(path, progress, desc):
            parsed = parse(line)
            if parsed is None:
                if split_fields(line):
                    table.skipped += 1
                continue
            key, count = parsed
            table.add(key, count)
    except OSError as exc:
        raise GramIOError(f"Unable to read {desc} file ({exc.strerror})", path) from exc
    except UnicodeDecodeError as exc:
        raise GramIOError(f"Invalid UTF-8 in {desc} file ({exc.reason})", path) from exc

    if table.skipped:
        logger.warning("Skipped %d malformed line(s) in %s", table.skipped, path)
    logger.info("Aggregated %d %s entries (total=%s) from %s", len(table), desc, table.total, path)
    return table


def read_unigram_counts(path: str | Path, progress: bool = False) -> FrequencyTable[str]:
    return _aggregate(path, parse_unigram_line, progress, "unigram")


def read_bigram_counts(path: str | Path, progress: bool = False) -> FrequencyTable[Bigram]:
    return _aggregate(path, parse_bigram_line, progress, "bigram")
