"""Standalone term index build command."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

from ..building.aggregate import split_fields
from ..errors import GramIOError
from ..structures.trie import TermTrie
from .common import add_logging_args, setup_logging_from_args

logger = logging.getLogger(__name__)


def add_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("dict", help="Build a term index from `term value` lines.")
    parser.add_argument("input_file", help="Text file of `term value` lines.")
    parser.add_argument("output_file", help="Path of the serialized index.")
    add_logging_args(parser)
    parser.set_defaults(func=run)
    return parser


def parse_entry(line: str) -> Optional[Tuple[str, int]]:
    fields = split_fields(line)
    if len(fields) < 2:
        return None
    try:
        return fields[0], int(fields[1])
    except ValueError:
        return None


def build_dict_index(input_path: str | Path) -> Tuple[TermTrie, int]:
    """Read `term value` pairs into a trie; later duplicates overwrite earlier ones."""
    input_path = Path(input_path)
    trie = TermTrie()
    count = 0
    try:
        with input_path.open("r", encoding="utf-8") as handle:
            for line in handle:
                entry = parse_entry(line)
                if entry is None:
                    if split_fields(line):
                        logger.warning("Skipping malformed line: %r", line.rstrip("\n"))
                    continue
                trie.put(*entry)
                count += 1
    except OSError as exc:
        raise GramIOError(f"unable to open input file ({exc.strerror})", input_path) from exc
    except UnicodeDecodeError as exc:
        raise GramIOError(f"invalid UTF-8 in input file ({exc.reason})", input_path) from exc
    return trie, count


def run(args: argparse.Namespace) -> int:
    setup_logging_from_args(args)
    try:
        trie, count = build_dict_index(args.input_file)
        trie.save(args.output_file)
    except GramIOError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    print(f"save {count} words.")
    return 0
