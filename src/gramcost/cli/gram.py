"""Unigram/bigram artifact build command."""

from __future__ import annotations

import argparse
import sys

import yaml

from ..config import build_config_from, load_config
from ..errors import GramError
from ..pipeline import GramBuilder
from .common import add_logging_args, setup_logging_from_args


def add_parser(subparsers: argparse._SubParsersAction) -> argparse.ArgumentParser:
    parser = subparsers.add_parser("gram", help="Build unigram index, unigram weights and bigram table.")
    parser.add_argument("unigram_file", help="Text file of `term count` lines.")
    parser.add_argument("bigram_file", help="Text file of `left right count` lines.")
    parser.add_argument("--output-dir", default=None, help="Directory for the artifacts (default: .).")
    parser.add_argument("--config", default=None, help="Optional YAML build config.")
    parser.add_argument(
        "--progress",
        action="store_true",
        default=None,
        help="Show tqdm progress while reading corpora.",
    )
    add_logging_args(parser)
    parser.set_defaults(func=run)
    return parser


def _stage(message: str) -> None:
    print(f"{message} ...", end="", flush=True)


def run(args: argparse.Namespace) -> int:
    setup_logging_from_args(args)
    try:
        config = build_config_from(
            load_config(args.config),
            output_dir=args.output_dir,
            progress=args.progress,
        )
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"error: invalid config: {exc}", file=sys.stderr)
        return 1

    builder = GramBuilder(config)
    try:
        _stage("Loading unigram data")
        unigrams = builder.load_unigrams(args.unigram_file)
        print(f" OK, {len(unigrams)} entries loaded.")

        _stage("Loading bigram data")
        bigrams = builder.load_bigrams(args.bigram_file)
        print(f" OK, {len(bigrams)} entries loaded.")

        _stage("Saving unigram index, unigram data and bigram table")
        report = builder.build()
    except GramError as exc:
        print()
        print(exc)
        return 1

    print(f" OK, {report.bigrams_retained} bigram entries saved.")
    print("Success!")
    return 0
