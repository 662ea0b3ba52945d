"""gramcost command-line entrypoint."""

from __future__ import annotations

import argparse

from .. import __version__
from . import dict_cmd, gram


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gramcost",
        description="Build unigram/bigram cost artifacts from frequency corpora.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gram.add_parser(subparsers)
    dict_cmd.add_parser(subparsers)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
