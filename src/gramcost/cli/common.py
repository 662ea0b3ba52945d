from __future__ import annotations

import argparse

from ..utils.logging import LOG_LEVEL_ENV, LOG_LEVELS, configure_logging


def add_logging_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help=f"Log verbosity for build stages (default: ${LOG_LEVEL_ENV} or WARNING).",
    )


def setup_logging_from_args(args: argparse.Namespace) -> None:
    configure_logging(args.log_level)
