"""Logging setup shared by the gramcost commands.

Stage lines ("Loading unigram data ... OK") go to stdout; log records go to
stderr so the two never interleave on one stream.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "GRAMCOST_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_log_level(level: Optional[str] = None) -> int:
    """Explicit level, else $GRAMCOST_LOG_LEVEL, else WARNING; unknown names fall back to WARNING."""
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    if name not in LOG_LEVELS:
        return logging.WARNING
    return getattr(logging, name)


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=resolve_log_level(level), format=_FORMAT, stream=sys.stderr)
