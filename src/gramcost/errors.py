"""Error types raised by the build pipeline."""

from __future__ import annotations

from pathlib import Path


class GramError(Exception):
    """Base class for failures that abort a build."""


class GramIOError(GramError):
    """Open, read or write failure on a corpus or artifact file."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(f"{message}: {path}")
        self.path = Path(path)


class UsageError(GramError):
    pass


class EmptyCorpusError(UsageError):
    """Weights were requested for a corpus whose total count is not positive."""
