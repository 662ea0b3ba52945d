"""gramcost: unigram/bigram cost artifacts for statistical segmenters."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("gramcost")
except PackageNotFoundError:  # pragma: no cover - runtime fallback
    __version__ = "0.0.0"

__all__ = ["__version__"]
