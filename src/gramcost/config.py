"""Build configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

UNIGRAM_INDEX_FILE = "unigram.idx"
UNIGRAM_DATA_FILE = "unigram.bin"
BIGRAM_FILE = "bigram.bin"


@dataclass(frozen=True)
class ArtifactNames:
    unigram_index: str = UNIGRAM_INDEX_FILE
    unigram_data: str = UNIGRAM_DATA_FILE
    bigram: str = BIGRAM_FILE

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "ArtifactNames":
        defaults = cls()
        return cls(
            unigram_index=str(payload.get("unigram_index", defaults.unigram_index)),
            unigram_data=str(payload.get("unigram_data", defaults.unigram_data)),
            bigram=str(payload.get("bigram", defaults.bigram)),
        )


@dataclass(frozen=True)
class BuildConfig:
    output_dir: Path = Path(".")
    names: ArtifactNames = field(default_factory=ArtifactNames)
    progress: bool = False

    def path_for(self, name: str) -> Path:
        return self.output_dir / name

    @property
    def unigram_index_path(self) -> Path:
        return self.path_for(self.names.unigram_index)

    @property
    def unigram_data_path(self) -> Path:
        return self.path_for(self.names.unigram_data)

    @property
    def bigram_path(self) -> Path:
        return self.path_for(self.names.bigram)


def load_config(path: str | None) -> dict[str, Any]:
    if not path:
        return {}
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")
    payload = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"Config must be a mapping: {config_path}")
    return extract_gram_config(payload)


def extract_gram_config(payload: dict[str, Any]) -> dict[str, Any]:
    if "gram" in payload and isinstance(payload["gram"], dict):
        return payload["gram"]
    return payload


def resolve_arg(value: Any, config_value: Any, default: Any) -> Any:
    if value is not None:
        return value
    if config_value is not None:
        return config_value
    return default


def build_config_from(
    config_values: dict[str, Any],
    *,
    output_dir: str | None = None,
    progress: bool | None = None,
) -> BuildConfig:
    """Merge CLI values over YAML values over defaults."""
    names = config_values.get("names") or {}
    if not isinstance(names, dict):
        raise ValueError("Config 'names' must be a mapping.")
    return BuildConfig(
        output_dir=Path(resolve_arg(output_dir, config_values.get("output_dir"), ".")),
        names=ArtifactNames.from_dict(names),
        progress=bool(resolve_arg(progress, config_values.get("progress"), False)),
    )
