"""Artifact serialization and loading."""

from .reader import GramModel, load_weight_array
from .writer import SavedArtifacts, save_gram_artifacts, write_artifact, write_weight_array

__all__ = [
    "GramModel",
    "load_weight_array",
    "SavedArtifacts",
    "save_gram_artifacts",
    "write_artifact",
    "write_weight_array",
]
