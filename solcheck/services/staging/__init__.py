"""Artifact staging: temp mirrors, import rewriting, artifact promotion."""

from .imports import rewrite_imports
from .paths import PathMapper, replace_extension, split_path, swap_segment
from .service import StagingService

__all__ = [
    "PathMapper",
    "StagingService",
    "replace_extension",
    "rewrite_imports",
    "split_path",
    "swap_segment",
]
