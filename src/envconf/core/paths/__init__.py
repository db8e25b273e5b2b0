"""Path utilities for envconf."""
from __future__ import annotations

from .resolver import SUPPORTED_EXTS, PathResolver, search_config_path

__all__ = ["SUPPORTED_EXTS", "PathResolver", "search_config_path"]
