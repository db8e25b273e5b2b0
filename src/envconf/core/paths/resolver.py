"""Config file resolution.

A nominal config path is matched against the supported extensions in a
fixed priority order. A candidate only matches when it exists on disk and
its extension is the one the caller asked for; resolution never falls
back to a sibling file with a different extension.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Tuple

from ..exceptions import ConfigNotFoundError

logger = logging.getLogger(__name__)

SUPPORTED_EXTS: Tuple[str, ...] = ("yml", "yaml", "json")


def search_config_path(config_path: os.PathLike[str] | str) -> Tuple[Path, str]:
    """Return ``(path, ext)`` of the config file matching ``config_path``.

    Raises:
        ConfigNotFoundError: If no supported file with the requested
            extension exists.
    """
    raw = Path(config_path)
    requested = raw.suffix
    stem = raw.name[: len(raw.name) - len(requested)] if requested else raw.name
    for ext in SUPPORTED_EXTS:
        candidate = raw.parent / f"{stem}.{ext}"
        if requested == f".{ext}" and candidate.exists():
            logger.debug("Resolved config %s as %s (%s)", config_path, candidate, ext)
            return candidate, ext
    raise ConfigNotFoundError(str(config_path))


class PathResolver:
    """Namespace for config path resolution helpers."""

    supported_exts = SUPPORTED_EXTS

    @staticmethod
    def resolve(config_path: os.PathLike[str] | str) -> Tuple[Path, str]:
        """Resolve ``config_path`` to an existing file and its format tag."""
        return search_config_path(config_path)


__all__ = ["SUPPORTED_EXTS", "search_config_path", "PathResolver"]
