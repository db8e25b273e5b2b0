from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from envconf.core.utils.io import ensure_parent_dir

_PACKAGE_LOGGER = "envconf"
_CONFIGURED_KEY: Optional[str] = None
_ENVCONF_HANDLER: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Optional[Path] = None, level: str = "INFO") -> logging.Logger:
    """Attach one handler to the ``envconf`` logger.

    Writes to ``log_path`` when given, otherwise to stderr. Idempotent
    per-process: calling again with the same target only updates the level.
    """
    global _CONFIGURED_KEY, _ENVCONF_HANDLER

    pkg_logger = logging.getLogger(_PACKAGE_LOGGER)
    numeric = _level_from_name(level)
    key = str(Path(log_path).resolve()) if log_path is not None else "<stderr>"

    if _CONFIGURED_KEY == key and _ENVCONF_HANDLER is not None:
        pkg_logger.setLevel(numeric)
        _ENVCONF_HANDLER.setLevel(numeric)
        return pkg_logger

    _remove_handler(pkg_logger)

    if log_path is not None:
        ensure_parent_dir(Path(key))
        handler: logging.Handler = logging.FileHandler(key, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(numeric)

    _ENVCONF_HANDLER = handler
    _CONFIGURED_KEY = key
    return pkg_logger


def _remove_handler(pkg_logger: logging.Logger) -> None:
    global _ENVCONF_HANDLER
    if _ENVCONF_HANDLER is None:
        return
    pkg_logger.removeHandler(_ENVCONF_HANDLER)
    _ENVCONF_HANDLER.close()
    _ENVCONF_HANDLER = None


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: drop the envconf-installed handler."""
    global _CONFIGURED_KEY
    pkg_logger = logging.getLogger(_PACKAGE_LOGGER)
    _remove_handler(pkg_logger)
    pkg_logger.setLevel(logging.NOTSET)
    _CONFIGURED_KEY = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
