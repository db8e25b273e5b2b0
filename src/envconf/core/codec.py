"""Encode and decode the environments mapping.

The file format is a top-level mapping of environment name to record. A
null record marks an environment that is declared but not configured.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from .env import Env
from .exceptions import InvalidFormatError
from .utils.io import dump_json_string, dump_yaml_string, parse_json_string, parse_yaml_string

logger = logging.getLogger(__name__)

FORMAT_YAML = "yaml"
FORMAT_JSON = "json"

_EXT_FORMATS = {"yml": FORMAT_YAML, "yaml": FORMAT_YAML, "json": FORMAT_JSON}

_PARSERS: Dict[str, Callable[[str, Any], Any]] = {
    FORMAT_YAML: parse_yaml_string,
    FORMAT_JSON: parse_json_string,
}
_DUMPERS: Dict[str, Callable[[Any], str]] = {
    FORMAT_YAML: dump_yaml_string,
    FORMAT_JSON: dump_json_string,
}


def format_for_ext(ext: str) -> str:
    """Map a file extension (with or without the dot) to a format tag."""
    try:
        return _EXT_FORMATS[ext.lstrip(".").lower()]
    except KeyError:
        raise ValueError(f"Unsupported config extension: {ext!r}") from None


def format_for_path(path: Path | str) -> str:
    """Return the format a store should persist to; YAML unless ``.json``."""
    suffix = Path(path).suffix.lstrip(".").lower()
    return _EXT_FORMATS.get(suffix, FORMAT_YAML)


def decode_envs(content: str, fmt: str) -> Dict[str, Optional[Env]]:
    """Decode ``content`` into a mapping of name to Env (or None).

    Raises:
        InvalidFormatError: If the content does not parse or is not shaped
            as a mapping of mappings.
    """
    try:
        data = _PARSERS[fmt](content, {})
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise InvalidFormatError(fmt, str(exc)) from exc

    if not isinstance(data, dict):
        raise InvalidFormatError(fmt, f"expected a mapping of environments, got {type(data).__name__}")

    envs: Dict[str, Optional[Env]] = {}
    for key, record in data.items():
        # YAML 1.1 turns keys like ``yes`` or ``~`` into bool/None; only
        # string and integer names survive str() unchanged.
        if isinstance(key, bool) or not isinstance(key, (str, int)):
            raise InvalidFormatError(
                fmt,
                f"environment name {key!r} must be a string, got {type(key).__name__}",
            )
        name = str(key)
        if record is None:
            envs[name] = None
        elif isinstance(record, dict):
            envs[name] = Env.from_dict(record, name=name)
        else:
            raise InvalidFormatError(
                fmt,
                f"environment {name!r} must be a mapping, got {type(record).__name__}",
            )
    logger.debug("Decoded %d environment(s) from %s", len(envs), fmt)
    return envs


def encode_envs(envs: Mapping[str, Env], fmt: str) -> str:
    """Encode defined environments; unset fields are omitted."""
    payload = {name: env.to_dict() for name, env in envs.items()}
    return _DUMPERS[fmt](payload)


__all__ = [
    "FORMAT_YAML",
    "FORMAT_JSON",
    "format_for_ext",
    "format_for_path",
    "decode_envs",
    "encode_envs",
]
