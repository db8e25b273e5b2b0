"""I/O utilities for envconf.

- Core: atomic writes, text reads
- JSON/YAML: string parse and dump helpers for the config codec
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_parent_dir,
    read_text,
    write_text,
)
from .json import (
    DEFAULT_JSON_CONFIG,
    dump_json_string,
    parse_json_string,
)
from .yaml import (
    dump_yaml_string,
    parse_yaml_string,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "atomic_write",
    "read_text",
    "write_text",
    # json
    "DEFAULT_JSON_CONFIG",
    "parse_json_string",
    "dump_json_string",
    # yaml
    "parse_yaml_string",
    "dump_yaml_string",
]
