"""YAML string helpers used by the config codec."""
from __future__ import annotations

from typing import Any

import yaml


def parse_yaml_string(content: str, default: Any = None) -> Any:
    """Parse YAML from a string.

    Parser errors propagate as ``yaml.YAMLError``; an empty document
    returns ``default``.
    """
    data = yaml.safe_load(content)
    return data if data is not None else default


def dump_yaml_string(data: Any, sort_keys: bool = True) -> str:
    """Dump data to a block-style YAML string."""
    return yaml.safe_dump(
        data,
        default_flow_style=False,
        sort_keys=sort_keys,
        allow_unicode=True,
    )


__all__ = ["parse_yaml_string", "dump_yaml_string"]
