"""JSON string helpers used by the config codec."""
from __future__ import annotations

import json
from typing import Any, Dict

DEFAULT_JSON_CONFIG: Dict[str, Any] = {
    "indent": 2,
    "sort_keys": True,
    "ensure_ascii": False,
}


def parse_json_string(content: str, default: Any = None) -> Any:
    """Parse JSON from a string.

    Blank input returns ``default``; malformed input raises
    ``json.JSONDecodeError``.
    """
    if not content.strip():
        return default
    data = json.loads(content)
    return data if data is not None else default


def dump_json_string(data: Any) -> str:
    """Dump data to a JSON string honoring ``DEFAULT_JSON_CONFIG``."""
    cfg = DEFAULT_JSON_CONFIG
    return json.dumps(
        data,
        indent=cfg["indent"],
        sort_keys=cfg["sort_keys"],
        ensure_ascii=cfg["ensure_ascii"],
    ) + "\n"


__all__ = ["DEFAULT_JSON_CONFIG", "parse_json_string", "dump_json_string"]
