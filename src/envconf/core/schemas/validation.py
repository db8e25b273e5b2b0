"""Schema validation for environment records.

Rules live in a bundled JSON Schema expressed as YAML
(``envconf/data/schemas/``). Validation collects every violation so a
caller sees all problems of a record at once.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, List

from jsonschema import Draft202012Validator

from envconf.data import read_yaml

ENV_SCHEMA = "env.schema.yaml"


@lru_cache(maxsize=8)
def _validator(schema_name: str) -> Draft202012Validator:
    schema = read_yaml("schemas", schema_name)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema {schema_name} must be a YAML mapping")
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def iter_violations(payload: Dict[str, Any], schema_name: str = ENV_SCHEMA) -> List[str]:
    """Return one ``"<field>: <message>"`` string per schema violation.

    Violations are ordered by field path so messages are stable.
    """
    errors = sorted(
        _validator(schema_name).iter_errors(payload),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    messages: List[str] = []
    for err in errors:
        field = ".".join(str(p) for p in err.absolute_path) or "<root>"
        messages.append(f"{field}: {err.message}")
    return messages


__all__ = ["ENV_SCHEMA", "iter_violations"]
