"""Environment records and the merge rule.

An ``Env`` is one named configuration record. Every bindable field uses
its dataclass default as the "unset" marker, so a field counts as set only
when it differs from that default. This means an override can never reset
a field back to zero; merging ``Env(timeout=30)`` with ``Env(timeout=0)``
keeps ``timeout=30``.

Merge precedence (lowest to highest):
1. Package or store defaults (only for fields nothing else set)
2. The base record
3. Overrides, in argument order
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field, fields, replace
from decimal import ROUND_HALF_UP, Decimal
from functools import lru_cache
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, get_type_hints

from .exceptions import EnvValidationError, InvalidNameError
from .schemas import iter_violations

logger = logging.getLogger(__name__)

_DURATION_PART_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)", re.ASCII)
_DURATION_UNITS = {
    "ns": Decimal("1e-9"),
    "us": Decimal("1e-6"),
    "µs": Decimal("1e-6"),
    "μs": Decimal("1e-6"),
    "ms": Decimal("1e-3"),
    "s": Decimal(1),
    "m": Decimal(60),
    "h": Decimal(3600),
}


@dataclass(frozen=True)
class Env:
    """A single named configuration record.

    Fields carrying an ``env`` metadata entry are persisted, bound from the
    process environment and merged. ``name`` is bookkeeping only.
    """

    directory: str = field(default="", metadata={"env": "DIRECTORY"})
    timeout: int = field(default=0, metadata={"env": "TIMEOUT", "duration": True})
    name: str = field(default="", compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], name: str = "") -> "Env":
        """Build an Env from a decoded mapping.

        Keys are matched case-insensitively against field names; unknown
        keys are ignored. Values are taken as-is and checked by
        ``validate``.
        """
        by_key = {f.name.lower(): f.name for f in setting_fields()}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            attr = by_key.get(str(key).lower())
            if attr is None:
                logger.debug("Ignoring unknown key %r in environment %r", key, name)
                continue
            if value is None:
                continue
            values[attr] = value
        return cls(name=name, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the set fields keyed by field name; unset fields are omitted."""
        return {f.name: getattr(self, f.name) for f in setting_fields() if self.is_set(f.name)}

    def is_set(self, attr: str) -> bool:
        return getattr(self, attr) != _zero(attr)

    def set_fields(self) -> Tuple[str, ...]:
        return tuple(f.name for f in setting_fields() if self.is_set(f.name))

    def with_defaults(self, defaults: Optional["Env"] = None) -> "Env":
        """Return a copy with every unset field filled from ``defaults``."""
        defaults = DEFAULT if defaults is None else defaults
        filled = {
            f.name: getattr(defaults, f.name)
            for f in setting_fields()
            if not self.is_set(f.name)
        }
        return replace(self, **filled) if filled else self

    def without_defaults(self, defaults: Optional["Env"] = None) -> "Env":
        """Return a copy with every field equal to ``defaults`` reset to zero."""
        defaults = DEFAULT if defaults is None else defaults
        cleared = {
            f.name: _zero(f.name)
            for f in setting_fields()
            if getattr(self, f.name) == getattr(defaults, f.name)
        }
        return replace(self, **cleared) if cleared else self

    def validate(self, defaults: Optional["Env"] = None) -> None:
        """Check field rules against the defaulted view of this record.

        Raises:
            EnvValidationError: With one message per violated rule.
        """
        filled = self.with_defaults(defaults)
        payload = {f.name: getattr(filled, f.name) for f in setting_fields()}
        label = self.name or "<unnamed>"
        messages = [f"{label}: {msg}" for msg in iter_violations(payload)]
        if messages:
            raise EnvValidationError(messages, env=self)


def setting_fields() -> Tuple[Any, ...]:
    """Return the dataclass fields that take part in merging and persistence."""
    return tuple(f for f in fields(Env) if "env" in f.metadata)


def _zero(attr: str) -> Any:
    for f in fields(Env):
        if f.name == attr:
            return f.default
    raise AttributeError(attr)


@lru_cache(maxsize=1)
def _field_types() -> Dict[str, Any]:
    return get_type_hints(Env)


# Static fallback used when nothing else supplies a value.
DEFAULT = Env(directory=".", timeout=30)


def merge_env(
    name: str,
    base: Env,
    *overrides: Env,
    defaults: Optional[Env] = None,
) -> Env:
    """Fold ``overrides`` onto ``base`` and fill the gaps from ``defaults``.

    Each override is applied in order; its set fields replace the
    accumulated value and its unset fields leave it untouched. Inputs are
    never mutated.

    Raises:
        InvalidNameError: If ``name`` is empty.
    """
    if not name:
        raise InvalidNameError()

    values = {f.name: getattr(base, f.name) for f in setting_fields()}
    for override in overrides:
        for attr in override.set_fields():
            values[attr] = getattr(override, attr)

    return Env(name=name, **values).with_defaults(defaults)


def parse_duration(raw: str) -> int:
    """Parse a duration such as ``"90"``, ``"5m"``, ``"1h30m"`` or ``"1.5h"``.

    A bare integer counts as seconds. Otherwise the value is a sequence of
    ``<number><unit>`` parts (units ``ns``, ``us``, ``ms``, ``s``, ``m``,
    ``h``; fractions allowed). The total is rounded to whole seconds.
    """
    text = raw.strip().lower()
    if text.isdigit():
        return int(text)
    if not text:
        raise ValueError(f"invalid duration {raw!r}")

    total = Decimal(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART_RE.match(text, pos)
        if not match:
            raise ValueError(f"invalid duration {raw!r}")
        amount, unit = match.groups()
        total += Decimal(amount) * _DURATION_UNITS[unit]
        pos = match.end()
    return int(total.to_integral_value(rounding=ROUND_HALF_UP))


def _iter_bound_values(environ: Mapping[str, str], prefix: str) -> Iterator[Tuple[str, Any]]:
    upper = {key.upper(): value for key, value in environ.items()}
    types = _field_types()
    for f in setting_fields():
        key = f"{prefix}{f.metadata['env']}".upper()
        if key not in upper:
            continue
        raw = upper[key]
        if types.get(f.name) is int:
            try:
                value: Any = parse_duration(raw) if f.metadata.get("duration") else int(raw)
            except ValueError:
                logger.debug("Ignoring unparseable %s=%r", key, raw)
                continue
        else:
            value = raw
        yield f.name, value


def env_from_environ(environ: Optional[Mapping[str, str]] = None, prefix: str = "") -> Env:
    """Bind process environment variables into an Env.

    Variable names come from each field's ``env`` metadata, optionally
    prefixed, and are matched case-insensitively. Missing or malformed
    variables leave the field unset.
    """
    source = os.environ if environ is None else environ
    return Env(**dict(_iter_bound_values(source, prefix)))


__all__ = [
    "Env",
    "DEFAULT",
    "merge_env",
    "env_from_environ",
    "parse_duration",
    "setting_fields",
]
