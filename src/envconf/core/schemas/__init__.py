from __future__ import annotations

from .validation import ENV_SCHEMA, iter_violations

__all__ = ["ENV_SCHEMA", "iter_violations"]
