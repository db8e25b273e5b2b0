import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'envconf'
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


# Variables bound into every store's process-environment snapshot. A developer
# shell exporting TIMEOUT would otherwise change merge results.
_BOUND_ENV_KEYS = {"DIRECTORY", "TIMEOUT"}


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Strip bound variables (any casing) from os.environ for each test."""
    for key in list(os.environ):
        if key.upper() in _BOUND_ENV_KEYS:
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def write_config(tmp_path: Path):
    """Write ``content`` to ``tmp_path / name`` and return the path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
