from __future__ import annotations

import stat
from pathlib import Path

import pytest

from envconf.core.utils.io import atomic_write, read_text, write_text


def test_write_text_creates_parents_and_roundtrips(tmp_path: Path) -> None:
    out = tmp_path / "nested" / "envs.yml"
    write_text(out, "dev: {}\n")
    assert read_text(out) == "dev: {}\n"


def test_atomic_write_gives_new_files_default_mode_and_leaves_no_temp_files(tmp_path: Path) -> None:
    out = tmp_path / "envs.yml"
    write_text(out, "a")
    write_text(out, "b")

    assert out.read_text(encoding="utf-8") == "b"
    assert stat.S_IMODE(out.stat().st_mode) == 0o644
    assert [p.name for p in tmp_path.iterdir()] == ["envs.yml"]


def test_atomic_write_keeps_existing_file_mode(tmp_path: Path) -> None:
    out = tmp_path / "envs.yml"
    write_text(out, "a")
    out.chmod(0o600)

    write_text(out, "b")

    assert out.read_text(encoding="utf-8") == "b"
    assert stat.S_IMODE(out.stat().st_mode) == 0o600


def test_atomic_write_through_symlink_updates_target(tmp_path: Path) -> None:
    real_dir = tmp_path / "real"
    real_dir.mkdir()
    target = real_dir / "envs.yml"
    write_text(target, "old")
    link = tmp_path / "envs.yml"
    link.symlink_to(target)

    write_text(link, "new")

    assert link.is_symlink()
    assert target.read_text(encoding="utf-8") == "new"
    assert [p.name for p in real_dir.iterdir()] == ["envs.yml"]


def test_failed_write_keeps_original_content(tmp_path: Path) -> None:
    out = tmp_path / "envs.yml"
    write_text(out, "original")

    def _boom(f) -> None:
        f.write("partial")
        raise RuntimeError("fail mid-write")

    with pytest.raises(RuntimeError):
        atomic_write(out, _boom)

    assert out.read_text(encoding="utf-8") == "original"
    assert [p.name for p in tmp_path.iterdir()] == ["envs.yml"]


def test_read_text_missing_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_text(tmp_path / "nope.yml")
