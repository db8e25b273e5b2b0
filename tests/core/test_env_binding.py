from __future__ import annotations

import pytest

from envconf.core.env import Env, env_from_environ, parse_duration


def test_binds_field_variables_by_name() -> None:
    env = env_from_environ({"DIRECTORY": "/srv/app", "TIMEOUT": "15", "HOME": "/root"})
    assert env == Env(directory="/srv/app", timeout=15)


def test_variable_names_match_case_insensitively() -> None:
    env = env_from_environ({"directory": "/lower", "Timeout": "8"})
    assert env == Env(directory="/lower", timeout=8)


def test_missing_variables_leave_fields_unset() -> None:
    assert env_from_environ({}) == Env()


def test_malformed_values_are_ignored() -> None:
    env = env_from_environ({"TIMEOUT": "soon", "DIRECTORY": "/ok"})
    assert env == Env(directory="/ok")


def test_prefix_selects_prefixed_variables_only() -> None:
    environ = {"APP_TIMEOUT": "15", "TIMEOUT": "99", "DIRECTORY": "/plain"}
    env = env_from_environ(environ, prefix="APP_")
    assert env == Env(timeout=15)


def test_timeout_accepts_duration_suffixes() -> None:
    assert env_from_environ({"TIMEOUT": "2m"}).timeout == 120
    assert env_from_environ({"TIMEOUT": "45s"}).timeout == 45


def test_reads_process_environment_by_default(clean_environ: pytest.MonkeyPatch) -> None:
    clean_environ.setenv("TIMEOUT", "12")
    assert env_from_environ().timeout == 12


@pytest.mark.parametrize(
    "raw, seconds",
    [
        ("90", 90),
        ("90s", 90),
        ("5m", 300),
        ("1h", 3600),
        (" 2M ", 120),
        ("1h30m", 5400),
        ("1.5h", 5400),
        ("2m30s", 150),
        ("1.5m", 90),
        ("1500ms", 2),
        ("400ms", 0),
        ("1h0m1s", 3601),
    ],
)
def test_parse_duration(raw: str, seconds: int) -> None:
    assert parse_duration(raw) == seconds


def test_timeout_accepts_compound_durations() -> None:
    assert env_from_environ({"TIMEOUT": "1h30m"}).timeout == 5400


@pytest.mark.parametrize("raw", ["", "1d", "-5", "m", "1.5", "1h30", "1h 30m", "h1"])
def test_parse_duration_rejects_unknown_forms(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_duration(raw)
