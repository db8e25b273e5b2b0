"""envconf core: environment records, the config store and their I/O."""
from __future__ import annotations

from .env import DEFAULT, Env, env_from_environ, merge_env
from .exceptions import (
    ConfigNotFoundError,
    EnvconfError,
    EnvDoesNotExistError,
    EnvNotDefinedError,
    EnvValidationError,
    InvalidFormatError,
    InvalidNameError,
    NoEnvironmentsDefinedError,
    ValidationFailedError,
)
from .paths import PathResolver, search_config_path
from .store import ConfigStore

__all__ = [
    "DEFAULT",
    "Env",
    "env_from_environ",
    "merge_env",
    "ConfigStore",
    "PathResolver",
    "search_config_path",
    "EnvconfError",
    "InvalidNameError",
    "ConfigNotFoundError",
    "InvalidFormatError",
    "EnvDoesNotExistError",
    "EnvNotDefinedError",
    "NoEnvironmentsDefinedError",
    "ValidationFailedError",
    "EnvValidationError",
]
