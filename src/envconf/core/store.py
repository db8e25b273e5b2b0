"""
Environment configuration store.

A ``ConfigStore`` maps environment names to ``Env`` records and knows the
file it was loaded from. Lookups and updates merge three sources, highest
priority last:

1. The stored (or initial) record
2. Process environment variables, bound once at construction
3. Explicit caller overrides, in argument order

Fields still unset afterwards fall back to the store's defaults. Saving
drops undefined entries and strips values equal to the defaults so the
file only records what differs.
"""
from __future__ import annotations

import logging
import os
from dataclasses import replace
from pathlib import Path
from typing import Dict, Mapping, Optional

from .codec import decode_envs, encode_envs, format_for_ext, format_for_path
from .env import DEFAULT, Env, env_from_environ, merge_env
from .exceptions import (
    EnvconfError,
    EnvDoesNotExistError,
    EnvNotDefinedError,
    EnvValidationError,
    InvalidNameError,
    NoEnvironmentsDefinedError,
    ValidationFailedError,
)
from .paths import search_config_path
from .utils.io import read_text, write_text

logger = logging.getLogger(__name__)


class ConfigStore:
    """Named environments backed by a YAML or JSON file.

    Not thread-safe: callers sharing a store across threads must serialize
    access themselves.
    """

    def __init__(
        self,
        path: os.PathLike[str] | str,
        *,
        environ: Optional[Mapping[str, str]] = None,
        env_prefix: str = "",
        defaults: Env = DEFAULT,
    ) -> None:
        """Build a blank store.

        Args:
            path: File this store loads from and saves to; may not exist yet.
            environ: Variables to bind instead of ``os.environ``.
            env_prefix: Prefix prepended to every bound variable name.
            defaults: Fallback record for fields nothing else sets.
        """
        self.envs: Dict[str, Optional[Env]] = {}
        self._path = Path(path)
        self._defaults = defaults
        self._os_env = env_from_environ(environ, prefix=env_prefix)
        if self._os_env.set_fields():
            logger.debug("Bound process environment fields: %s", ", ".join(self._os_env.set_fields()))

    @classmethod
    def load(cls, path: os.PathLike[str] | str, **kwargs) -> "ConfigStore":
        """Build a store and populate it from ``path``.

        Errors raised while reading the file (``EnvconfError`` and
        ``OSError``) carry the partially built store as ``exc.store``.
        Errors from constructing the store itself, such as a ``TypeError``
        for an unknown keyword, propagate without it.

        Raises:
            ConfigNotFoundError: No supported file matches ``path``.
            InvalidFormatError: The file does not decode.
            ValidationFailedError: One or more environments break a rule.
            OSError: The file exists but could not be read.
        """
        store = cls(path, **kwargs)
        try:
            store.read()
        except (EnvconfError, OSError) as exc:
            exc.store = store  # type: ignore[attr-defined]
            raise
        return store

    @property
    def path(self) -> Path:
        return self._path

    @property
    def os_env(self) -> Env:
        """Snapshot of process environment values taken at construction."""
        return self._os_env

    @property
    def defaults(self) -> Env:
        return self._defaults

    def __contains__(self, name: object) -> bool:
        return name in self.envs

    def __len__(self) -> int:
        return len(self.envs)

    def read(self) -> None:
        """Resolve, read and decode this store's file, then validate.

        A file that vanishes between resolution and reading leaves the
        store empty rather than failing.
        """
        found, ext = search_config_path(self._path)
        fmt = format_for_ext(ext)

        try:
            content = read_text(found)
        except FileNotFoundError:
            logger.debug("Config file %s disappeared before reading; starting empty", found)
        else:
            self.envs = decode_envs(content, fmt)
            logger.debug("Loaded %d environment(s) from %s", len(self.envs), found)

        self.validate()

    def validate(self) -> None:
        """Validate every defined environment.

        Undefined entries are skipped.

        Raises:
            ValidationFailedError: Carrying the messages of every failing
                environment.
        """
        messages = []
        for name, env in self.envs.items():
            if env is None:
                continue
            if env.name != name:
                env = replace(env, name=name)
            try:
                env.validate(self._defaults)
            except EnvValidationError as exc:
                messages.extend(exc.messages)

        if messages:
            raise ValidationFailedError(messages)

    def set(self, name: str, initial: Env, *overrides: Env) -> Env:
        """Merge and store an environment, then validate it.

        The merged record is stored before validation, so a failing record
        is still kept under ``name``.

        Raises:
            InvalidNameError: If ``name`` is empty.
            EnvValidationError: If the stored record breaks a rule; ``.env``
                is the stored record.
        """
        if not name:
            raise InvalidNameError()

        env = merge_env(name, initial, self._os_env, *overrides, defaults=self._defaults)
        self.envs[name] = env
        env.validate(self._defaults)
        return env

    def get(self, name: str, *overrides: Env) -> Env:
        """Return the merged view of a stored environment without storing it.

        Raises:
            EnvDoesNotExistError: If ``name`` is unknown.
            EnvNotDefinedError: If ``name`` is declared but not configured.
        """
        if name not in self.envs:
            raise EnvDoesNotExistError(name)
        env = self.envs[name]
        if env is None:
            raise EnvNotDefinedError(name)
        return merge_env(name, env, self._os_env, *overrides, defaults=self._defaults)

    def save(self) -> None:
        """Write defined environments to this store's path.

        Undefined entries are removed and values equal to the defaults are
        cleared before writing.

        Raises:
            NoEnvironmentsDefinedError: If nothing is left to write.
        """
        for name in list(self.envs):
            env = self.envs[name]
            if env is None:
                logger.debug("Dropping undefined environment %r before save", name)
                del self.envs[name]
                continue
            self.envs[name] = env.without_defaults(self._defaults)

        if not self.envs:
            raise NoEnvironmentsDefinedError(str(self._path))

        fmt = format_for_path(self._path)
        write_text(self._path, encode_envs(self.envs, fmt))  # type: ignore[arg-type]
        logger.info("Saved %d environment(s) to %s", len(self.envs), self._path)


__all__ = ["ConfigStore"]
