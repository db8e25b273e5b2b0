from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Sequence

if TYPE_CHECKING:
    from .env import Env


class EnvconfError(Exception):
    """Base exception for envconf."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidNameError(EnvconfError, ValueError):
    """Raised when an environment is set with a blank name."""

    def __init__(
        self,
        message: str = "environment name cannot be blank",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        EnvconfError.__init__(self, message, context=context)


class ConfigNotFoundError(EnvconfError, FileNotFoundError):
    """Raised when no supported config file matches the requested path."""

    def __init__(self, path: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["path"] = path
        EnvconfError.__init__(self, f"no config file found for {path}", context=ctx)
        self.filename = path


class InvalidFormatError(EnvconfError, ValueError):
    """Raised when a config file cannot be decoded as its detected format."""

    def __init__(self, fmt: str, detail: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["format"] = fmt
        ctx["details"] = detail
        EnvconfError.__init__(
            self,
            f"Invalid {fmt} found while loading the config file: {detail}",
            context=ctx,
        )
        self.format = fmt
        self.detail = detail


class EnvDoesNotExistError(EnvconfError, LookupError):
    """Raised when an environment that does not exist in the config is requested."""

    def __init__(self, name: str) -> None:
        EnvconfError.__init__(
            self,
            "environment does not exist in this environments list",
            context={"name": name},
        )
        self.name = name


class EnvNotDefinedError(EnvconfError, LookupError):
    """Raised when the environment was found but had no config."""

    def __init__(self, name: str) -> None:
        EnvconfError.__init__(
            self,
            "environment was found but not defined",
            context={"name": name},
        )
        self.name = name


class NoEnvironmentsDefinedError(EnvconfError, ValueError):
    """Raised when trying to save an empty config."""

    def __init__(self, path: Optional[str] = None) -> None:
        ctx = {"path": path} if path else None
        EnvconfError.__init__(self, "no environments defined, nothing to write", context=ctx)


class ValidationFailedError(EnvconfError, ValueError):
    """Raised when one or more environments break a field rule.

    ``messages`` holds every failure, not just the first one.
    """

    def __init__(self, messages: Sequence[str], *, prefix: str = "invalid config ") -> None:
        self.messages = list(messages)
        EnvconfError.__init__(
            self,
            prefix + ",".join(self.messages),
            context={"messages": self.messages},
        )


class EnvValidationError(ValidationFailedError):
    """Raised when a single environment breaks a field rule."""

    def __init__(self, messages: Sequence[str], env: Optional["Env"] = None) -> None:
        super().__init__(messages, prefix="")
        self.env = env
        if env is not None and env.name:
            self.context["name"] = env.name


__all__ = [
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
