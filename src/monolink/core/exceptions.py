from __future__ import annotations

from typing import Any, Dict, Mapping


class MonolinkError(Exception):
    """Base exception for monolink."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
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


class ConfigError(MonolinkError, ValueError):
    """Raised when layered configuration cannot be loaded or fails validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        MonolinkError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class CommandError(MonolinkError, RuntimeError):
    """Raised when an external command exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        *,
        argv: list[str] | None = None,
        returncode: int | None = None,
        stderr: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if argv is not None:
            ctx["argv"] = list(argv)
        if returncode is not None:
            ctx["returncode"] = returncode
        if stderr:
            ctx["stderr"] = stderr
        MonolinkError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)
        self.argv = list(argv or [])
        self.returncode = returncode
        self.stderr = stderr or ""


__all__ = [
    "MonolinkError",
    "ConfigError",
    "CommandError",
]
