"""Workspace linking exceptions.

Every error names the package (and, where relevant, the consumer) it
concerns, plus the underlying cause.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Sequence

from monolink.core.exceptions import MonolinkError


class WorkspaceError(MonolinkError):
    """Base exception for workspace linking errors."""


class ManifestNotFoundError(WorkspaceError):
    """Raised when a directory has no package manifest."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"No package.json found at {path}", context={"path": str(path)})
        self.path = Path(path)


class ManifestParseError(WorkspaceError):
    """Raised when a manifest is malformed or has the wrong shape."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(
            f"Invalid package manifest {path}: {reason}",
            context={"path": str(path), "reason": reason},
        )
        self.path = Path(path)
        self.reason = reason


class MissingPackageNameError(WorkspaceError):
    """Raised when a package that must take part in linking has no name."""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"Package manifest {path} has no name; it cannot be linked",
            context={"path": str(path)},
        )
        self.path = Path(path)


class PackageManagerError(WorkspaceError):
    """Raised when the host package manager exits unsuccessfully."""

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx.update({"argv": list(argv), "returncode": returncode})
        if stderr:
            ctx["stderr"] = stderr
        super().__init__(message, context=ctx)
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr


class SelfLinkError(WorkspaceError):
    """Raised when the current package cannot register itself."""

    def __init__(self, package: str, cause: str) -> None:
        super().__init__(
            f"Failed to self-link {package}: {cause}",
            context={"package": package, "cause": cause},
        )
        self.package = package


class LinkArgumentError(WorkspaceError, ValueError):
    """Raised for a link target that is not scope-shaped."""

    def __init__(self, target: str) -> None:
        WorkspaceError.__init__(
            self,
            f"Package argument must start with @ (scope): {target}",
            context={"target": target},
        )
        self.target = target


class SourceLinkError(WorkspaceError):
    """Raised when a source package cannot be registered globally."""

    def __init__(self, package: str, cause: str) -> None:
        super().__init__(
            f"Failed to link source package {package}: {cause}",
            context={"package": package, "cause": cause},
        )
        self.package = package


class ConsumerLinkError(WorkspaceError):
    """Raised when a consumer cannot be linked to a source package."""

    def __init__(self, package: str, consumer: str, cause: str) -> None:
        super().__init__(
            f"Failed to link {package} in consumer {consumer}: {cause}",
            context={"package": package, "consumer": consumer, "cause": cause},
        )
        self.package = package
        self.consumer = consumer


class WorkspaceFileError(WorkspaceError):
    """Raised when the workspace override file cannot be read or written."""


__all__ = [
    "WorkspaceError",
    "ManifestNotFoundError",
    "ManifestParseError",
    "MissingPackageNameError",
    "PackageManagerError",
    "SelfLinkError",
    "LinkArgumentError",
    "SourceLinkError",
    "ConsumerLinkError",
    "WorkspaceFileError",
]
