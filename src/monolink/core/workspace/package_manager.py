"""Host package-manager client.

Every call is an argument vector; package names never pass through a
shell.
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from monolink.core.exceptions import CommandError
from monolink.core.utils.subprocess import run_command

from .exceptions import PackageManagerError

logger = logging.getLogger(__name__)


class PackageManager:
    """Thin wrapper around ``npm`` (or a compatible executable)."""

    def __init__(self, executable: str = "npm") -> None:
        self.executable = executable

    def _run(self, args: Sequence[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
        argv = [self.executable, *args]
        try:
            return run_command(argv, cwd=cwd, timeout=None)
        except CommandError as exc:
            raise PackageManagerError(
                str(exc),
                argv=argv,
                returncode=exc.returncode,
                stderr=exc.stderr,
            ) from exc

    def link_self(self, cwd: Path) -> None:
        """Register ``cwd`` in the global link registry."""
        logger.debug("Registering %s globally", cwd)
        self._run(["link"], cwd=cwd)

    def link_package(self, name: str, cwd: Path) -> None:
        """Link the globally registered ``name`` into ``cwd``."""
        logger.debug("Linking %s into %s", name, cwd)
        self._run(["link", name], cwd=cwd)

    def list_global_links(self) -> list[Path]:
        """Return the directories of globally linked packages."""
        result = self._run(["ls", "--link", "--global", "--parseable"])
        return [Path(line.strip()) for line in result.stdout.splitlines() if line.strip()]

    def refresh_lockfile(self, cwd: Path) -> None:
        """Update only the lock file; installed files are left alone."""
        self._run(["install", "--package-lock-only", "--ignore-scripts"], cwd=cwd)

    def unlink_global(self, name: str, cwd: Path | None = None) -> None:
        """Remove ``name`` from the global link registry."""
        self._run(["unlink", "--global", name], cwd=cwd)


__all__ = ["PackageManager"]
