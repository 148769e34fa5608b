"""Subprocess helpers for external tool invocations.

Commands are always passed as argument vectors; no shell is involved, so
package names and paths reach the tool verbatim.
"""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from time import perf_counter
from typing import Mapping, Optional, Sequence

from monolink.core.exceptions import CommandError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 300.0


def run_command(
    argv: Sequence[str],
    *,
    cwd: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    """Run ``argv`` and capture its output as text.

    Args:
        argv: Program followed by its arguments
        cwd: Working directory for the child process
        env: Full environment for the child (inherits when None)
        timeout: Seconds before the child is abandoned
        check: Raise ``CommandError`` on non-zero exit

    Raises:
        CommandError: If the program is missing, times out, or (with
            ``check``) exits non-zero.
    """
    cmd = [str(part) for part in argv]
    if not cmd:
        raise CommandError("Cannot run an empty command", argv=cmd)

    start = perf_counter()
    logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd or ".")
    try:
        result = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise CommandError(f"Command not found: {cmd[0]}", argv=cmd) from exc
    except subprocess.TimeoutExpired as exc:
        raise CommandError(
            f"Command timed out after {timeout}s: {' '.join(cmd)}", argv=cmd
        ) from exc

    elapsed_ms = (perf_counter() - start) * 1000
    logger.debug("%s exited %s in %.0fms", cmd[0], result.returncode, elapsed_ms)

    if check and result.returncode != 0:
        stderr = (result.stderr or "").strip()
        detail = stderr or (result.stdout or "").strip() or f"exit code {result.returncode}"
        raise CommandError(
            f"{' '.join(cmd)} failed: {detail}",
            argv=cmd,
            returncode=result.returncode,
            stderr=stderr,
        )
    return result


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "run_command"]
