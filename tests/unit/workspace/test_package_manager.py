"""Tests for the package manager client argument vectors."""
from __future__ import annotations

import subprocess
from pathlib import Path

import pytest


@pytest.fixture
def recorded(monkeypatch: pytest.MonkeyPatch) -> list[tuple[list[str], object]]:
    calls: list[tuple[list[str], object]] = []

    def fake_run(argv, *, cwd=None, env=None, timeout=300, check=True):
        calls.append((list(argv), cwd))
        stdout = "/usr/lib/node_modules\n/src/core\n\n/src/utils\n" if "ls" in argv else ""
        return subprocess.CompletedProcess(argv, 0, stdout=stdout, stderr="")

    monkeypatch.setattr("monolink.core.workspace.package_manager.run_command", fake_run)
    return calls


class TestPackageManager:
    """Test the argv each operation issues."""

    def test_operations_issue_expected_argv(self, recorded, tmp_path: Path) -> None:
        """Each operation maps to one npm invocation."""
        from monolink.core.workspace import PackageManager

        pm = PackageManager("pnpm")
        pm.link_self(tmp_path)
        pm.link_package("@acme/core", tmp_path)
        pm.refresh_lockfile(tmp_path)
        pm.unlink_global("@acme/core")

        assert [argv for argv, _ in recorded] == [
            ["pnpm", "link"],
            ["pnpm", "link", "@acme/core"],
            ["pnpm", "install", "--package-lock-only", "--ignore-scripts"],
            ["pnpm", "unlink", "--global", "@acme/core"],
        ]
        assert recorded[0][1] == tmp_path

    def test_list_global_links_parses_lines(self, recorded) -> None:
        """Blank lines are dropped and every other line becomes a path."""
        from monolink.core.workspace import PackageManager

        paths = PackageManager().list_global_links()

        assert recorded[0][0] == ["npm", "ls", "--link", "--global", "--parseable"]
        assert paths == [Path("/usr/lib/node_modules"), Path("/src/core"), Path("/src/utils")]

    def test_command_failure_becomes_package_manager_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """CommandError is rewrapped with the argv and stderr kept."""
        from monolink.core.exceptions import CommandError
        from monolink.core.workspace import PackageManager, PackageManagerError

        def failing(argv, **kwargs):
            raise CommandError("npm link failed", argv=list(argv), returncode=1, stderr="E404")

        monkeypatch.setattr("monolink.core.workspace.package_manager.run_command", failing)

        with pytest.raises(PackageManagerError) as exc_info:
            PackageManager().link_self(Path("."))

        assert exc_info.value.context["argv"] == ["npm", "link"]
        assert exc_info.value.context["stderr"] == "E404"
