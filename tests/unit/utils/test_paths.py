"""Tests for path helpers."""
from __future__ import annotations

import os
from pathlib import Path

import pytest


class TestWorkingDirectory:
    """Test working_directory."""

    def test_changes_and_restores(self, tmp_path: Path) -> None:
        """The body runs in the target and the caller's directory comes back."""
        from monolink.core.utils.paths import working_directory

        before = os.getcwd()

        with working_directory(tmp_path):
            assert Path(os.getcwd()) == tmp_path.resolve()

        assert os.getcwd() == before

    def test_restores_on_exception(self, tmp_path: Path) -> None:
        """An exception in the body still restores the directory."""
        from monolink.core.utils.paths import working_directory

        before = os.getcwd()

        with pytest.raises(RuntimeError):
            with working_directory(tmp_path):
                raise RuntimeError("boom")

        assert os.getcwd() == before


class TestRelativeLinkTarget:
    """Test relative_link_target."""

    def test_target_resolves_back_to_source(self, tmp_path: Path) -> None:
        """Joining the result onto the link's parent lands on the source."""
        from monolink.core.utils.paths import relative_link_target

        source = tmp_path / "packages" / "core"
        source.mkdir(parents=True)
        link = tmp_path / "apps" / "web" / "node_modules" / "@acme" / "core"

        target = relative_link_target(source, link)

        assert not target.is_absolute()
        assert target == Path("../../../../packages/core")
        assert (link.parent / target).resolve() == source.resolve()


class TestContainment:
    """Test is_within and configuration directories."""

    def test_is_within(self, tmp_path: Path) -> None:
        """Paths equal to or below the root are inside it."""
        from monolink.core.utils.paths import is_within

        assert is_within(tmp_path, tmp_path)
        assert is_within(tmp_path / "a" / "b", tmp_path)
        assert not is_within(tmp_path.parent, tmp_path)
        assert not is_within(tmp_path / ".." / "sibling", tmp_path)

    def test_user_config_dir_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """MONOLINK_USER_CONFIG_DIR overrides the home default."""
        from monolink.core.utils.paths import get_user_config_dir

        monkeypatch.setenv("MONOLINK_USER_CONFIG_DIR", str(tmp_path / "cfg"))

        assert get_user_config_dir() == tmp_path / "cfg"
