"""Tests for the global link registry reader."""
from __future__ import annotations

from pathlib import Path

from helpers.package_manager import FakePackageManager
from helpers.workspace import write_manifest


class TestLinkRegistryReader:
    """Test LinkRegistryReader.list_global_links."""

    def test_names_come_from_manifests(self, tmp_path: Path) -> None:
        """The folder name is irrelevant; the manifest name is the key."""
        from monolink.core.workspace import LinkRegistryReader

        core = write_manifest(tmp_path / "checkout-of-core", "@acme/core")
        utils = write_manifest(tmp_path / "u", "@acme/utils")

        links = LinkRegistryReader(FakePackageManager([core, utils])).list_global_links()

        assert links == {"@acme/core": core, "@acme/utils": utils}

    def test_unreadable_entries_are_skipped(self, tmp_path: Path) -> None:
        """Directories without a readable manifest are ignored."""
        from monolink.core.workspace import LinkRegistryReader

        good = write_manifest(tmp_path / "good", "@acme/good")
        broken = tmp_path / "broken"
        broken.mkdir()
        (broken / "package.json").write_text("nope", encoding="utf-8")
        unnamed = write_manifest(tmp_path / "unnamed", None)

        fake = FakePackageManager([tmp_path / "missing", broken, unnamed, good])
        links = LinkRegistryReader(fake).list_global_links()

        assert links == {"@acme/good": good}

    def test_query_failure_yields_empty_mapping(self, tmp_path: Path) -> None:
        """A failing package manager means nothing is linked."""
        from monolink.core.workspace import LinkRegistryReader

        fake = FakePackageManager([write_manifest(tmp_path / "core", "@acme/core")])
        fake.fail("npm", "ls")

        assert LinkRegistryReader(fake).list_global_links() == {}
