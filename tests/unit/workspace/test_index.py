"""Tests for scope and consumer queries."""
from __future__ import annotations

from pathlib import Path

from helpers.workspace import write_manifest


def _workspace(root: Path) -> Path:
    write_manifest(root / "packages" / "core", "@acme/core")
    write_manifest(root / "packages" / "utils", "@acme/utils", dependencies={"@acme/core": "^1.0"})
    write_manifest(root / "packages" / "acme-tools", "@acme-tools/cli")
    write_manifest(root / "vendor" / "other", "@other/thing", dependencies={"@acme/core": "1.0.0"})
    write_manifest(
        root / "apps" / "web",
        "web",
        devDependencies={"@acme/core": "^1.0"},
        peerDependencies={"@acme/core": "^1.0", "@acme/utils": "^1.0"},
    )
    write_manifest(root / "apps" / "unnamed", None, peerDependencies={"@acme/utils": "*"})
    return root


class TestFindByScope:
    """Test PackageIndex.find_by_scope."""

    def test_scope_matches_only_that_scope(self, tmp_path: Path) -> None:
        """@acme does not match @acme-tools or @other packages."""
        from monolink.core.workspace import PackageIndex

        root = _workspace(tmp_path)

        matches = PackageIndex().find_by_scope([root], "@acme")

        assert sorted(m.name for m in matches) == ["@acme/core", "@acme/utils"]
        assert all(not m.is_source_match for m in matches)

    def test_exact_name_returns_only_the_source(self, tmp_path: Path) -> None:
        """An exact name yields that package flagged as the source match."""
        from monolink.core.workspace import PackageIndex

        root = _workspace(tmp_path)

        matches = PackageIndex().find_by_scope([root], "@acme", "@acme/utils")

        assert len(matches) == 1
        assert matches[0].name == "@acme/utils"
        assert matches[0].is_source_match is True
        assert matches[0].path == (root / "packages" / "utils").resolve()

    def test_unknown_scope_is_empty(self, tmp_path: Path) -> None:
        """No matches is an empty list, not an error."""
        from monolink.core.workspace import PackageIndex

        assert PackageIndex().find_by_scope([_workspace(tmp_path)], "@fjell") == []


class TestFindConsumers:
    """Test PackageIndex.find_consumers."""

    def test_consumers_across_all_dependency_kinds(self, tmp_path: Path) -> None:
        """Regular, dev and peer declarations all count, and each consumer appears once."""
        from monolink.core.workspace import PackageIndex

        root = _workspace(tmp_path)

        consumers = PackageIndex().find_consumers([root], "@acme/core")

        by_name = {c.name: c for c in consumers}
        assert sorted(by_name) == ["@acme/utils", "@other/thing", "web"]
        assert by_name["web"].dependency_kinds == ("devDependencies", "peerDependencies")

    def test_unnamed_consumer_uses_relative_path(self, tmp_path: Path) -> None:
        """A consumer without a name is reported by its location."""
        from monolink.core.workspace import PackageIndex

        root = _workspace(tmp_path)

        names = [c.name for c in PackageIndex().find_consumers([root], "@acme/utils")]

        assert str(Path("apps") / "unnamed") in names
        assert "web" in names

    def test_target_is_not_its_own_consumer(self, tmp_path: Path) -> None:
        """A package that lists itself is not reported."""
        from monolink.core.workspace import PackageIndex

        write_manifest(tmp_path / "self", "@acme/self", devDependencies={"@acme/self": "*"})

        assert PackageIndex().find_consumers([tmp_path], "@acme/self") == []

    def test_sorted_by_name(self) -> None:
        """sorted_by_name orders by name then path."""
        from monolink.core.workspace.index import sorted_by_name
        from monolink.core.workspace.models import PackageMatch

        items = [
            PackageMatch("@acme/b", Path("/x/b"), False),
            PackageMatch("@acme/a", Path("/y/a"), False),
            PackageMatch("@acme/a", Path("/x/a"), False),
        ]

        assert [str(i.path) for i in sorted_by_name(items)] == ["/x/a", "/y/a", "/x/b"]
