"""Tests for the package manifest store."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers.workspace import write_manifest


class TestManifestRead:
    """Test ManifestStore.read validation."""

    def test_reads_name_version_and_dependency_maps(self, tmp_path: Path) -> None:
        """A valid manifest exposes every dependency kind."""
        from monolink.core.workspace import ManifestStore

        write_manifest(
            tmp_path,
            "@acme/app",
            "2.1.0",
            dependencies={"@acme/core": "^2.1"},
            devDependencies={"pytest-like": "1.0.0"},
            peerDependencies={"react": ">=18"},
            optionalDependencies={"fsevents": "*"},
        )

        manifest = ManifestStore().read(tmp_path / "package.json")

        assert manifest.name == "@acme/app"
        assert manifest.version == "2.1.0"
        assert manifest.dependencies == {"@acme/core": "^2.1"}
        assert manifest.peerDependencies == {"react": ">=18"}
        assert manifest.optionalDependencies == {"fsevents": "*"}

    def test_manifest_without_name_is_accepted(self, tmp_path: Path) -> None:
        """Unnamed manifests still parse; they just cannot be link sources."""
        from monolink.core.workspace import ManifestStore

        write_manifest(tmp_path, None, dependencies={"@acme/core": "1.0.0"})

        manifest = ManifestStore().read(tmp_path / "package.json")

        assert manifest.name is None
        assert manifest.dependencies == {"@acme/core": "1.0.0"}

    def test_malformed_json_raises_parse_error_with_path(self, tmp_path: Path) -> None:
        """Broken JSON is a ManifestParseError naming the file."""
        from monolink.core.workspace import ManifestParseError, ManifestStore

        path = tmp_path / "package.json"
        path.write_text('{"name": "@acme/app",', encoding="utf-8")

        with pytest.raises(ManifestParseError) as exc_info:
            ManifestStore().read(path)

        assert str(path) in str(exc_info.value)
        assert exc_info.value.context["path"] == str(path)

    def test_non_object_root_is_rejected(self, tmp_path: Path) -> None:
        """A JSON array is not a manifest."""
        from monolink.core.workspace import ManifestParseError, ManifestStore

        path = tmp_path / "package.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        with pytest.raises(ManifestParseError, match="expected a JSON object"):
            ManifestStore().read(path)

    def test_non_string_dependency_range_is_rejected(self, tmp_path: Path) -> None:
        """Dependency maps must map strings to strings."""
        from monolink.core.workspace import ManifestParseError, ManifestStore

        write_manifest(tmp_path, "@acme/app", dependencies={"@acme/core": 1})

        with pytest.raises(ManifestParseError):
            ManifestStore().read(tmp_path / "package.json")

    def test_dependency_map_must_be_object(self, tmp_path: Path) -> None:
        """A list where a dependency map belongs is rejected."""
        from monolink.core.workspace import ManifestParseError, ManifestStore

        write_manifest(tmp_path, "@acme/app", devDependencies=["@acme/core"])

        with pytest.raises(ManifestParseError):
            ManifestStore().read(tmp_path / "package.json")

    def test_missing_file_raises_not_found(self, tmp_path: Path) -> None:
        """Missing package.json is reported separately from parse errors."""
        from monolink.core.workspace import ManifestNotFoundError, ManifestStore

        with pytest.raises(ManifestNotFoundError):
            ManifestStore().read_directory(tmp_path)


class TestManifestQueries:
    """Test the dependency helpers on Manifest."""

    def test_all_dependencies_prefers_earlier_kinds(self) -> None:
        """dependencies wins over devDependencies for the same name."""
        from monolink.core.workspace import Manifest

        manifest = Manifest(
            name="@acme/app",
            dependencies={"@acme/core": "^1.0"},
            devDependencies={"@acme/core": "^0.9", "@acme/test": "1.0.0"},
            peerDependencies={"react": "^18"},
        )

        assert manifest.all_dependencies() == {
            "@acme/core": "^1.0",
            "@acme/test": "1.0.0",
            "react": "^18",
        }
        assert list(manifest.all_dependencies()) == ["@acme/core", "@acme/test", "react"]

    def test_dependency_kinds_lists_every_declaring_map(self) -> None:
        """A dependency declared twice reports both kinds."""
        from monolink.core.workspace import Manifest

        manifest = Manifest(
            name="@acme/app",
            devDependencies={"@acme/core": "1.0.0"},
            peerDependencies={"@acme/core": "^1.0"},
        )

        assert manifest.dependency_kinds("@acme/core") == ["devDependencies", "peerDependencies"]
        assert manifest.declared_range("@acme/core") == "1.0.0"
        assert manifest.declared_range("missing") is None


class TestManifestWrite:
    """Test ManifestStore.write."""

    def test_write_preserves_unknown_keys_and_order(self, tmp_path: Path) -> None:
        """Scripts and other keys survive a read/write cycle in their original order."""
        from monolink.core.workspace import ManifestStore

        path = tmp_path / "package.json"
        path.write_text(
            json.dumps(
                {
                    "name": "@acme/app",
                    "version": "1.0.0",
                    "scripts": {"build": "tsc"},
                    "dependencies": {"@acme/core": "^1.0"},
                }
            ),
            encoding="utf-8",
        )
        store = ManifestStore()

        store.write(path, store.read(path))

        text = path.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '  "name": "@acme/app"' in text
        assert list(json.loads(text)) == ["name", "version", "scripts", "dependencies"]
