"""Tests for file I/O and merge helpers."""
from __future__ import annotations

import json
from pathlib import Path

import pytest


class TestJsonIO:
    """Test write_json_atomic."""

    def test_write_creates_parents_and_trailing_newline(self, tmp_path: Path) -> None:
        """Atomic writes create missing directories."""
        from monolink.core.utils.io import write_json_atomic

        path = tmp_path / "nested" / "data.json"

        write_json_atomic(path, {"b": 1, "a": 2})

        assert path.read_text(encoding="utf-8").endswith("\n")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"a": 2, "b": 1}
        assert list(data) == ["a", "b"]

    def test_no_temp_files_left_behind(self, tmp_path: Path) -> None:
        """Only the target file remains after a write."""
        from monolink.core.utils.io import write_json_atomic

        write_json_atomic(tmp_path / "data.json", {"x": 1})

        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


class TestYamlIO:
    """Test YAML helpers."""

    def test_read_yaml_default_for_missing(self, tmp_path: Path) -> None:
        """Missing files return the default unless asked to raise."""
        from monolink.core.utils.io import read_yaml

        assert read_yaml(tmp_path / "missing.yaml", default={}) == {}
        with pytest.raises(FileNotFoundError):
            read_yaml(tmp_path / "missing.yaml", raise_on_error=True)

    def test_write_yaml_keeps_order_when_asked(self, tmp_path: Path) -> None:
        """sort_keys=False preserves insertion order."""
        from monolink.core.utils.io import read_yaml, write_yaml

        path = tmp_path / "out.yaml"

        write_yaml(path, {"packages": ["a"], "overrides": {"z": "1", "a": "2"}}, sort_keys=False)

        text = path.read_text(encoding="utf-8")
        assert text.index("packages") < text.index("overrides")
        assert text.index("z:") < text.index("a:")
        assert read_yaml(path) == {"packages": ["a"], "overrides": {"z": "1", "a": "2"}}


class TestDeepMerge:
    """Test deep_merge list handling."""

    def test_nested_dicts_merge(self) -> None:
        """Nested mappings are merged key by key."""
        from monolink.core.utils.merge import deep_merge

        merged = deep_merge({"link": {"roots": ["."], "dryRun": False}}, {"link": {"dryRun": True}})

        assert merged == {"link": {"roots": ["."], "dryRun": True}}

    def test_list_append_marker(self) -> None:
        """A leading "+" appends to the base list."""
        from monolink.core.utils.merge import deep_merge

        merged = deep_merge({"externals": ["@a"]}, {"externals": ["+", "@b"]})

        assert merged == {"externals": ["@a", "@b"]}

    def test_list_replace_by_default(self) -> None:
        """Lists without a marker replace the base."""
        from monolink.core.utils.merge import deep_merge

        merged = deep_merge({"externals": ["@a"]}, {"externals": ["@b"]})

        assert merged == {"externals": ["@b"]}

    def test_explicit_replace_marker(self) -> None:
        """A leading "=" replaces the base list and is dropped."""
        from monolink.core.utils.merge import deep_merge

        merged = deep_merge({"externals": ["@a"]}, {"externals": ["=", "@b"]})

        assert merged == {"externals": ["@b"]}
