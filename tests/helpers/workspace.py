"""Builders for on-disk package trees."""
from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any


def write_manifest(directory: Path, name: str | None = None, version: str | None = "1.0.0", **fields: Any) -> Path:
    """Write ``directory/package.json`` and return the directory."""
    directory.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = {}
    if name is not None:
        data["name"] = name
    if version is not None:
        data["version"] = version
    data.update(fields)
    (directory / "package.json").write_text(json.dumps(data, indent=2), encoding="utf-8")
    return directory


def write_yaml(path: Path, content: str) -> None:
    """Helper to write YAML content to a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")


def write_link_config(repo_root: Path, content: str) -> None:
    """Write ``.monolink/config/link.yaml`` under ``repo_root``."""
    write_yaml(repo_root / ".monolink" / "config" / "link.yaml", content)
