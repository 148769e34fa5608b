"""JSON output for manifests, written atomically."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .core import atomic_write

DEFAULT_JSON_CONFIG: dict[str, Any] = {
    "indent": 2,
    "sort_keys": True,
    "ensure_ascii": False,
    "encoding": "utf-8",
}


def write_json_atomic(
    file_path: Path | str,
    data: Any,
    *,
    indent: int | None = None,
    sort_keys: bool | None = None,
    ensure_ascii: bool | None = None,
) -> None:
    """Atomically write JSON (with a trailing newline) to ``file_path``.

    Unset options fall back to DEFAULT_JSON_CONFIG. Manifests are written
    with ``sort_keys=False`` so their key order survives a rewrite.
    """
    cfg = dict(DEFAULT_JSON_CONFIG)
    for key, value in (("indent", indent), ("sort_keys", sort_keys), ("ensure_ascii", ensure_ascii)):
        if value is not None:
            cfg[key] = value

    def _writer(f) -> None:
        json.dump(data, f, indent=cfg["indent"], sort_keys=cfg["sort_keys"], ensure_ascii=cfg["ensure_ascii"])
        f.write("\n")

    atomic_write(Path(file_path), _writer, encoding=cfg["encoding"])


__all__ = ["DEFAULT_JSON_CONFIG", "write_json_atomic"]
