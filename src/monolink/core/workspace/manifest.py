"""Package manifest store.

``ManifestStore.parse`` is the only place a ``Manifest`` is created; every
other component works on the validated shape it returns.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

from monolink.core.schemas import SchemaValidationError, validate_payload
from monolink.core.utils.io import read_text, write_json_atomic

from .exceptions import ManifestNotFoundError, ManifestParseError
from .models import DEPENDENCY_KINDS, Manifest

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "package.json"
MANIFEST_SCHEMA = "manifest.schema.yaml"


class ManifestStore:
    """Reads, validates and writes package.json files."""

    def read(self, path: Path) -> Manifest:
        """Read and validate the manifest at ``path``.

        Raises:
            ManifestNotFoundError: If the file does not exist
            ManifestParseError: If the file is not a valid manifest
        """
        path = Path(path)
        try:
            text = read_text(path)
        except FileNotFoundError as exc:
            raise ManifestNotFoundError(path) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ManifestParseError(path, str(exc)) from exc
        return self.parse(text, path)

    def read_directory(self, directory: Path) -> Manifest:
        return self.read(Path(directory) / MANIFEST_FILENAME)

    def parse(self, text: str, path: Path) -> Manifest:
        """Build a ``Manifest`` from raw JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestParseError(path, f"malformed JSON ({exc.msg} at line {exc.lineno})") from exc

        if not isinstance(data, dict):
            raise ManifestParseError(path, f"expected a JSON object, got {type(data).__name__}")

        try:
            validate_payload(data, MANIFEST_SCHEMA)
        except SchemaValidationError as exc:
            raise ManifestParseError(path, str(exc)) from exc

        return Manifest(
            name=data.get("name"),
            version=data.get("version"),
            raw=data,
            **{kind: dict(data.get(kind) or {}) for kind in DEPENDENCY_KINDS},
        )

    def write(self, path: Path, manifest: Manifest) -> None:
        """Write ``manifest`` as 2-space indented JSON, keeping key order."""
        write_json_atomic(Path(path), manifest.to_dict(), indent=2, sort_keys=False)
        logger.debug("Wrote manifest %s", path)


__all__ = ["MANIFEST_FILENAME", "ManifestStore"]
