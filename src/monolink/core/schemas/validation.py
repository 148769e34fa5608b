"""Shared schema validation utilities.

monolink validates configuration and package manifests using JSON Schema.
Schemas are stored as YAML files under ``monolink.data/schemas/`` and loaded
in a single, consistent way across the codebase.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from monolink.core.utils.io import read_yaml
from monolink.data import get_data_path


class SchemaValidationError(ValueError):
    """Raised when schema validation fails."""

    pass


def _normalize_name(schema_name: str) -> str:
    lowered = schema_name.lower()
    if not (lowered.endswith(".yaml") or lowered.endswith(".yml")):
        return f"{schema_name}.yaml"
    return schema_name


@lru_cache(maxsize=8)
def load_schema(schema_name: str) -> Dict[str, Any]:
    """Load a bundled schema dict.

    Automatically appends ``.yaml`` if no extension is present.

    Raises:
        FileNotFoundError: If schema file doesn't exist.
        ValueError: If schema is not a YAML mapping.
    """
    path = get_data_path("schemas", _normalize_name(schema_name))
    schema = read_yaml(path, default=None, raise_on_error=True)
    if not isinstance(schema, dict):
        raise ValueError(f"Schema must be a YAML mapping, got {type(schema).__name__}")
    return schema


@lru_cache(maxsize=8)
def _validator(schema_name: str) -> Draft202012Validator:
    return Draft202012Validator(load_schema(schema_name))


def _format_error(error: Any) -> str:
    location = "/".join(str(p) for p in error.absolute_path)
    return f"{location}: {error.message}" if location else error.message


def validate_payload(payload: Any, schema_name: str) -> None:
    """Validate a payload against a bundled schema.

    Raises:
        SchemaValidationError: If validation fails.
        FileNotFoundError: If schema doesn't exist.
    """
    error = best_match(_validator(schema_name).iter_errors(payload))
    if error is not None:
        raise SchemaValidationError(
            f"Validation failed against schema '{schema_name}': {_format_error(error)}"
        )


__all__ = [
    "SchemaValidationError",
    "load_schema",
    "validate_payload",
]
