"""JSON Schema validation for bundled YAML schemas."""
from __future__ import annotations

from .validation import (
    SchemaValidationError,
    load_schema,
    validate_payload,
)

__all__ = [
    "SchemaValidationError",
    "load_schema",
    "validate_payload",
]
