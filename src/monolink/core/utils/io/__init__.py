"""File I/O for monolink: atomic writes, manifest JSON and YAML config/workspace files."""
from __future__ import annotations

from .core import atomic_write, ensure_directory, read_text
from .json import write_json_atomic
from .yaml import dump_yaml_string, iter_yaml_files, read_yaml, write_yaml

__all__ = [
    "atomic_write",
    "ensure_directory",
    "read_text",
    "write_json_atomic",
    "read_yaml",
    "write_yaml",
    "dump_yaml_string",
    "iter_yaml_files",
]
