"""
monolink CLI package.

Provides the command-line interface with auto-discovery of commands
from cli/commands/ and domain subfolders (config/).

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_dry_run_flag,
    add_json_flag,
    add_repo_root_flag,
    add_roots_arg,
    add_standard_flags,
    add_verbose_flag,
)
from ._utils import configure_cli_logging, get_repo_root, resolve_roots

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_roots_arg",
    "add_standard_flags",
    # Utilities
    "configure_cli_logging",
    "get_repo_root",
    "resolve_roots",
]
