"""
monolink config show command.

SUMMARY: Show the merged configuration

Displays configuration merged from bundled defaults, user and project
files, and MONOLINK_* environment variables.
"""

from __future__ import annotations

import argparse

from monolink.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from monolink.core.config import ConfigManager
from monolink.core.exceptions import MonolinkError
from monolink.core.utils.io import dump_yaml_string

SUMMARY = "Show the merged configuration"

_MISSING = object()


def _nest_key(key: str, value):
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "key",
        nargs="?",
        help="Specific configuration key to show (e.g., 'link.scopeRoots')",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        manager = ConfigManager(get_repo_root(args))
        if args.key:
            value = manager.get(args.key, _MISSING)
            if value is _MISSING:
                formatter.error(KeyError(args.key), f"Unknown configuration key: {args.key}", error_code="config_error")
                return 1
            data = _nest_key(args.key, value)
        else:
            data = manager.load_config()

        if formatter.json_mode:
            formatter.json_output(data)
        else:
            formatter.text(dump_yaml_string(data, sort_keys=False).rstrip())
        return 0

    except MonolinkError as e:
        formatter.error(e, error_code="config_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
