"""
monolink unlink command.

SUMMARY: Remove symlinked sibling dependencies from the current package
"""
from __future__ import annotations

import argparse

from monolink.cli import (
    OutputFormatter,
    add_dry_run_flag,
    add_standard_flags,
    configure_cli_logging,
    get_repo_root,
)
from monolink.core.exceptions import MonolinkError

SUMMARY = "Remove symlinked sibling dependencies from the current package"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--global",
        dest="unregister",
        action="store_true",
        help="Also remove this package from the global link registry",
    )
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Undo a self-link."""
    from monolink.core.workspace import LinkOrchestrator

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        configure_cli_logging(args, repo_root)
        summary = LinkOrchestrator(repo_root, dry_run=args.dry_run).unlink_self(unregister=args.unregister)
        formatter.success(summary.to_dict(), summary.message)
        failed = [r for r in summary.results if not r.success]
        return 1 if failed else 0

    except MonolinkError as e:
        formatter.error(e, error_code="unlink_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
