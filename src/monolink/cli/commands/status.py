"""
monolink status command.

SUMMARY: Show which dependencies are symlinked and where they point
"""
from __future__ import annotations

import argparse

from monolink.cli import (
    OutputFormatter,
    add_roots_arg,
    add_standard_flags,
    configure_cli_logging,
    get_repo_root,
    resolve_roots,
)
from monolink.core.exceptions import MonolinkError

SUMMARY = "Show which dependencies are symlinked and where they point"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--all",
        action="store_true",
        help="Also list packages without linked dependencies",
    )
    add_roots_arg(parser)
    add_standard_flags(parser)


def _compat_label(link) -> str:
    verdict = link.verdict
    if verdict is None:
        return ""
    if verdict.compatible:
        return f" ({verdict.linked_version} satisfies {verdict.declared_range})"
    return f" (INCOMPATIBLE: {verdict.linked_version} vs {verdict.declared_range})"


def main(args: argparse.Namespace) -> int:
    """Report link status for every scanned package."""
    from monolink.core.workspace import LinkOrchestrator

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        configure_cli_logging(args, repo_root)
        statuses = LinkOrchestrator(repo_root).status(resolve_roots(args, repo_root))

        if formatter.json_mode:
            formatter.json_output({"packages": [s.to_dict() for s in statuses]})
            return 0

        shown = [s for s in statuses if s.links or args.all]
        if not shown:
            formatter.text("No linked dependencies found.")
            return 0
        for status in shown:
            formatter.text(f"{status.name} ({status.path})")
            if not status.links:
                formatter.text("  (no linked dependencies)")
            for link in status.links:
                formatter.text(f"  {link.name} -> {link.target} [{link.location}]{_compat_label(link)}")
        return 0

    except MonolinkError as e:
        formatter.error(e, error_code="status_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
