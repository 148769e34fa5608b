"""
monolink link command.

SUMMARY: Link the current package's siblings, or propagate a scope/package to its consumers

Without a target the current package is registered globally and its
same-scope (and configured external) dependencies are symlinked into its
node_modules. With a target such as ``@acme`` or ``@acme/core`` every
matching package is registered and linked into each consumer found under
the scan roots.
"""
from __future__ import annotations

import argparse

from monolink.cli import (
    OutputFormatter,
    add_dry_run_flag,
    add_roots_arg,
    add_standard_flags,
    configure_cli_logging,
    get_repo_root,
    resolve_roots,
)
from monolink.core.exceptions import MonolinkError

SUMMARY = "Link the current package's siblings, or propagate a scope/package to its consumers"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "target",
        nargs="?",
        help="Scope (@acme) or package (@acme/core) to link into its consumers",
    )
    add_dry_run_flag(parser)
    add_roots_arg(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Run self-link or targeted link."""
    from monolink.core.config.domains import LinkConfig
    from monolink.core.workspace import LinkOrchestrator

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        configure_cli_logging(args, repo_root)
        config = LinkConfig(repo_root=repo_root)
        orchestrator = LinkOrchestrator(repo_root, config=config, dry_run=args.dry_run)

        target = args.target or config.package_argument
        if target:
            summary = orchestrator.link_target(target, resolve_roots(args, repo_root))
        else:
            summary = orchestrator.self_link()

        formatter.success(summary.to_dict(), summary.message)
        if not formatter.json_mode:
            for result in summary.results:
                if not result.success:
                    formatter.text(f"  {result.dependency}: FAILED ({result.error})")
        return 0

    except MonolinkError as e:
        formatter.error(e, error_code="link_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
