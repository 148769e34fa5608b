"""
monolink audit command.

SUMMARY: Find local-path dependencies and incompatible links before publishing

Reports manifest entries that only resolve on this machine (file:, link:,
workspace: and relative paths, local overrides/resolutions) together with
linked dependencies whose version falls outside the declared range.
Exits 1 when anything is found.
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

SUMMARY = "Find local-path dependencies and incompatible links before publishing"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_roots_arg(parser)
    add_standard_flags(parser)


def _label(location) -> str:
    return location.name or str(location.relative_path)


def main(args: argparse.Namespace) -> int:
    """Audit manifests and live links."""
    from monolink.core.config.domains import LinkConfig
    from monolink.core.workspace import LinkOrchestrator, scan_for_problematic_dependencies

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        configure_cli_logging(args, repo_root)
        config = LinkConfig(repo_root=repo_root)
        roots = resolve_roots(args, repo_root) or config.roots

        orchestrator = LinkOrchestrator(repo_root, config=config)
        problems = scan_for_problematic_dependencies(orchestrator.index.locations(roots))
        incompatible = orchestrator.incompatible_links(roots)

        if formatter.json_mode:
            formatter.json_output(
                {
                    "problems": [p.to_dict() for p in problems],
                    "incompatible": [
                        {"package": _label(location), "path": str(location.directory), **verdict.to_dict()}
                        for location, verdict in incompatible
                    ],
                }
            )
        elif not problems and not incompatible:
            formatter.text("No problematic dependencies found.")
        else:
            if problems:
                formatter.text(f"Found {len(problems)} problematic dependency declaration(s):")
                for p in problems:
                    formatter.text(f"  {p.package}: {p.field}.{p.dependency} = {p.value}")
                    formatter.text(f"    {p.reason}")
            if incompatible:
                formatter.text(f"Found {len(incompatible)} incompatible link(s):")
                for location, verdict in incompatible:
                    formatter.text(
                        f"  {_label(location)}: {verdict.dependency} {verdict.linked_version} "
                        f"does not satisfy {verdict.declared_range}"
                    )

        return 1 if problems or incompatible else 0

    except MonolinkError as e:
        formatter.error(e, error_code="audit_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    exit(main(parsed))
