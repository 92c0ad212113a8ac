"""Check command implementation for depmirror.

Compares a project's resolved runtime dependencies with an offline
registry listing and reports every package the registry cannot serve with
the exact resolved version.

The command wires the core components together:

1. **load_registry_file**: reads and indexes the ``<name>-<version>``
   listing (fails fast if it is missing or malformed).
2. **load_dependency_triples**: runs ``cargo metadata`` (or reads a saved
   export) and extracts the runtime dependency graph.
3. **analyze**: matches each dependency against the registry and
   classifies the gaps.
4. **write_registry_file**: with ``--write``, appends the missing
   artifacts and re-sorts the listing.

Typical usage::

    $ depmirror check -r mirror/crates.txt
    $ depmirror check -r mirror/crates.txt --format json > gaps.json
    $ depmirror check -r mirror/crates.txt --write --yes
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import click

from depmirror.models import Category, Gap, Report
from depmirror.exceptions import DepMirrorError
from depmirror.context import pass_context, DepMirrorContext
from depmirror.core import (
    analyze,
    dependencies_from_triples,
    load_dependency_triples,
    load_registry_file,
    write_registry_file,
)
from depmirror.utils import (
    colorize_category,
    confirm,
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.check")

_SEPARATOR = "=" * 40


@click.command()
@click.option(
    "--manifest-path",
    "-m",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to the Cargo.toml of the project to check.",
)
@click.option(
    "--registry-file",
    "-r",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Text file listing the crates in the offline registry.",
)
@click.option(
    "--metadata-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Use a saved 'cargo metadata' JSON export instead of running cargo.",
)
@click.option(
    "--write",
    "-w",
    is_flag=True,
    help="Add missing crates to the registry file and sort it.",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Do not ask before writing crates that require approval.",
)
@click.option(
    "--backup/--no-backup",
    default=None,
    help="Back up the registry file before writing it.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@pass_context
def check(
    ctx: DepMirrorContext,
    manifest_path: Optional[Path],
    registry_file: Optional[Path],
    metadata_file: Optional[Path],
    write: bool,
    yes: bool,
    backup: Optional[bool],
    format: str,
) -> None:
    """Find dependencies missing from the offline registry.

    Every missing crate is classified as a minor/patch upgrade (no approval
    needed), a major upgrade, a downgrade, or a new dependency (these three
    require approval).

    Exits:
        0 if the registry satisfies every dependency or the missing crates
        were written, 1 if crates are missing or an error occurred.
    """
    config = ctx.config
    if write and format.lower() == "json" and not yes:
        raise click.UsageError("--format json with --write requires --yes.")

    registry_path = registry_file or config.registry_file
    if registry_path is None:
        raise click.UsageError(
            "Missing option '--registry-file' (or 'registry_file' in the config file)."
        )

    try:
        exit_code = _run_check(
            registry_path=registry_path,
            manifest_path=manifest_path or config.manifest_path,
            metadata_file=metadata_file,
            cargo=config.cargo,
            suffix=config.artifact_suffix,
            write=write,
            assume_yes=yes,
            backup=config.backup if backup is None else backup,
            format=format.lower(),
        )
    except DepMirrorError as exc:
        print_error(f"{exc}")
        logger.debug("Check failed", exc_info=True)
        sys.exit(1)

    sys.exit(exit_code)


def _run_check(
    *,
    registry_path: Path,
    manifest_path: Path,
    metadata_file: Optional[Path],
    cargo: str,
    suffix: str,
    write: bool,
    assume_yes: bool,
    backup: bool,
    format: str,
) -> int:
    """Load inputs, analyze, render, and optionally write back.

    Returns:
        Process exit code.
    """
    human = format != "json"

    registry = load_registry_file(registry_path, suffix=suffix)
    triples = load_dependency_triples(
        manifest_path,
        metadata_file=metadata_file,
        cargo=cargo,
    )
    dependencies = dependencies_from_triples(triples)
    report = analyze(dependencies, registry)

    if format == "json":
        _display_json(report)
    elif report.is_fully_satisfied:
        print_success("All dependencies are already present in the registry file.")
    else:
        if format == "table":
            _display_table(report)
        else:
            _display_simple(report)
        _display_summary(report)

    if report.is_fully_satisfied:
        return 0

    if not write:
        if human:
            get_raw_console().print("\n(Run with --write to add these and sort the file)")
        return 1

    if report.needs_approval and not assume_yes:
        if not confirm(
            f"Add {len(report.needs_approval)} crate(s) that require approval "
            f"to {registry_path}?"
        ):
            print_warning("Registry file not modified")
            return 1

    lines = write_registry_file(
        registry_path,
        registry.lines,
        report.write_back_entries(),
        suffix=suffix,
        backup=backup,
    )
    if human:
        print_success(
            f"Added {len(report)} crate(s); {registry_path} now lists "
            f"{len(lines)} entries"
        )
    return 0


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------


def _display_table(report: Report) -> None:
    """Render gaps as a Rich table."""
    data: List[Dict[str, Any]] = [
        {
            "Package": gap.name,
            "Requirement": str(gap.requirement),
            "Resolved": str(gap.resolved_version),
            "Offline": (
                str(gap.best_offline) if gap.best_offline is not None else "[dim]-[/dim]"
            ),
            "Change": colorize_category(gap.category),
            "Approval": (
                "[bold red]required[/bold red]"
                if gap.category.requires_approval
                else "[dim]auto[/dim]"
            ),
        }
        for gap in report.gaps
    ]

    column_styles: Dict[str, Dict[str, Any]] = {
        "Package": {"style": "bold cyan", "no_wrap": True},
        "Requirement": {"justify": "center", "style": "dim"},
        "Resolved": {"justify": "center", "style": "bold green"},
        "Offline": {"justify": "center"},
        "Change": {"justify": "center"},
        "Approval": {"justify": "center"},
    }

    print_table(
        data,
        title=f"Missing from registry ({len(report)} of {report.total_dependencies})",
        column_styles=column_styles,
    )


def _describe(gap: Gap) -> str:
    """One-line status in the classic ``name-version [note]`` form."""
    package = gap.package_id.to_line()
    if gap.category is Category.NEW_DEPENDENCY:
        return f"{package} [WARNING: NEW dependency, requires approval]"
    if gap.category is Category.DOWNGRADE:
        return (
            f"{package} [WARNING: DOWNGRADE from {gap.best_offline}, "
            "requires approval]"
        )
    if gap.category is Category.MAJOR_UPGRADE:
        return (
            f"{package} [WARNING: MAJOR version upgrade from {gap.best_offline}, "
            "requires approval]"
        )
    return f"{package} [minor/patch upgrade from {gap.best_offline}]"


def _display_simple(report: Report) -> None:
    """Render gaps one per line, suitable for piping."""
    console = get_raw_console()
    console.print(f"Found {len(report)} missing crates:", markup=False)
    for gap in report.gaps:
        console.print(f"  {_describe(gap)}", markup=False, highlight=False, soft_wrap=True)


def _display_summary(report: Report) -> None:
    """Print approval counts and the list of crates requiring approval."""
    console = get_raw_console()
    needs_approval = report.needs_approval
    auto_approved = report.auto_approved

    if needs_approval:
        console.print()
        print_warning(f"{len(needs_approval)} crate(s) require approval:")
        console.print("   (major version upgrades, downgrades, or new dependencies)")

    if auto_approved:
        console.print()
        print_success(
            f"{len(auto_approved)} crate(s) are minor/patch upgrades "
            "(no approval needed)"
        )

    if needs_approval:
        console.print(f"\n{_SEPARATOR}")
        console.print("CRATES REQUIRING APPROVAL:", style="bold")
        console.print(_SEPARATOR)
        for gap in needs_approval:
            console.print(
                f"  - {gap.package_id.to_line()} ({gap.reason})",
                markup=False,
                soft_wrap=True,
            )
        console.print(_SEPARATOR)


def _display_json(report: Report) -> None:
    """Render the report as JSON for machine consumption."""
    print(json.dumps(report.to_json(), indent=2))
