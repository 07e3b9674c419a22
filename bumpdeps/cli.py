"""CLI entry point for bumpdeps."""

from __future__ import annotations

import contextlib
import json
import sys
from pathlib import Path

import click

from bumpdeps.config import load_options
from bumpdeps.pipeline import run_bump
from bumpdeps.validation import are_change_files_stale


def _resolve_root(path: str) -> Path:
    root = Path(path).resolve()
    if not (root / "package.json").exists():
        raise click.ClickException(f"No package.json found in {root}.")
    return root


@click.group()
@click.version_option()
def cli() -> None:
    """Decide which dependents to bump for a monorepo's change files."""


@cli.command()
@click.option(
    "--path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Workspace root.",
)
@click.option(
    "--scope",
    multiple=True,
    help="Only include packages whose path matches this glob ('!' excludes). Repeatable.",
)
@click.option(
    "--single-hop",
    is_flag=True,
    help="Only bump direct dependents of changed packages.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the dependents map as JSON.")
def dependents(path: str, scope: tuple[str, ...], single_hop: bool, as_json: bool) -> None:
    """Show which packages must be bumped because a dependency changed."""
    root = _resolve_root(path)
    options = load_options(
        root,
        scope=list(scope) or None,
        transitive=False if single_hop else None,
    )

    if as_json:
        # Keep stdout clean for the JSON document
        with contextlib.redirect_stdout(sys.stderr):
            bump_info = run_bump(root, options)
        click.echo(json.dumps(bump_info.dependents, indent=2))
        return

    bump_info = run_bump(root, options)
    click.echo()
    if not bump_info.dependent_change_types:
        click.echo("Nothing else to bump.")
        return
    click.echo("Dependents to bump:")
    for name, change_type in bump_info.dependent_change_types.items():
        click.echo(f"  {name} ({change_type.value})")


@cli.command()
@click.option(
    "--path",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    show_default=True,
    help="Working directory inside the repository.",
)
@click.option("--branch", default=None, help="Target branch to diff against.")
@click.option("--from-ref", default=None, help="Explicit base ref; overrides --branch.")
@click.option(
    "--fail-on-stale",
    is_flag=True,
    help="Exit with status 1 when stale change files exist.",
)
def check(
    path: str, branch: str | None, from_ref: str | None, fail_on_stale: bool
) -> None:
    """Check for change files outside the release range."""
    root = Path(path).resolve()
    options = load_options(
        root, branch=branch, from_ref=from_ref, fail_on_stale=fail_on_stale or None
    )

    stale = are_change_files_stale(
        root, options.branch, options.from_ref, options.change_dir
    )
    if not stale:
        click.echo("✓ No stale change files")
        return
    if options.fail_on_stale:
        raise click.ClickException("Stale change files found.")
