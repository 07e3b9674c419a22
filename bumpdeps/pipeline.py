"""Bump pipeline: discover → scope → read changes → propagate.

This module wires the collaborators together:
1. Discover all packages in the workspace
2. Work out which packages are in scope for this run
3. Read the declared change files
4. Select the dependents that must be bumped along with the changes

Version numbers are not computed here; the resulting BumpInfo is the
input for whatever writes versions.
"""

from __future__ import annotations

from pathlib import Path

from .bump import select_dependents_to_bump
from .changefiles import get_change_path, read_change_files
from .config import BumpOptions
from .models import BumpInfo
from .shell import step
from .workspace import discover_packages, get_scoped_packages


def gather_bump_info(root: Path, options: BumpOptions) -> BumpInfo:
    """Build the run state for a workspace without propagating anything."""
    packages = discover_packages(root)
    scoped = get_scoped_packages(packages, options.scope)

    step("Reading change files")
    change_path = get_change_path(root, options.change_dir)
    changes = read_change_files(change_path, packages, scoped) if change_path else {}
    if not changes:
        print("  No change files found")
    for change_file, info in changes.items():
        print(f"  {info.package_name}: {info.type.value} ({change_file})")

    return BumpInfo(
        package_infos=packages,
        scoped_packages=scoped,
        change_file_change_infos=changes,
    )


def run_bump(root: Path, options: BumpOptions) -> BumpInfo:
    """Execute the pipeline and return the populated run state.

    Args:
        root: Workspace root holding the root package.json.
        options: Loaded configuration.
    """
    bump_info = gather_bump_info(root, options)

    step("Selecting dependents to bump")
    select_dependents_to_bump(bump_info, options)

    if not bump_info.dependents:
        print("  No dependents to bump")
    for name, dependents in bump_info.dependents.items():
        print(f"  {name} → [{', '.join(dependents)}]")

    return bump_info
