"""Change file staleness validation.

A change file is stale when it was not added or modified within the
release range, usually ``<from_ref or branch>...HEAD``. Such files are
leftovers that would bump packages for changes not being released.
"""

from __future__ import annotations

import sys
from pathlib import Path

from .changefiles import get_change_path
from .shell import get_changes_between_refs


def are_change_files_stale(
    path: Path,
    branch: str,
    from_ref: str | None = None,
    change_dir: str = "change",
) -> bool:
    """Report change files that fall outside the release range.

    Lists the files on disk in the change directory and compares them to
    the JSON files the range adds or modifies (deletions excluded). Files
    on disk but not in the diff are printed to stderr.

    Args:
        path: Working directory inside the repository.
        branch: Reference to diff against when ``from_ref`` is not given.
        from_ref: Explicit base reference.
        change_dir: Change directory name at the git root.

    Returns:
        True if any stale change file exists.

    Raises:
        subprocess.CalledProcessError: If the reference cannot be resolved.
    """
    change_path = get_change_path(path, change_dir)
    ref = from_ref or branch

    stale_change_files: list[str] = []
    if change_path and change_path.exists():
        all_change_files = sorted(p.name for p in change_path.iterdir() if p.is_file())

        change_files_since_ref = set(
            get_changes_between_refs(
                ref,
                "HEAD",
                [
                    "--diff-filter=d",  # exclude deleted files
                    "--relative",  # paths relative to the change dir, i.e. file names
                ],
                "*.json",
                change_path,
            )
        )

        stale_change_files = [
            name for name in all_change_files if name not in change_files_since_ref
        ]

    if stale_change_files:
        listing = "\n".join(f"- {name}" for name in stale_change_files)
        print(
            f"The following change files are stale:\n{listing}\n", file=sys.stderr
        )

    return bool(stale_change_files)
