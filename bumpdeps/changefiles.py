"""Change file reading.

Change files live in the change directory at the git root, one JSON file
per declared change:

    {"type": "minor", "packageName": "foo", "comment": "...", "email": "...",
     "dependentChangeType": "patch"}

The grouped form ``{"changes": [...]}`` holds several changes in one file.
"""

from __future__ import annotations

import json
from collections.abc import Container, Mapping
from pathlib import Path

from pydantic import ValidationError

from .models import ChangeInfo, PackageInfo
from .shell import fatal, find_git_root, warn


def get_change_path(cwd: Path, change_dir: str = "change") -> Path | None:
    """Return the change directory at the git root containing ``cwd``.

    Returns None when ``cwd`` is not inside a git repository.
    """
    git_root = find_git_root(cwd)
    return git_root / change_dir if git_root else None


def parse_change_file(path: Path) -> list[ChangeInfo]:
    """Parse one change file into its declared changes.

    Raises:
        SystemExit: If the file is not valid JSON or not a valid change.
    """
    try:
        raw = json.loads(path.read_text())
        entries = raw["changes"] if isinstance(raw, dict) and "changes" in raw else [raw]
        return [ChangeInfo.model_validate(entry) for entry in entries]
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        fatal(f"Invalid change file {path.name}:\n{exc}")
        raise


def read_change_files(
    change_path: Path,
    package_infos: Mapping[str, PackageInfo],
    scoped_packages: Container[str],
) -> dict[str, ChangeInfo]:
    """Read all change files, keeping only changes for scoped packages.

    Changes naming unknown or out-of-scope packages are skipped with a
    warning. A missing change directory means no changes.

    Returns:
        Map of change file name → ChangeInfo, ordered by file name. Entries
        from a grouped file are keyed ``<file>#<index>``.
    """
    if not change_path.is_dir():
        return {}

    changes: dict[str, ChangeInfo] = {}
    for path in sorted(change_path.glob("*.json")):
        infos = parse_change_file(path)
        for index, info in enumerate(infos):
            key = path.name if len(infos) == 1 else f"{path.name}#{index}"
            if info.package_name not in package_infos:
                warn(
                    f"Change detected for nonexistent package {info.package_name}; "
                    f"delete this file: {path}"
                )
                continue
            if info.package_name not in scoped_packages:
                continue
            changes[key] = info

    return changes
