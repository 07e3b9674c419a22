"""Shell and git utilities.

Provides simple wrappers around subprocess calls for git operations,
plus output formatting helpers.
"""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path


def git(*args: str, cwd: Path | str | None = None, check: bool = True) -> str:
    """Run a git command and return stdout.

    Args:
        *args: Arguments to pass to git (e.g., "status", "--short").
        cwd: Directory to run git in. Defaults to the current directory.
        check: If True (default), raise on non-zero exit. Set to False
               for commands that may legitimately fail (e.g., outside a repo).

    Returns:
        Stripped stdout from the git command.
    """
    result = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=check
    )
    return result.stdout.strip()


def find_git_root(cwd: Path | str) -> Path | None:
    """Return the top-level directory of the repository containing ``cwd``."""
    top = git("rev-parse", "--show-toplevel", cwd=cwd, check=False)
    return Path(top) if top else None


def get_changes_between_refs(
    from_ref: str,
    to_ref: str,
    options: list[str],
    pattern: str,
    cwd: Path | str,
) -> list[str]:
    """List files changed between two refs.

    Runs ``git diff --name-only`` over ``from_ref...to_ref`` (changes on
    ``to_ref`` since the merge base), limited to paths matching ``pattern``.

    Args:
        from_ref: Base reference, e.g. "origin/main".
        to_ref: Target reference, usually "HEAD".
        options: Extra diff options such as "--relative".
        pattern: Pathspec restricting the diff, e.g. "*.json".
        cwd: Directory to run git in.

    Raises:
        subprocess.CalledProcessError: If a ref cannot be resolved.
    """
    output = git(
        "--no-pager",
        "diff",
        "--name-only",
        *options,
        f"{from_ref}...{to_ref}",
        "--",
        pattern,
        cwd=cwd,
    )
    return [line for line in output.splitlines() if line]


def step(msg: str) -> None:
    """Print a visually distinct step header.

    Used to separate the phases of a run in terminal output.
    """
    print(f"\n{'─' * 60}\n{msg}\n{'─' * 60}")


def warn(msg: str) -> None:
    """Print a warning to stderr without stopping."""
    print(f"WARN: {msg}", file=sys.stderr)


def fatal(msg: str) -> None:
    """Print an error message and exit with code 1.

    Use for unrecoverable errors that should halt the run.
    """
    print(f"ERROR: {msg}", file=sys.stderr)
    sys.exit(1)
