"""Workspace discovery.

Reads the root package.json ``workspaces`` globs, loads every member
package.json into a PackageInfo, and works out which packages are in
scope for a run.
"""

from __future__ import annotations

import fnmatch
import glob
import json
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import PackageInfo
from .shell import fatal, step


def load_package_json(path: Path) -> dict[str, Any]:
    """Load and parse a package.json file."""
    try:
        return json.loads(path.read_text())
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        fatal(f"Invalid JSON in {path}: {exc}")
        raise


def get_workspace_globs(manifest: Mapping[str, Any]) -> list[str]:
    """Extract workspace member globs from a root package.json.

    Both the array form (``"workspaces": ["packages/*"]``) and the object
    form (``"workspaces": {"packages": [...]}``) are accepted.
    """
    workspaces = manifest.get("workspaces") or []
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages") or []
    return list(workspaces)


def parse_package_info(manifest: Mapping[str, Any], path: str, fallback: str) -> PackageInfo:
    """Build a PackageInfo from a parsed package.json.

    Args:
        manifest: Parsed package.json contents.
        path: Package directory relative to the workspace root.
        fallback: Name to use when the manifest has none.
    """
    return PackageInfo.model_validate(
        {
            "name": manifest.get("name") or fallback,
            "version": manifest.get("version", "0.0.0"),
            "path": path,
            "private": bool(manifest.get("private", False)),
            "dependencies": manifest.get("dependencies") or {},
            "devDependencies": manifest.get("devDependencies") or {},
            "peerDependencies": manifest.get("peerDependencies") or {},
        }
    )


def discover_packages(root: Path) -> dict[str, PackageInfo]:
    """Scan the workspace and discover all packages.

    A root package.json without workspaces is treated as a single-package
    repo.

    Returns:
        Map of package name to PackageInfo.

    Raises:
        SystemExit: If the root package.json is missing or malformed.
    """
    step("Discovering workspace packages")

    root_manifest_path = root / "package.json"
    if not root_manifest_path.exists():
        fatal(f"No package.json found in {root}")
    root_manifest = load_package_json(root_manifest_path)

    member_dirs: list[Path] = []
    for pattern in get_workspace_globs(root_manifest):
        for match in sorted(glob.glob(str(root / pattern), recursive=True)):
            p = Path(match)
            if (p / "package.json").exists() and p not in member_dirs:
                member_dirs.append(p)

    if not member_dirs:
        member_dirs = [root]

    packages: dict[str, PackageInfo] = {}
    for d in member_dirs:
        manifest = root_manifest if d == root else load_package_json(d / "package.json")
        rel = d.relative_to(root).as_posix()
        try:
            info = parse_package_info(manifest, rel, d.name)
        except ValidationError as exc:
            fatal(f"Invalid package.json in {d}:\n{exc}")
            raise
        if info.name in packages:
            fatal(
                f"Duplicate package name {info.name!r} in "
                f"{packages[info.name].path} and {info.path}"
            )
        packages[info.name] = info

    for name, info in packages.items():
        internal = [
            dep
            for dep in (
                *info.dependencies,
                *info.dev_dependencies,
                *info.peer_dependencies,
            )
            if dep in packages
        ]
        deps = f" → [{', '.join(dict.fromkeys(internal))}]" if internal else ""
        print(f"  {name} {info.version} ({info.path}){deps}")

    return packages


def get_scoped_packages(
    package_infos: Mapping[str, PackageInfo], scope: Iterable[str] | None
) -> set[str]:
    """Filter packages by scope globs matched against their paths.

    Patterns prefixed with ``!`` exclude. With only exclusions, every
    other package stays in scope. No patterns means everything is in scope.

    Examples:
        scope ["packages/*"] → every package under packages/
        scope ["!packages/legacy-*"] → all but the legacy packages
    """
    patterns = list(scope or [])
    if not patterns:
        return set(package_infos)

    includes = [p for p in patterns if not p.startswith("!")]
    excludes = [p[1:] for p in patterns if p.startswith("!")]

    scoped: set[str] = set()
    for name, info in package_infos.items():
        path = info.path
        included = not includes or any(fnmatch.fnmatch(path, p) for p in includes)
        if included and not any(fnmatch.fnmatch(path, p) for p in excludes):
            scoped.add(name)
    return scoped
