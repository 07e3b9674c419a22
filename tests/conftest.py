"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from bumpdeps.models import BumpInfo, ChangeInfo, ChangeType, PackageInfo


def _make_bump_info(
    packages: dict[str, PackageInfo],
    changes: list[tuple[str, ChangeType]],
    scoped: set[str] | None = None,
) -> BumpInfo:
    """Build a BumpInfo with one change file per (package, type) pair."""
    return BumpInfo(
        package_infos=packages,
        scoped_packages=set(packages) if scoped is None else scoped,
        change_file_change_infos={
            f"change-{i}.json": ChangeInfo(package_name=name, type=change_type)
            for i, (name, change_type) in enumerate(changes)
        },
    )


@pytest.fixture
def make_bump_info():
    """Factory for BumpInfo objects built from (package, change type) pairs."""
    return _make_bump_info


@pytest.fixture
def chain_packages() -> dict[str, PackageInfo]:
    """A → B → C, where B depends on A and C depends on B."""
    return {
        "a": PackageInfo(name="a"),
        "b": PackageInfo(name="b", dependencies={"a": "1.0.0"}),
        "c": PackageInfo(name="c", dependencies={"b": "1.0.0"}),
    }


@pytest.fixture
def cycle_packages() -> dict[str, PackageInfo]:
    """B depends on A, C depends on B, A depends on C."""
    return {
        "a": PackageInfo(name="a", dependencies={"c": "1.0.0"}),
        "b": PackageInfo(name="b", dependencies={"a": "1.0.0"}),
        "c": PackageInfo(name="c", dependencies={"b": "1.0.0"}),
    }


def write_json(path: Path, data: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2))


@pytest.fixture
def tmp_workspace(tmp_path: Path) -> Path:
    """Create an npm workspace with three packages and two change files.

    packages/core ← packages/utils (dep) ← packages/app (devDep)
    packages/docs depends on nothing.
    """
    write_json(
        tmp_path / "package.json",
        {"name": "monorepo", "private": True, "workspaces": ["packages/*"]},
    )
    write_json(
        tmp_path / "packages" / "core" / "package.json",
        {"name": "@repo/core", "version": "1.0.0"},
    )
    write_json(
        tmp_path / "packages" / "utils" / "package.json",
        {
            "name": "@repo/utils",
            "version": "2.1.0",
            "dependencies": {"@repo/core": "^1.0.0", "lodash": "^4.17.0"},
        },
    )
    write_json(
        tmp_path / "packages" / "app" / "package.json",
        {
            "name": "@repo/app",
            "version": "0.3.0",
            "devDependencies": {"@repo/utils": "^2.0.0"},
        },
    )
    write_json(
        tmp_path / "packages" / "docs" / "package.json",
        {"name": "@repo/docs", "version": "0.0.1", "private": True},
    )
    write_json(
        tmp_path / "change" / "core-1.json",
        {
            "type": "minor",
            "packageName": "@repo/core",
            "comment": "Add feature",
            "email": "dev@example.com",
            "dependentChangeType": "patch",
        },
    )
    write_json(
        tmp_path / "change" / "docs-1.json",
        {"type": "patch", "packageName": "@repo/docs", "comment": "Fix typo"},
    )
    return tmp_path
