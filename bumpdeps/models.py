"""Data models for bumpdeps.

These Pydantic models represent the packages, change records and the
per-run bump state that flow through dependent propagation.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ChangeType(str, Enum):
    """Semantic-version impact of a change, as declared in a change file."""

    NONE = "none"
    PRERELEASE = "prerelease"
    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"

    @property
    def rank(self) -> int:
        """Ordinal severity: none=0 < prerelease < patch < minor < major=4."""
        return _CHANGE_TYPE_RANK[self]


_CHANGE_TYPE_RANK = {
    ChangeType.NONE: 0,
    ChangeType.PRERELEASE: 1,
    ChangeType.PATCH: 2,
    ChangeType.MINOR: 3,
    ChangeType.MAJOR: 4,
}


def max_change_type(a: ChangeType, b: ChangeType) -> ChangeType:
    """Return whichever of two change types is more severe."""
    return a if a.rank >= b.rank else b


class PackageInfo(BaseModel):
    """Metadata for a single package in the monorepo workspace.

    Attributes:
        name: Package name from package.json.
        version: Current version string from package.json.
        path: Relative path from workspace root to the package directory.
        private: Whether the package is marked private.
        dependencies: Runtime dependencies (name → version range).
        dev_dependencies: devDependencies (name → version range).
        peer_dependencies: peerDependencies (name → version range).
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str = "0.0.0"
    path: str = "."
    private: bool = False
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="devDependencies"
    )
    peer_dependencies: dict[str, str] = Field(
        default_factory=dict, alias="peerDependencies"
    )

    def depends_on(self, name: str) -> bool:
        """True if any dependency kind declares ``name``."""
        return (
            name in self.dependencies
            or name in self.dev_dependencies
            or name in self.peer_dependencies
        )


class ChangeInfo(BaseModel):
    """A single declared change, as read from a change file.

    Attributes:
        package_name: The package the change applies to.
        type: Declared severity of the change.
        comment: Human-readable description.
        email: Author of the change.
        dependent_change_type: Severity to apply to dependents. When unset,
            dependents inherit ``type``.
    """

    model_config = ConfigDict(populate_by_name=True)

    package_name: str = Field(alias="packageName")
    type: ChangeType
    comment: str = ""
    email: str = ""
    dependent_change_type: ChangeType | None = Field(
        default=None, alias="dependentChangeType"
    )

    @property
    def propagated_type(self) -> ChangeType:
        return self.dependent_change_type or self.type


class BumpDepsFlag(BaseModel):
    """Boolean policy: always (``enabled=True``) or never bump dependents."""

    kind: Literal["flag"] = "flag"
    enabled: bool


class BumpDepsThreshold(BaseModel):
    """Threshold policy: bump dependents for changes at least as severe as ``bump_to``.

    ``bump_to=none`` bumps dependents unconditionally. A missing ``bump_to``
    falls back to the configured unset default.
    """

    model_config = ConfigDict(populate_by_name=True)

    kind: Literal["threshold"] = "threshold"
    bump_to: ChangeType | None = Field(default=None, alias="bumpTo")


BumpDeps = Annotated[BumpDepsFlag | BumpDepsThreshold, Field(discriminator="kind")]


def parse_bump_deps(raw: Any) -> BumpDepsFlag | BumpDepsThreshold:
    """Convert a configured bump-deps value into a policy variant.

    Examples:
        True → BumpDepsFlag(enabled=True)
        {} → BumpDepsThreshold(bump_to=None)
        {"bumpTo": "minor"} → BumpDepsThreshold(bump_to=ChangeType.MINOR)

    Raises:
        ValueError: If ``raw`` is neither a bool nor a table.
    """
    if isinstance(raw, (BumpDepsFlag, BumpDepsThreshold)):
        return raw
    if isinstance(raw, bool):
        return BumpDepsFlag(enabled=raw)
    if isinstance(raw, dict):
        # Accept both the package.json spelling and the kebab-case TOML one
        data = dict(raw)
        if "bump-to" in data:
            data["bumpTo"] = data.pop("bump-to")
        return BumpDepsThreshold.model_validate(data)
    raise ValueError(f"bump-deps must be a boolean or a table, got: {raw!r}")


class BumpInfo(BaseModel):
    """Mutable state for one propagation run.

    Attributes:
        package_infos: Every known package (read-only for the run).
        scoped_packages: Names eligible to be recorded as dependents.
        change_file_change_infos: Change file name → declared change, in
            processing order.
        dependents: Changed package → packages depending on it that must
            also be bumped. Insertion ordered, no duplicates.
        dependent_change_types: Dependent → most severe change type
            propagated to it.
    """

    package_infos: dict[str, PackageInfo]
    scoped_packages: set[str]
    change_file_change_infos: dict[str, ChangeInfo] = Field(default_factory=dict)
    dependents: dict[str, list[str]] = Field(default_factory=dict)
    dependent_change_types: dict[str, ChangeType] = Field(default_factory=dict)
