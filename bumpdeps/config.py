"""Configuration loading.

Reads ``bumpdeps.toml`` from the workspace root with tomlkit and validates
it into :class:`BumpOptions`. Keys use kebab-case:

    bump-deps = { bumpTo = "minor" }
    unset-bump-to = false
    transitive = true
    change-dir = "change"
    branch = "origin/main"
    fail-on-stale = false
    scope = ["packages/*"]

    [packages."my-lib"]
    bump-deps = false
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from tomlkit.exceptions import TOMLKitError

from .models import BumpDeps, BumpDepsFlag, BumpDepsThreshold, parse_bump_deps
from .shell import fatal

CONFIG_FILENAME = "bumpdeps.toml"


def _kebab(name: str) -> str:
    return name.replace("_", "-")


class PackageOptions(BaseModel):
    """Per-package overrides from a ``[packages."<name>"]`` table."""

    model_config = ConfigDict(alias_generator=_kebab, populate_by_name=True)

    bump_deps: BumpDeps | None = None

    @field_validator("bump_deps", mode="before")
    @classmethod
    def _parse_bump_deps(cls, value: Any) -> Any:
        return None if value is None else parse_bump_deps(value)


class BumpOptions(BaseModel):
    """Settings for a propagation run.

    Attributes:
        bump_deps: Default policy for packages without an override.
        unset_bump_to: Result for a policy table that names no ``bumpTo``.
        transitive: Keep propagating through dependents of dependents.
        change_dir: Change-file directory, relative to the git root.
        branch: Reference the staleness check diffs against.
        from_ref: Explicit reference that takes precedence over ``branch``.
        fail_on_stale: Make stale change files a failing check.
        scope: Glob patterns selecting which packages are in scope.
        packages: Per-package overrides keyed by package name.
    """

    model_config = ConfigDict(alias_generator=_kebab, populate_by_name=True)

    bump_deps: BumpDeps = Field(default_factory=lambda: BumpDepsFlag(enabled=True))
    unset_bump_to: bool = False
    transitive: bool = True
    change_dir: str = "change"
    branch: str = "origin/main"
    from_ref: str | None = None
    fail_on_stale: bool = False
    scope: list[str] = Field(default_factory=list)
    packages: dict[str, PackageOptions] = Field(default_factory=dict)

    @field_validator("bump_deps", mode="before")
    @classmethod
    def _parse_bump_deps(cls, value: Any) -> Any:
        return parse_bump_deps(value)

    def bump_deps_for(self, package_name: str) -> BumpDepsFlag | BumpDepsThreshold:
        """Return the package's own policy, falling back to the default."""
        override = self.packages.get(package_name)
        if override is not None and override.bump_deps is not None:
            return override.bump_deps
        return self.bump_deps


def load_options(root: Path, **overrides: Any) -> BumpOptions:
    """Load ``bumpdeps.toml`` from ``root`` and apply overrides.

    A missing file yields the defaults. Overrides whose value is None are
    ignored so unset CLI options don't clobber the file.

    Raises:
        SystemExit: If the file holds invalid values.
    """
    path = root / CONFIG_FILENAME
    data: dict[str, Any] = {}
    if path.exists():
        try:
            # unwrap() converts tomlkit containers to plain Python values
            data = tomlkit.parse(path.read_text()).unwrap()
        except TOMLKitError as exc:
            fatal(f"Failed to parse {path}: {exc}")

    data.update({_kebab(k): v for k, v in overrides.items() if v is not None})

    try:
        return BumpOptions.model_validate(data)
    except ValidationError as exc:
        fatal(f"Invalid configuration in {path}:\n{exc}")
        raise
