"""Dependent graph utilities.

Finds which packages depend on a changed package so they can be bumped
alongside it. "BigApp" depending on "SomeUtil" makes BigApp a dependent
of SomeUtil.
"""

from __future__ import annotations

from collections.abc import Container, Mapping

from .models import BumpInfo, PackageInfo


def get_dependents(
    package_infos: Mapping[str, PackageInfo],
    package_name: str,
    scoped_packages: Container[str],
) -> list[str]:
    """List the scoped packages that declare a dependency on ``package_name``.

    Runtime, dev and peer dependencies all count. Results follow the
    registry's insertion order so output is deterministic.

    Args:
        package_infos: Map of package name → PackageInfo.
        package_name: The package whose dependents to find.
        scoped_packages: Only these packages may be returned.

    Returns:
        Names of dependent packages, without duplicates.
    """
    return [
        name
        for name, info in package_infos.items()
        if name != package_name
        and name in scoped_packages
        and info.depends_on(package_name)
    ]


def set_package_dependents(bump_info: BumpInfo, package_name: str) -> None:
    """Record the dependents of ``package_name`` in ``bump_info.dependents``.

    The map is keyed by the changed package: ``dependents[package_name]``
    lists the packages that depend on it.

    Does nothing if the package is outside the run's scope. Dependents
    already recorded are not added again, so calling this repeatedly for
    the same package leaves the map unchanged.
    """
    if package_name not in bump_info.scoped_packages:
        return

    found = get_dependents(
        bump_info.package_infos, package_name, bump_info.scoped_packages
    )
    if not found:
        return

    recorded = bump_info.dependents.setdefault(package_name, [])
    for dependent in found:
        if dependent not in recorded:
            recorded.append(dependent)
