"""Bump policy evaluation.

Decides, for a package's configured bump-deps policy and the severity of
its change, whether the package's dependents should be bumped too.

The rules:
1. bump-deps = true: all dependents are bumped
2. bump-deps = false: no dependents are bumped
3. bump-deps = {}: falls back to ``unset_default`` (false unless configured)
4. bump-deps = {bumpTo = X}: dependents are bumped for changes of type X or
   more severe, e.g. bumpTo = "minor" covers major and minor changes
5. bump-deps = {bumpTo = "none"}: same as true
"""

from __future__ import annotations

from .models import BumpDepsFlag, BumpDepsThreshold, ChangeType


def should_bump_dependent_packages(
    bump_deps: BumpDepsFlag | BumpDepsThreshold,
    change_type: ChangeType,
    *,
    unset_default: bool = False,
) -> bool:
    """Determine if dependents of a package with ``change_type`` should be bumped.

    Args:
        bump_deps: The changed package's policy.
        change_type: Severity of the change being propagated.
        unset_default: Result for a threshold policy without ``bump_to``.

    Examples:
        should_bump_dependent_packages(BumpDepsThreshold(bump_to=MINOR), MAJOR) → True
        should_bump_dependent_packages(BumpDepsThreshold(bump_to=MINOR), PATCH) → False
    """
    if isinstance(bump_deps, BumpDepsFlag):
        return bump_deps.enabled

    bump_to = bump_deps.bump_to
    if bump_to is None:
        return unset_default
    if bump_to is ChangeType.NONE:
        return True
    # A "none" change never clears a real threshold since its rank is 0
    return change_type.rank >= bump_to.rank
