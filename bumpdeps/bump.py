"""Dependent bump propagation.

Walks every declared change, asks each package's bump-deps policy whether
its dependents should follow, and records them. By default the walk
continues through the recorded dependents until nothing new is reached.
"""

from __future__ import annotations

from collections import deque

from .config import BumpOptions
from .graph import set_package_dependents
from .models import BumpInfo, ChangeType, max_change_type
from .policy import should_bump_dependent_packages


def select_dependents_to_bump(bump_info: BumpInfo, options: BumpOptions) -> None:
    """Select dependents for all changed packages whose policy allows it.

    Each dependent is in turn treated as changed, at the severity its
    originating change propagates, and evaluated against its own policy.
    Propagation along a path stops at the first package whose policy says
    no. Each (package, change type, propagated type) combination is
    processed at most once, so dependency cycles terminate.

    With ``options.transitive`` off, only the direct dependents of the
    declared changes are recorded.

    Args:
        bump_info: Run state; ``dependents`` and ``dependent_change_types``
                   are updated in place.
        options: Supplies per-package policies and propagation settings.
    """
    queue: deque[tuple[str, ChangeType, ChangeType]] = deque(
        (info.package_name, info.type, info.propagated_type)
        for info in bump_info.change_file_change_infos.values()
    )
    visited: set[tuple[str, ChangeType, ChangeType]] = set()

    while queue:
        item = queue.popleft()
        if item in visited:
            continue
        visited.add(item)
        name, change_type, propagated = item

        policy = options.bump_deps_for(name)
        if not should_bump_dependent_packages(
            policy, change_type, unset_default=options.unset_bump_to
        ):
            continue

        set_package_dependents(bump_info, name)

        for dependent in bump_info.dependents.get(name, []):
            previous = bump_info.dependent_change_types.get(dependent)
            bump_info.dependent_change_types[dependent] = (
                propagated if previous is None else max_change_type(previous, propagated)
            )
            if options.transitive:
                queue.append((dependent, propagated, propagated))
