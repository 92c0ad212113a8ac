"""Classification of registry gaps.

The category always describes the move from the best version the offline
registry holds to the *resolved* version that would be added. The
requirement only decides whether an equal version counts as satisfied.
"""

from __future__ import annotations

from typing import Optional

from depmirror.core.matcher import satisfies
from depmirror.models import Category, Requirement, Version


def classify(
    requirement: Requirement,
    resolved_version: Version,
    best_offline: Optional[Version],
) -> Category:
    """Classify the change needed to serve ``resolved_version`` offline.

    Rules, in order:

    1. nothing offline for the package → ``NEW_DEPENDENCY``
    2. offline version equals the resolved one and satisfies the
       requirement → ``SATISFIED_EXACT``
    3. offline version is newer than the resolved one → ``DOWNGRADE``
    4. offline version has a lower major → ``MAJOR_UPGRADE``
    5. otherwise (same major) → ``MINOR_PATCH_UPGRADE``

    Args:
        requirement: Declared requirement of the dependency.
        resolved_version: Version chosen by the upstream resolver.
        best_offline: Best satisfying offline version, or the highest
            offline version when none satisfies, or ``None``.

    Returns:
        The :class:`Category` of the change.

    Examples:
        >>> from depmirror.core.parser import parse_requirement, parse_version
        >>> classify(parse_requirement("^2"), parse_version("2.0.0"),
        ...          parse_version("1.41.0"))
        <Category.MAJOR_UPGRADE: 'major'>
    """
    if best_offline is None:
        return Category.NEW_DEPENDENCY

    if best_offline == resolved_version and satisfies(requirement, best_offline):
        return Category.SATISFIED_EXACT

    if best_offline > resolved_version:
        return Category.DOWNGRADE

    if best_offline.major < resolved_version.major:
        return Category.MAJOR_UPGRADE

    return Category.MINOR_PATCH_UPGRADE
