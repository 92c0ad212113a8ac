"""Constraint matching for parsed requirements.

Matching is delegated to the requirement's compiled
``semantic_version.SimpleSpec``, which implements cargo's caret rules
including the zero-leading cases:

=============  ==========================
``^1.2.3``     ``>=1.2.3, <2.0.0``
``^0.2.3``     ``>=0.2.3, <0.3.0``
``^0.0.3``     ``>=0.0.3, <0.0.4``
``^0.0``       ``>=0.0.0, <0.1.0``
``^0``         ``>=0.0.0, <1.0.0``
``~1.2.3``     ``>=1.2.3, <1.3.0``
``~1``         ``>=1.0.0, <2.0.0``
``=1.2``       ``>=1.2.0, <1.3.0``
``>1.2``       ``>=1.3.0``
``<=1.2``      ``<1.3.0``
``1.*``        ``>=1.0.0, <2.0.0``
=============  ==========================
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

import semantic_version

from depmirror.models import Requirement, Version


def satisfies(requirement: Requirement, version: Version) -> bool:
    """Return True if ``version`` satisfies every term of ``requirement``."""
    return requirement.spec.match(version.to_semver())


def best_satisfying(
    requirement: Requirement,
    available: Iterable[Version],
) -> Optional[Version]:
    """Return the highest available version satisfying ``requirement``.

    Args:
        requirement: Parsed requirement.
        available: Candidate versions (any iterable; order is irrelevant).

    Returns:
        The maximum satisfying version, or ``None`` if there is none.
    """
    candidates: Dict[semantic_version.Version, Version] = {
        version.to_semver(): version for version in available
    }
    best = requirement.spec.select(sorted(candidates))
    return candidates[best] if best is not None else None


def highest(available: Iterable[Version]) -> Optional[Version]:
    """Return the highest version in ``available``, or ``None`` if empty."""
    versions = list(available)
    return max(versions) if versions else None
