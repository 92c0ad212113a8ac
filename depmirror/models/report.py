"""
Gap and report data models for depmirror.

The satisfaction engine produces one :class:`Gap` for every dependency the
offline registry cannot serve with its exact resolved version, and wraps
them in a read-only :class:`Report`.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from depmirror.models.version import Version
from depmirror.models.requirement import Requirement
from depmirror.models.dependency import PackageId


class Category(Enum):
    """Kind of change needed to bring a package into the registry."""

    SATISFIED_EXACT = "satisfied"
    MINOR_PATCH_UPGRADE = "minor-patch"
    MAJOR_UPGRADE = "major"
    DOWNGRADE = "downgrade"
    NEW_DEPENDENCY = "new"

    @property
    def requires_approval(self) -> bool:
        """True for changes an operator has to approve explicitly."""
        return self in (
            Category.MAJOR_UPGRADE,
            Category.DOWNGRADE,
            Category.NEW_DEPENDENCY,
        )


@dataclass(frozen=True)
class Gap:
    """One unsatisfied dependency and its classification.

    Attributes:
        name: Package name.
        requirement: Declared requirement.
        resolved_version: Version the lockfile/resolver picked.
        best_offline: Registry version the classification compared
            against, or ``None`` when the registry has nothing for
            ``name``.
        category: Classification of the change.
    """

    name: str
    requirement: Requirement
    resolved_version: Version
    best_offline: Optional[Version]
    category: Category

    @property
    def package_id(self) -> PackageId:
        """The artifact that would be added to the registry."""
        return PackageId(self.name, self.resolved_version)

    @property
    def reason(self) -> str:
        """Short human-readable explanation of the category."""
        if self.category is Category.NEW_DEPENDENCY:
            return "new dependency"
        if self.category is Category.DOWNGRADE:
            return f"downgrade from {self.best_offline}"
        if self.category is Category.MAJOR_UPGRADE:
            return f"major upgrade from {self.best_offline}"
        if self.category is Category.MINOR_PATCH_UPGRADE:
            return f"minor/patch upgrade from {self.best_offline}"
        return "satisfied"

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "name": self.name,
            "requirement": str(self.requirement),
            "resolved_version": str(self.resolved_version),
            "best_offline": str(self.best_offline) if self.best_offline is not None else None,
            "category": self.category.value,
            "requires_approval": self.category.requires_approval,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class Report:
    """Result of one analysis run.

    Gaps keep the input dependency order. Per-category counts are always
    computed from ``gaps``.

    Attributes:
        gaps: Unsatisfied dependencies, in input order.
        total_dependencies: Number of dependencies analyzed.
    """

    gaps: Tuple[Gap, ...] = field(default_factory=tuple)
    total_dependencies: int = 0

    def __post_init__(self) -> None:
        if any(gap.category is Category.SATISFIED_EXACT for gap in self.gaps):
            raise ValueError("Satisfied dependencies cannot be reported as gaps")

    @property
    def counts(self) -> Dict[Category, int]:
        """Number of gaps per category (every category present)."""
        counts = {category: 0 for category in Category}
        for gap in self.gaps:
            counts[gap.category] += 1
        return counts

    @property
    def is_fully_satisfied(self) -> bool:
        """True when the registry covers every dependency exactly."""
        return not self.gaps

    @property
    def needs_approval(self) -> List[Gap]:
        """Gaps that require explicit operator approval."""
        return [gap for gap in self.gaps if gap.category.requires_approval]

    @property
    def auto_approved(self) -> List[Gap]:
        """Gaps that are minor/patch upgrades."""
        return [gap for gap in self.gaps if not gap.category.requires_approval]

    def count(self, category: Category) -> int:
        """Number of gaps classified as ``category``."""
        return self.counts[category]

    def write_back_entries(self) -> List[PackageId]:
        """Artifacts to append to the registry listing if accepted."""
        return [
            gap.package_id
            for gap in self.gaps
            if gap.category is not Category.SATISFIED_EXACT
        ]

    def to_json(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        return {
            "total_dependencies": self.total_dependencies,
            "fully_satisfied": self.is_fully_satisfied,
            "counts": {
                category.value: n
                for category, n in self.counts.items()
                if category is not Category.SATISFIED_EXACT
            },
            "gaps": [gap.to_json() for gap in self.gaps],
        }

    def __len__(self) -> int:
        return len(self.gaps)
