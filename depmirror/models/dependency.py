"""
Package identity and dependency entry models for depmirror.
"""

from __future__ import annotations

from dataclasses import dataclass

from depmirror.models.version import Version
from depmirror.models.requirement import Requirement
from depmirror.constants import PACKAGE_ID_SEPARATOR


@dataclass(frozen=True, order=True)
class PackageId:
    """A concrete artifact: one version of one package.

    Attributes:
        name: Package name as published.
        version: Exact version.
    """

    name: str
    version: Version

    def to_line(self, suffix: str = "") -> str:
        """Render the registry listing line, e.g. ``serde-1.0.210``."""
        return f"{self.name}{PACKAGE_ID_SEPARATOR}{self.version}{suffix}"

    def __str__(self) -> str:
        return self.to_line()


@dataclass(frozen=True)
class DependencyEntry:
    """One edge target from the project's resolved dependency graph.

    Attributes:
        name: Package name.
        requirement: Declared version requirement.
        resolved_version: Version the upstream resolver picked.
    """

    name: str
    requirement: Requirement
    resolved_version: Version

    @property
    def package_id(self) -> PackageId:
        """The resolved artifact this entry points to."""
        return PackageId(self.name, self.resolved_version)
