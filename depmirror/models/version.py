"""
Version data model for depmirror.

A :class:`Version` is a plain ``major.minor.patch`` triple. Instances are
created by :func:`depmirror.core.parser.parse_version`, which rejects any
other shape, so every ``Version`` in the system is well-formed.
"""

from __future__ import annotations

from dataclasses import dataclass

import semantic_version


@dataclass(frozen=True, order=True)
class Version:
    """Immutable semantic version ordered by ``(major, minor, patch)``.

    Attributes:
        major: Major component.
        minor: Minor component.
        patch: Patch component.
    """

    major: int
    minor: int
    patch: int

    def __post_init__(self) -> None:
        for component in (self.major, self.minor, self.patch):
            if isinstance(component, bool) or not isinstance(component, int):
                raise TypeError(f"Version components must be int, got {component!r}")
            if component < 0:
                raise ValueError(f"Version components must be non-negative: {self!r}")

    def to_semver(self) -> semantic_version.Version:
        """Return the equivalent ``semantic_version.Version``."""
        return semantic_version.Version(
            major=self.major, minor=self.minor, patch=self.patch
        )

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def __repr__(self) -> str:
        return f"Version({self.major}, {self.minor}, {self.patch})"
