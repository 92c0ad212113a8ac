"""
Requirement data model for depmirror.

A :class:`Requirement` is the structured form of a dependency's version
requirement string (``"^1.2"``, ``">=0.4, <0.6"``, ``"*"``). The parser
normalizes each comma-separated term into a ``semantic_version``
:class:`~semantic_version.SimpleSpec` clause; the compiled spec does the
matching.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Tuple

import semantic_version


@dataclass(frozen=True)
class Requirement:
    """Parsed version requirement.

    An empty ``clauses`` tuple accepts any version.

    Attributes:
        raw: Requirement text exactly as declared.
        clauses: Normalized ``SimpleSpec`` clauses (``"^1.2"``,
            ``">=0.4"``, ``"==1.*"``) that must all be satisfied.
    """

    raw: str
    clauses: Tuple[str, ...] = ()

    @property
    def is_any(self) -> bool:
        """True if the requirement accepts every version."""
        return not self.clauses

    @property
    def expression(self) -> str:
        """The ``SimpleSpec`` expression built from ``clauses``."""
        return ",".join(self.clauses) if self.clauses else "*"

    @cached_property
    def spec(self) -> semantic_version.SimpleSpec:
        """Compiled spec; raises ``ValueError`` for clauses it rejects."""
        return semantic_version.SimpleSpec(self.expression)

    def __str__(self) -> str:
        return self.raw if self.raw.strip() else "*"
