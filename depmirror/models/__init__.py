"""
Unified data model exports for depmirror.

Example:
    >>> from depmirror.models import Version, Requirement, Report
"""

from __future__ import annotations

from depmirror.models.version import Version
from depmirror.models.requirement import Requirement
from depmirror.models.dependency import DependencyEntry, PackageId
from depmirror.models.report import Category, Gap, Report

__all__ = [
    "Version",
    "Requirement",
    "PackageId",
    "DependencyEntry",
    "Category",
    "Gap",
    "Report",
]
