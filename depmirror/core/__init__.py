"""
Core functionality exports for depmirror.

Importing from here keeps user-facing imports clean and stable:

    from depmirror.core import analyze, load_registry_file
"""

from __future__ import annotations

from depmirror.core.parser import (
    parse_dependency,
    parse_package_id,
    parse_requirement,
    parse_version,
)
from depmirror.core.matcher import best_satisfying, highest, satisfies
from depmirror.core.classifier import classify
from depmirror.core.registry import (
    RegistryIndex,
    detect_suffix,
    load_registry_file,
    merge_lines,
    write_registry_file,
)
from depmirror.core.engine import analyze, dependencies_from_triples
from depmirror.core.metadata import (
    extract_runtime_dependencies,
    load_dependency_triples,
)

__all__ = [
    "parse_version",
    "parse_requirement",
    "parse_package_id",
    "parse_dependency",
    "satisfies",
    "best_satisfying",
    "highest",
    "classify",
    "RegistryIndex",
    "detect_suffix",
    "load_registry_file",
    "merge_lines",
    "write_registry_file",
    "analyze",
    "dependencies_from_triples",
    "extract_runtime_dependencies",
    "load_dependency_triples",
]
