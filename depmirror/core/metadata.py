"""Dependency graph extraction from ``cargo metadata``.

The resolved graph comes from an external command::

    cargo metadata --format-version 1 --manifest-path Cargo.toml

Only runtime edges are followed (dev and build dependencies are skipped),
starting from the workspace members. Packages without a ``source`` (path
and workspace crates) are traversed but never reported, since they are not
fetched from a registry.

When one package is required by several parents, their requirement
strings are joined with ``", "`` so the combined requirement must hold.
"""

from __future__ import annotations

import json
import subprocess
from collections import deque
from pathlib import Path
from typing import Any, Deque, Dict, List, Mapping, Optional, Set, Tuple

from depmirror.exceptions import MetadataError, MissingInputError
from depmirror.utils.logger import get_logger
from depmirror.utils.filesystem import safe_read_file
from depmirror.constants import (
    DEFAULT_CARGO_COMMAND,
    DEFAULT_METADATA_TIMEOUT,
    METADATA_FORMAT_VERSION,
)

logger = get_logger("metadata")

DependencyTriple = Tuple[str, str, str]


def run_cargo_metadata(
    manifest_path: Path,
    *,
    cargo: str = DEFAULT_CARGO_COMMAND,
    timeout: int = DEFAULT_METADATA_TIMEOUT,
) -> Dict[str, Any]:
    """Run ``cargo metadata`` for a manifest and return the decoded JSON.

    Raises:
        MissingInputError: The manifest does not exist.
        MetadataError: The command cannot be started, fails, times out or
            prints invalid JSON.
    """
    if not manifest_path.is_file():
        raise MissingInputError(
            "Manifest not found",
            path=str(manifest_path),
            input_kind="manifest",
        )

    command = [
        cargo,
        "metadata",
        "--format-version",
        METADATA_FORMAT_VERSION,
        "--manifest-path",
        str(manifest_path),
    ]
    logger.info("Scanning project dependencies: %s", " ".join(command))

    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as exc:
        raise MetadataError(
            f"Resolver executable not found: {cargo}",
            command=command,
        ) from exc
    except subprocess.TimeoutExpired as exc:
        raise MetadataError(
            f"Resolver timed out after {timeout}s",
            command=command,
        ) from exc

    if result.returncode != 0:
        raise MetadataError(
            "Failed to run cargo metadata. Is this a valid Rust project?",
            command=command,
            returncode=result.returncode,
            stderr=result.stderr,
        )

    return _decode(result.stdout, command=command)


def load_metadata_file(path: Path) -> Dict[str, Any]:
    """Read a saved ``cargo metadata`` JSON export.

    Raises:
        MissingInputError: The file does not exist.
        MetadataError: The file is not valid JSON.
    """
    if not path.is_file():
        raise MissingInputError(
            "Metadata file not found",
            path=str(path),
            input_kind="metadata",
        )
    logger.info("Reading dependency metadata from %s", path)
    return _decode(safe_read_file(path), command=None)


def _decode(text: str, *, command: Optional[List[str]]) -> Dict[str, Any]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MetadataError(
            f"Invalid metadata JSON: {exc}",
            command=command,
        ) from exc
    if not isinstance(data, dict):
        raise MetadataError("Metadata must be a JSON object", command=command)
    return data


def _is_runtime_edge(dep: Mapping[str, Any]) -> bool:
    """True if a resolve edge has at least one normal (non-dev, non-build) kind."""
    kinds = dep.get("dep_kinds")
    if kinds is None:
        return True
    return any(kind.get("kind") is None for kind in kinds)


def _declared_requirement(
    parent: Mapping[str, Any],
    child: Mapping[str, Any],
    extern_name: str,
) -> Optional[str]:
    """Find the requirement ``parent`` declares for ``child``."""
    declared = [
        dep
        for dep in parent.get("dependencies", [])
        if dep.get("name") == child["name"] and dep.get("kind") is None
    ]
    for dep in declared:
        rename = dep.get("rename")
        if rename and rename.replace("-", "_") == extern_name:
            return dep.get("req")
    return declared[0].get("req") if declared else None


def extract_runtime_dependencies(metadata: Mapping[str, Any]) -> List[DependencyTriple]:
    """Walk the resolve graph and return ``(name, requirement, version)``.

    Traversal is breadth-first from the sorted workspace members, visiting
    edges sorted by package id, so the result order is stable.

    Raises:
        MetadataError: The metadata has no resolve graph or references
            unknown packages.
    """
    resolve = metadata.get("resolve")
    if not resolve:
        raise MetadataError("Metadata does not contain a resolved dependency graph")

    packages: Dict[str, Mapping[str, Any]] = {
        pkg["id"]: pkg for pkg in metadata.get("packages", [])
    }
    nodes: Dict[str, Mapping[str, Any]] = {
        node["id"]: node for node in resolve.get("nodes", [])
    }

    roots = sorted(metadata.get("workspace_members") or [])
    if not roots and resolve.get("root"):
        roots = [resolve["root"]]

    queue: Deque[str] = deque(roots)
    visited: Set[str] = set(roots)
    requirements: Dict[str, List[str]] = {}

    while queue:
        parent_id = queue.popleft()
        parent = packages.get(parent_id)
        node = nodes.get(parent_id)
        if parent is None or node is None:
            raise MetadataError(f"Unknown package in resolve graph: {parent_id}")

        for dep in sorted(node.get("deps", []), key=lambda d: d["pkg"]):
            if not _is_runtime_edge(dep):
                continue

            child_id = dep["pkg"]
            child = packages.get(child_id)
            if child is None:
                raise MetadataError(f"Unknown package in resolve graph: {child_id}")

            if child.get("source") is not None:
                req = _declared_requirement(parent, child, dep.get("name", ""))
                if req is None:
                    logger.warning(
                        "%s does not declare a requirement for %s; assuming '*'",
                        parent["name"],
                        child["name"],
                    )
                    req = "*"
                reqs = requirements.setdefault(child_id, [])
                if req not in reqs:
                    reqs.append(req)

            if child_id not in visited:
                visited.add(child_id)
                queue.append(child_id)

    triples = [
        (packages[pkg_id]["name"], ", ".join(reqs), packages[pkg_id]["version"])
        for pkg_id, reqs in requirements.items()
    ]
    logger.info("Found %d runtime dependencies", len(triples))
    return triples


def load_dependency_triples(
    manifest_path: Path,
    *,
    metadata_file: Optional[Path] = None,
    cargo: str = DEFAULT_CARGO_COMMAND,
    timeout: int = DEFAULT_METADATA_TIMEOUT,
) -> List[DependencyTriple]:
    """Obtain runtime dependency triples from a saved export or from cargo."""
    if metadata_file is not None:
        metadata = load_metadata_file(metadata_file)
    else:
        metadata = run_cargo_metadata(manifest_path, cargo=cargo, timeout=timeout)
    return extract_runtime_dependencies(metadata)
