"""Offline registry index and listing persistence.

The registry listing is a flat text file with one ``<name>-<version>``
artifact per line. :class:`RegistryIndex` is the read-only, in-memory view
used by the satisfaction engine; :func:`load_registry_file` and
:func:`write_registry_file` are the I/O collaborators around it.

Typical usage::

    index = load_registry_file(Path("registry.txt"))
    versions = index.versions("serde")

    # after analysis, if the operator accepts the report
    write_registry_file(Path("registry.txt"), index.lines, report.write_back_entries())
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from depmirror.exceptions import MissingInputError
from depmirror.core.parser import parse_package_id
from depmirror.models import PackageId, Version
from depmirror.constants import KNOWN_ARTIFACT_SUFFIXES
from depmirror.utils.logger import get_logger
from depmirror.utils.filesystem import safe_read_file, safe_write_file

logger = get_logger("registry")

_EMPTY: FrozenSet[Version] = frozenset()


class RegistryIndex:
    """Mapping of package name to the versions available offline.

    Instances are immutable once built. Use :meth:`from_lines` to build
    one from listing content.

    Args:
        versions: Mapping of package name to its offline versions.
        lines: Original listing lines, kept for write-back.
    """

    __slots__ = ("_versions", "_lines")

    def __init__(
        self,
        versions: Optional[Mapping[str, Iterable[Version]]] = None,
        *,
        lines: Iterable[str] = (),
    ) -> None:
        self._versions: Dict[str, FrozenSet[Version]] = {
            name: frozenset(found) for name, found in (versions or {}).items()
        }
        self._lines: Tuple[str, ...] = tuple(lines)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        suffix: str = "",
        source: Optional[str] = None,
    ) -> "RegistryIndex":
        """Build an index from listing lines.

        Surrounding whitespace is trimmed and blank lines are skipped.
        Any other line must be a valid ``<name>-<version>`` identifier.

        Raises:
            ParseError: A line is malformed; nothing is silently dropped.
        """
        versions: Dict[str, set] = {}
        kept: List[str] = []
        for number, raw in enumerate(lines, start=1):
            line = raw.strip()
            if not line:
                continue
            package = parse_package_id(
                line, suffix=suffix, line_number=number, source=source
            )
            versions.setdefault(package.name, set()).add(package.version)
            kept.append(line)

        logger.debug(
            "Indexed %d artifact(s) across %d package(s)", len(kept), len(versions)
        )
        return cls(versions, lines=kept)

    def versions(self, name: str) -> FrozenSet[Version]:
        """Versions available for ``name`` (empty when absent)."""
        return self._versions.get(name, _EMPTY)

    def contains(self, package: PackageId) -> bool:
        """True if the exact artifact is present."""
        return package.version in self.versions(package.name)

    @property
    def names(self) -> List[str]:
        """Sorted package names present in the index."""
        return sorted(self._versions)

    @property
    def lines(self) -> Tuple[str, ...]:
        """Non-blank listing lines the index was built from."""
        return self._lines

    def __contains__(self, name: object) -> bool:
        return name in self._versions

    def __len__(self) -> int:
        return sum(len(found) for found in self._versions.values())

    def __repr__(self) -> str:
        return f"RegistryIndex(packages={len(self._versions)}, artifacts={len(self)})"


def load_registry_file(path: Path, *, suffix: str = "") -> RegistryIndex:
    """Read and index a registry listing file.

    Raises:
        MissingInputError: The file does not exist.
        FileOperationError: The file cannot be read.
        ParseError: A line is malformed.
    """
    if not path.is_file():
        raise MissingInputError(
            "Registry file not found",
            path=str(path),
            input_kind="registry",
        )

    logger.info("Reading registry file %s", path)
    content = safe_read_file(path)
    return RegistryIndex.from_lines(content.splitlines(), suffix=suffix, source=str(path))


def detect_suffix(lines: Iterable[str]) -> str:
    """Artifact suffix shared by every listing line, or ``""``.

    Only the known artifact suffixes are recognized; a listing that mixes
    suffixed and bare lines (or is empty) has no common suffix.
    """
    kept = [line.strip() for line in lines if line.strip()]
    if not kept:
        return ""
    for candidate in KNOWN_ARTIFACT_SUFFIXES:
        if all(line.endswith(candidate) for line in kept):
            return candidate
    return ""


def merge_lines(
    existing: Iterable[str],
    additions: Iterable[PackageId],
    *,
    suffix: str = "",
) -> List[str]:
    """Combine listing lines with new artifacts, de-duplicated and sorted.

    New lines get ``suffix``; when it is empty they follow the suffix the
    existing lines share (see :func:`detect_suffix`).
    """
    merged = {line.strip() for line in existing if line.strip()}
    suffix = suffix or detect_suffix(merged)
    merged.update(package.to_line(suffix) for package in additions)
    return sorted(merged)


def write_registry_file(
    path: Path,
    existing: Iterable[str],
    additions: Iterable[PackageId],
    *,
    suffix: str = "",
    backup: bool = False,
) -> List[str]:
    """Append ``additions`` to the listing and persist it sorted.

    Args:
        path: Listing file to rewrite.
        existing: Current listing lines.
        additions: Artifacts to add.
        suffix: Suffix appended to every new line; empty follows the
            existing lines.
        backup: Keep a timestamped copy of the previous file.

    Returns:
        The lines that were written.
    """
    lines = merge_lines(existing, additions, suffix=suffix)
    content = "".join(f"{line}\n" for line in lines)
    backup_path = safe_write_file(path, content, create_backup=backup)
    if backup_path is not None:
        logger.info("Backed up previous registry file to %s", backup_path)
    logger.info("Wrote %d entries to %s", len(lines), path)
    return lines
