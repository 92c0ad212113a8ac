"""Satisfaction engine.

Runs the matcher and the classifier over a whole dependency list against a
:class:`~depmirror.core.registry.RegistryIndex` and collects the result in
a :class:`~depmirror.models.Report`. The engine performs no I/O; inputs are
parsed before it runs and the registry is never modified here.

Typical usage::

    dependencies = dependencies_from_triples(load_dependency_triples(manifest))
    report = analyze(dependencies, load_registry_file(registry_path))

    for gap in report.needs_approval:
        print(gap.name, gap.reason)
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from depmirror.core.classifier import classify
from depmirror.core.matcher import best_satisfying, highest, satisfies
from depmirror.core.parser import parse_dependency
from depmirror.core.registry import RegistryIndex
from depmirror.models import DependencyEntry, Gap, Report, Version
from depmirror.utils.logger import get_logger

logger = get_logger("engine")


def dependencies_from_triples(
    triples: Iterable[Tuple[str, str, str]],
) -> List[DependencyEntry]:
    """Parse raw ``(name, requirement, resolved_version)`` triples.

    Raises:
        ParseError: On the first malformed entry; no partial list is
            returned.
    """
    return [parse_dependency(name, req, resolved) for name, req, resolved in triples]


def offline_candidate(
    entry: DependencyEntry,
    available: Iterable[Version],
) -> Optional[Version]:
    """Pick the registry version an entry is compared against.

    The highest satisfying version wins; when none satisfies, the highest
    version held for the name is used so an upgrade or downgrade can
    still be reported.
    """
    versions = list(available)
    best = best_satisfying(entry.requirement, versions)
    if best is not None:
        return best
    return highest(versions)


def analyze(
    dependencies: Sequence[DependencyEntry],
    registry: RegistryIndex,
) -> Report:
    """Compare every dependency with the offline registry.

    Args:
        dependencies: Parsed dependency entries, in graph order.
        registry: Offline registry index (read-only).

    Returns:
        A :class:`Report` listing the gaps in input order.
    """
    gaps: List[Gap] = []

    for entry in dependencies:
        available = registry.versions(entry.name)

        if entry.resolved_version in available and satisfies(
            entry.requirement, entry.resolved_version
        ):
            logger.debug("%s %s: present offline", entry.name, entry.resolved_version)
            continue

        candidate = offline_candidate(entry, available)
        category = classify(entry.requirement, entry.resolved_version, candidate)

        logger.debug(
            "%s %s: %s (offline: %s)",
            entry.name,
            entry.resolved_version,
            category.value,
            candidate if candidate is not None else "-",
        )
        gaps.append(
            Gap(
                name=entry.name,
                requirement=entry.requirement,
                resolved_version=entry.resolved_version,
                best_offline=candidate,
                category=category,
            )
        )

    report = Report(gaps=tuple(gaps), total_dependencies=len(dependencies))
    logger.info(
        "Analyzed %d dependencies: %d gap(s), %d requiring approval",
        report.total_dependencies,
        len(report),
        len(report.needs_approval),
    )
    return report
