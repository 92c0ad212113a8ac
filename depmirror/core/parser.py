"""Parsers for versions, requirements and registry identifiers.

Every string that enters the core passes through this module once and is
turned into a typed value; later comparisons never look at raw text.

Versions and requirements are parsed with ``semantic_version``. Requirement
terms use cargo conventions and are normalized to ``SimpleSpec`` clauses
(comma-separated, all must hold):

- bare version ``1.2.3`` / ``1.2`` / ``1``: caret semantics (``^1.2.3``)
- ``^1.2.3``: caret (compatible with)
- ``~1.2.3``: tilde (same minor)
- ``=1.2.3``, ``>1.2``, ``>=1``, ``<2``, ``<=1.4``: literal comparison
- ``*``, ``1.*``, ``1.2.x`` or an empty string: wildcard

Typical usage::

    from depmirror.core.parser import parse_requirement, parse_version

    req = parse_requirement(">=0.4, <0.6")
    version = parse_version("0.5.1")
"""

from __future__ import annotations

import re
from typing import List, Optional

import semantic_version

from depmirror.exceptions import AmbiguousRequirementError, ParseError
from depmirror.models import DependencyEntry, PackageId, Requirement, Version
from depmirror.constants import KNOWN_ARTIFACT_SUFFIXES, PACKAGE_ID_SEPARATOR

# Longest operators first so ">=" is not read as ">"
_OPERATORS = (">=", "<=", ">", "<", "=", "~", "^")

_WILDCARDS = frozenset({"*", "x", "X"})

# Characters a version body may contain; anything else is unknown syntax
_BODY_RE = re.compile(r"^[0-9A-Za-z.*+\-]+$")


def parse_version(text: str, *, source: Optional[str] = None) -> Version:
    """Parse a strict ``MAJOR.MINOR.PATCH`` version string.

    Args:
        text: Version text, e.g. ``"1.0.210"``.
        source: Optional description of where the text came from.

    Returns:
        The parsed :class:`Version`.

    Raises:
        ParseError: The text is not a valid semantic version, or carries
            a pre-release or build suffix.
    """
    if not isinstance(text, str):
        raise ParseError("Version must be a string", literal=repr(text), source=source)

    try:
        parsed = semantic_version.Version(text)
    except ValueError as exc:
        raise ParseError(
            "Invalid version: expected MAJOR.MINOR.PATCH",
            literal=text,
            source=source,
        ) from exc

    if parsed.prerelease or parsed.build:
        raise ParseError(
            "Pre-release and build metadata are not supported",
            literal=text,
            source=source,
        )
    return Version(parsed.major, parsed.minor, parsed.patch)


def parse_requirement(text: str, *, source: Optional[str] = None) -> Requirement:
    """Parse a cargo-style semver requirement string.

    Args:
        text: Requirement text as declared by the dependent package.
        source: Optional description of where the text came from.

    Returns:
        The parsed :class:`Requirement`. ``*`` and the empty string yield
        a requirement that accepts any version.

    Raises:
        AmbiguousRequirementError: The text uses unrecognized syntax.
        ParseError: A version inside the requirement is malformed.
    """
    if not isinstance(text, str):
        raise ParseError("Requirement must be a string", literal=repr(text), source=source)

    stripped = text.strip()
    if stripped in ("", "*"):
        return Requirement(raw=text)

    if "||" in stripped:
        raise AmbiguousRequirementError(
            "Alternative requirement sets ('||') are not supported",
            literal=text,
            source=source,
        )

    clauses: List[str] = []
    for term in stripped.split(","):
        term = term.strip()
        if not term:
            raise AmbiguousRequirementError(
                "Empty term in requirement",
                literal=text,
                source=source,
            )
        clause = _normalize_term(term, text, source)
        if clause is not None:
            clauses.append(clause)

    requirement = Requirement(raw=text, clauses=tuple(clauses))
    try:
        requirement.spec  # compiled and cached here
    except ValueError as exc:
        raise ParseError(
            f"Invalid version in requirement: {exc}",
            literal=text,
            source=source,
        ) from exc
    return requirement


def _normalize_term(term: str, text: str, source: Optional[str]) -> Optional[str]:
    """Turn one cargo term into a ``SimpleSpec`` clause; ``None`` means any."""
    if term in _WILDCARDS:
        return None

    op = ""
    body = term
    for symbol in _OPERATORS:
        if term.startswith(symbol):
            op = symbol
            body = term[len(symbol):].strip()
            break

    if not body or not _BODY_RE.match(body):
        raise AmbiguousRequirementError(
            f"Unrecognized requirement term {term!r}",
            literal=text,
            source=source,
        )

    if "-" in body or "+" in body:
        raise ParseError(
            "Pre-release and build metadata are not supported",
            literal=text,
            source=source,
        )

    parts = body.split(".")
    wildcards = [part in _WILDCARDS for part in parts]
    if any(wildcards):
        first = wildcards.index(True)
        if not all(wildcards[first:]):
            raise AmbiguousRequirementError(
                f"Wildcard must be the last component in {term!r}",
                literal=text,
                source=source,
            )
        if op not in ("", "="):
            raise AmbiguousRequirementError(
                f"Wildcard cannot be combined with {op!r}",
                literal=text,
                source=source,
            )
        if first == 0:
            return None
        return f"=={'.'.join(parts[:first])}.*"

    # A bare version means caret; a single "=" is SimpleSpec's "=="
    if op == "":
        op = "^"
    elif op == "=":
        op = "=="
    return f"{op}{body}"


def parse_package_id(
    line: str,
    *,
    suffix: str = "",
    line_number: Optional[int] = None,
    source: Optional[str] = None,
) -> PackageId:
    """Parse a registry listing line of the form ``<name>-<version>``.

    The name may itself contain dashes; the version starts after the last
    one. A configured ``suffix`` and the known artifact suffixes (such as
    ``.crate``) are stripped first.

    Raises:
        ParseError: The line has no name, no separator or a bad version.
    """
    text = line
    for candidate in (suffix, *KNOWN_ARTIFACT_SUFFIXES):
        if candidate and text.endswith(candidate):
            text = text[: -len(candidate)]
            break

    index = text.rfind(PACKAGE_ID_SEPARATOR)
    name = text[:index]
    if index <= 0 or not name.strip() or any(ch.isspace() for ch in text):
        raise ParseError(
            "Invalid registry entry: expected <name>-<version>",
            literal=line,
            line_number=line_number,
            source=source,
        )

    try:
        version = parse_version(text[index + 1:])
    except ParseError as exc:
        raise ParseError(
            f"Invalid version in registry entry: {exc.message}",
            literal=line,
            line_number=line_number,
            source=source,
        ) from exc

    return PackageId(name, version)


def parse_dependency(
    name: str,
    requirement: str,
    resolved_version: str,
    *,
    source: Optional[str] = None,
) -> DependencyEntry:
    """Build a :class:`DependencyEntry` from one raw graph triple."""
    if not name or not name.strip():
        raise ParseError("Dependency without a name", literal=name, source=source)
    origin = source or name
    return DependencyEntry(
        name=name,
        requirement=parse_requirement(requirement, source=origin),
        resolved_version=parse_version(resolved_version, source=origin),
    )
