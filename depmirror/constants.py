"""
Centralized constants for depmirror.

This module defines immutable values used across depmirror, including
resolver invocation settings, registry listing conventions, and logging
formats. All values are intended to be treated as read-only.
"""

from typing import Final, Tuple

# ---------------------------------------------------------------------------
# Dependency graph extraction
# ---------------------------------------------------------------------------

#: Default manifest inspected when ``--manifest-path`` is not given.
DEFAULT_MANIFEST_PATH: Final[str] = "Cargo.toml"

#: Executable used to obtain the resolved dependency graph.
DEFAULT_CARGO_COMMAND: Final[str] = "cargo"

#: ``cargo metadata`` output schema understood by the metadata loader.
METADATA_FORMAT_VERSION: Final[str] = "1"

#: Upper bound (seconds) for a single resolver invocation.
DEFAULT_METADATA_TIMEOUT: Final[int] = 300

# ---------------------------------------------------------------------------
# Registry listing
# ---------------------------------------------------------------------------

#: Separator between package name and version in a listing line.
PACKAGE_ID_SEPARATOR: Final[str] = "-"

#: Artifact suffixes tolerated when reading a listing line.
KNOWN_ARTIFACT_SUFFIXES: Final[Tuple[str, ...]] = (".crate",)

#: Maximum allowed size (in bytes) of a registry listing or metadata export.
MAX_FILE_SIZE: Final[int] = 50 * 1024 * 1024  # 50 MB

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

#: Dedicated configuration file name.
CONFIG_FILE_NAME: Final[str] = "depmirror.toml"

#: Create a timestamped backup of the registry listing before rewriting it.
DEFAULT_BACKUP: Final[bool] = False

#: Suffix appended to entries written back to the registry listing.
DEFAULT_ARTIFACT_SUFFIX: Final[str] = ""

# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

#: Timestamp format for verbose logging.
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

#: Default log format (non-verbose).
LOG_DEFAULT_FORMAT: Final[str] = "%(levelname)s: %(message)s"

#: Verbose log format including timestamp and logger name.
LOG_VERBOSE_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
