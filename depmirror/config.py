"""Configuration file loader for depmirror.

Supports two formats:

- ``depmirror.toml``: settings under ``[depmirror]`` table
- ``pyproject.toml``: settings under ``[tool.depmirror]`` table

Discovery order:

1. Explicit path from ``--config`` or ``DEPMIRROR_CONFIG``
2. ``depmirror.toml`` in current directory
3. ``pyproject.toml`` with ``[tool.depmirror]`` section

Configuration precedence: defaults < config file < CLI args.

Example (``depmirror.toml``)::

    [depmirror]
    registry_file = "mirror/crates.txt"
    manifest_path = "Cargo.toml"
    artifact_suffix = ".crate"
    backup = true
"""

from __future__ import annotations


import tomli as tomllib
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

from depmirror.exceptions import ConfigError
from depmirror.utils.logger import get_logger
from depmirror.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_ARTIFACT_SUFFIX,
    DEFAULT_BACKUP,
    DEFAULT_CARGO_COMMAND,
    DEFAULT_MANIFEST_PATH,
)

logger = get_logger("config")

_STRING_OPTIONS = ("registry_file", "manifest_path", "cargo", "artifact_suffix")
_BOOL_OPTIONS = ("backup",)


@dataclass
class DepMirrorConfig:
    """Parsed and validated depmirror configuration.

    Relative paths are resolved against the directory of the config file.

    Attributes:
        registry_file: Offline registry listing, or ``None`` if it must be
            given on the command line.
        manifest_path: Project manifest passed to ``cargo metadata``.
        cargo: Cargo executable.
        artifact_suffix: Suffix appended to written listing lines; empty
            follows the suffix the existing listing already uses.
        backup: Back up the listing before rewriting it.
        source_path: Path to loaded config file, or ``None`` for defaults.
    """

    registry_file: Optional[Path] = None
    manifest_path: Path = field(default_factory=lambda: Path(DEFAULT_MANIFEST_PATH))
    cargo: str = DEFAULT_CARGO_COMMAND
    artifact_suffix: str = DEFAULT_ARTIFACT_SUFFIX
    backup: bool = DEFAULT_BACKUP

    source_path: Optional[Path] = field(default=None, repr=False)

    def to_log_dict(self) -> Dict[str, Any]:
        """Return user-facing options for debug logging."""
        return {
            "registry_file": str(self.registry_file) if self.registry_file else None,
            "manifest_path": str(self.manifest_path),
            "cargo": self.cargo,
            "artifact_suffix": self.artifact_suffix,
            "backup": self.backup,
        }


def discover_config_file(explicit_path: Optional[Path] = None) -> Optional[Path]:
    """Find the configuration file to load.

    Args:
        explicit_path: Explicit config path. If provided, must exist.

    Returns:
        Resolved path to config file, or ``None`` if not found.

    Raises:
        ConfigError: Explicit path provided but does not exist.
    """
    if explicit_path is not None:
        resolved = explicit_path.resolve()
        if not resolved.is_file():
            raise ConfigError(
                f"Configuration file not found: {explicit_path}",
                config_path=str(explicit_path),
            )
        logger.debug("Using explicit config: %s", resolved)
        return resolved

    cwd = Path.cwd()

    dedicated = cwd / CONFIG_FILE_NAME
    if dedicated.is_file():
        logger.debug("Found %s: %s", CONFIG_FILE_NAME, dedicated)
        return dedicated

    pyproject_toml = cwd / "pyproject.toml"
    if pyproject_toml.is_file() and _pyproject_has_section(pyproject_toml):
        logger.debug("Found [tool.depmirror] in pyproject.toml: %s", pyproject_toml)
        return pyproject_toml

    logger.debug("No configuration file found")
    return None


def _pyproject_has_section(path: Path) -> bool:
    """Return True if pyproject.toml has a ``[tool.depmirror]`` table.

    An unreadable pyproject.toml is not an error here; it simply does not
    configure depmirror.
    """
    try:
        raw = _read_toml(path)
    except ConfigError as exc:
        logger.debug("Ignoring unreadable %s: %s", path, exc)
        return False
    return "depmirror" in raw.get("tool", {})


def load_config(config_path: Optional[Path] = None) -> DepMirrorConfig:
    """Load and validate depmirror configuration.

    Args:
        config_path: Explicit path to config file. If ``None``, uses
            auto-discovery (see :func:`discover_config_file`).

    Returns:
        Validated :class:`DepMirrorConfig` with values from file or defaults.

    Raises:
        ConfigError: File cannot be parsed, has unknown keys, or invalid values.
    """
    resolved = discover_config_file(config_path)

    if resolved is None:
        return DepMirrorConfig()

    logger.info("Loading configuration from %s", resolved)
    raw = _read_toml(resolved)

    if resolved.name == "pyproject.toml":
        section = raw.get("tool", {}).get("depmirror", {})
    else:
        section = raw.get("depmirror", {})

    if not section:
        logger.debug("Config file found but no depmirror section, using defaults")
        return DepMirrorConfig(source_path=resolved)

    config = _parse_section(section, base_dir=resolved.parent, config_path=str(resolved))
    config.source_path = resolved

    logger.debug("Loaded configuration: %s", config.to_log_dict())
    return config


def _read_toml(path: Path) -> Dict[str, Any]:
    """Read and parse a TOML file.

    Raises:
        ConfigError: File cannot be read or is not valid TOML.
    """
    try:
        with open(path, "rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            f"Invalid TOML in {path.name}: {exc}",
            config_path=str(path),
        ) from exc
    except OSError as exc:
        raise ConfigError(
            f"Cannot read configuration file {path}: {exc}",
            config_path=str(path),
        ) from exc


def _parse_section(
    section: Dict[str, Any],
    *,
    base_dir: Path,
    config_path: str,
) -> DepMirrorConfig:
    """Validate a ``[depmirror]`` table and build the config object.

    Raises:
        ConfigError: Unknown keys or values of the wrong type.
    """
    unknown = set(section) - set(_STRING_OPTIONS) - set(_BOOL_OPTIONS)
    if unknown:
        raise ConfigError(
            f"Unknown configuration keys: {', '.join(sorted(unknown))}",
            config_path=config_path,
        )

    for option in _STRING_OPTIONS:
        if option in section and not isinstance(section[option], str):
            raise ConfigError(
                f"{option} must be a string, got {type(section[option]).__name__}",
                config_path=config_path,
                option=option,
            )

    for option in _BOOL_OPTIONS:
        if option in section and not isinstance(section[option], bool):
            raise ConfigError(
                f"{option} must be a boolean, got {type(section[option]).__name__}",
                config_path=config_path,
                option=option,
            )

    config = DepMirrorConfig()

    if "registry_file" in section:
        config.registry_file = base_dir / section["registry_file"]
    if "manifest_path" in section:
        config.manifest_path = base_dir / section["manifest_path"]
    if "cargo" in section:
        if not section["cargo"].strip():
            raise ConfigError(
                "cargo must not be empty",
                config_path=config_path,
                option="cargo",
            )
        config.cargo = section["cargo"]
    if "artifact_suffix" in section:
        config.artifact_suffix = section["artifact_suffix"]
    if "backup" in section:
        config.backup = section["backup"]

    return config
