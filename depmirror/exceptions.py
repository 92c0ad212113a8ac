"""
Custom exception hierarchy for depmirror.

Every error raised by depmirror derives from :class:`DepMirrorError`.
Structured context (offending literal, file path, command, ...) is kept in
the ``details`` mapping so the CLI and the logs can show it uniformly.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional, Sequence


class DepMirrorError(Exception):
    """Base exception for all depmirror errors.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


class ParseError(DepMirrorError):
    """Raised when a version, requirement or registry entry is malformed.

    Args:
        message: Error description.
        literal: The offending input string, verbatim.
        line_number: Line number in the source listing, if any.
        source: Name of the input the literal came from.
    """

    __slots__ = ("literal", "line_number", "source")

    def __init__(
        self,
        message: str,
        *,
        literal: Optional[str] = None,
        line_number: Optional[int] = None,
        source: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "literal", repr(literal) if literal is not None else None)
        _add_if(details, "line", line_number)
        _add_if(details, "source", source)

        super().__init__(message, details)

        self.literal = literal
        self.line_number = line_number
        self.source = source


class AmbiguousRequirementError(ParseError):
    """Raised when a requirement uses syntax the parser does not recognize."""

    __slots__ = ()


class MissingInputError(DepMirrorError):
    """Raised when a required input (registry listing, manifest, metadata)
    is absent or unreadable.

    Args:
        message: Error description.
        path: Path that could not be read.
        input_kind: Which input is missing (``registry``, ``manifest``, ...).
    """

    __slots__ = ("path", "input_kind")

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        input_kind: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", path)
        _add_if(details, "input", input_kind)

        super().__init__(message, details)

        self.path = path
        self.input_kind = input_kind


class MetadataError(DepMirrorError):
    """Raised when the external dependency resolver fails.

    Args:
        message: Error description.
        command: Command line that was executed.
        returncode: Process exit status, if the process ran.
        stderr: Captured standard error, truncated for safety.
    """

    __slots__ = ("command", "returncode", "stderr")

    def __init__(
        self,
        message: str,
        *,
        command: Optional[Sequence[str]] = None,
        returncode: Optional[int] = None,
        stderr: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "command", " ".join(command) if command else None)
        _add_if(details, "returncode", returncode)
        if stderr:
            details["stderr"] = _truncate(stderr.strip())

        super().__init__(message, details)

        self.command = list(command) if command else None
        self.returncode = returncode
        self.stderr = stderr


class FileOperationError(DepMirrorError):
    """Raised when file system operations fail.

    Args:
        message: Error description.
        file_path: Path to the file involved.
        operation: Operation being performed (read/write/backup).
        original_error: Original exception that triggered this error.
    """

    __slots__ = ("file_path", "operation", "original_error")

    def __init__(
        self,
        message: str,
        *,
        file_path: Optional[str] = None,
        operation: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", file_path)
        _add_if(details, "operation", operation)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.file_path = file_path
        self.operation = operation
        self.original_error = original_error


class ConfigError(DepMirrorError):
    """Raised when the configuration file is invalid.

    Args:
        message: Error description.
        config_path: Path to the configuration file.
        option: Offending option name, if applicable.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
