"""
Utility helpers for depmirror.

- Console output helpers (Rich-based)
- Logging configuration and retrieval
- Filesystem safety helpers

Only symbols listed in ``__all__`` are considered part of the public API.
"""

from __future__ import annotations

from depmirror.utils.filesystem import (
    create_timestamped_backup,
    safe_read_file,
    safe_write_file,
)

from depmirror.utils.logger import (
    disable_logging,
    get_logger,
    is_logging_configured,
    setup_logging,
)

from depmirror.utils.console import (
    colorize_category,
    confirm,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
    reconfigure_console,
)

__all__ = [
    # Console
    "confirm",
    "print_error",
    "print_table",
    "print_success",
    "print_warning",
    "get_raw_console",
    "reconfigure_console",
    "colorize_category",
    # Logging
    "get_logger",
    "setup_logging",
    "disable_logging",
    "is_logging_configured",
    # Filesystem
    "safe_read_file",
    "safe_write_file",
    "create_timestamped_backup",
]
