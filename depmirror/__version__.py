"""
depmirror version information.

Single source of truth for the package version. The CLI reports it via
``depmirror --version``.
"""

from __future__ import annotations

__version__ = "0.2.0"

VERSION_STRING = f"depmirror {__version__}"
