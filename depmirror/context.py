"""
Shared context object for depmirror CLI commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from depmirror.config import DepMirrorConfig


class DepMirrorContext:
    """Per-invocation state shared between the CLI group and its commands.

    Attributes:
        config_path: Path to the loaded configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration (defaults when no file was found).
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: DepMirrorConfig = DepMirrorConfig()


#: Click decorator for injecting :class:`DepMirrorContext` into commands.
pass_context = click.make_pass_decorator(DepMirrorContext, ensure=True)
