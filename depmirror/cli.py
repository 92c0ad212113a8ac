"""
Command-line interface for depmirror.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from depmirror.config import load_config
from depmirror.__version__ import __version__
from depmirror.context import DepMirrorContext
from depmirror.exceptions import ConfigError, DepMirrorError
from depmirror.utils.logger import get_logger, setup_logging
from depmirror.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="DEPMIRROR_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="DEPMIRROR_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="depmirror",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """depmirror: audit a project's dependencies against an offline registry.

    \b
    Available commands:
      depmirror check              Find crates missing from the registry

    \b
    Examples:
      depmirror check -r registry.txt
      depmirror check -r registry.txt --write
      depmirror -v check -m path/to/Cargo.toml -r registry.txt

    Use ``depmirror COMMAND --help`` for command-specific options.
    """
    # Respect NO_COLOR before any output is produced
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    depmirror_ctx = DepMirrorContext()
    depmirror_ctx.config_path = config or loaded_config.source_path
    depmirror_ctx.color = color
    depmirror_ctx.verbose = verbose
    depmirror_ctx.config = loaded_config
    ctx.obj = depmirror_ctx

    logger.debug("depmirror v%s", __version__)
    logger.debug("Config path: %s", depmirror_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Map ``-v`` count to a logging level and install the handler."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


from depmirror.commands.check import check  # noqa: E402

cli.add_command(check)


def main() -> int:
    """Main entry point for the depmirror CLI.

    Returns:
        Exit code:
            0   Success
            1   Missing crates, or an application error
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        cli(standalone_mode=False)
        return 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except DepMirrorError as exc:
        print_error(str(exc))
        logger.debug(
            "DepMirrorError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
