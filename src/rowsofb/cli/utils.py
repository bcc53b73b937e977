"""
RowsOfB CLI Utilities.

Shared utility functions used across CLI modules.
"""

import logging
import platform

import typer

from rowsofb._version import get_version

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"RowsOfB version {get_version()}")
        typer.echo(
            f"Python {platform.python_implementation()} {platform.python_version()}"
            f" on {platform.system()} {platform.machine()}"
        )
        raise typer.Exit()


def configure_logging(level_name: str, verbose: bool = False) -> None:
    """Configure root logging for a CLI run."""
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
