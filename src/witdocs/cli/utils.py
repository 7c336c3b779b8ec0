"""
CLI helpers shared by both commands: consoles, exit codes, logging setup
and error reporting.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as pkg_version
from typing import NoReturn

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from witdocs import __version__
from witdocs.errors import ConfigError, WitDocsError
from witdocs.logging import configure_logging, get_logger
from witdocs.settings import WitDocsSettings, get_settings

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_DOCS = 3


def version_callback(value: bool) -> None:
    if value:
        try:
            v = pkg_version("wit-docs")
        except PackageNotFoundError:
            v = __version__
        typer.echo(f"wit-docs {v}")
        raise typer.Exit()


def load_settings() -> WitDocsSettings:
    """Load settings, turning validation failures into ConfigError."""
    try:
        return get_settings(_force_reload=True)
    except ValidationError as e:
        raise ConfigError("invalid WITDOCS_* settings", cause=e) from e


def setup(log_level: str | None) -> WitDocsSettings:
    """Load settings and configure logging for one command invocation."""
    try:
        settings = load_settings()
        configure_logging(
            level=log_level or settings.log_level,
            json_format=settings.log_format == "json",
        )
    except ValueError as e:
        fail(ConfigError(str(e), cause=e))
    except WitDocsError as e:
        fail(e)
    return settings


def fail(error: WitDocsError) -> NoReturn:
    """Report ``error`` on stderr and exit with the failure status."""
    logger.debug("command.failed", **error.to_dict())
    err_console.print(f"[bold red]Error[/bold red]: {escape(error.describe())}")
    raise typer.Exit(code=EXIT_FAILURE)
