"""Root Typer application, mounts sub-commands."""

from __future__ import annotations

from typing import Optional

import typer

from helm_scout import __version__
from helm_scout.config.logging_config import setup_logging
from helm_scout.config.settings import settings

app = typer.Typer(
    name="hscout",
    help="Helm Scout - Upstream version drift for Helm releases.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hscout {__version__}")
        raise typer.Exit()


@app.callback()
def root(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (default: $LOG_LEVEL or INFO)"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit",
    ),
) -> None:
    level = "DEBUG" if verbose else (log_level or settings.log_level)
    setup_logging(level)


def _register_commands() -> None:
    from helm_scout.cli.commands.scan_cmd import app as scan_app
    from helm_scout.cli.commands.serve_cmd import app as serve_app

    app.add_typer(scan_app, name="scan", help="Report chart drift against upstream")
    app.add_typer(serve_app, name="serve", help="Serve the drift report over HTTP")


_register_commands()


def main() -> None:
    app()
