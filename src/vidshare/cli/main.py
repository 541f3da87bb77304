"""CLI entry point and application wiring."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Optional

import typer
from rich.console import Console

from vidshare.cli.commands import register_commands
from vidshare.utils.log import configure_logging


def _installed_version() -> str:
    try:
        return version("vidshare")
    except PackageNotFoundError:
        return "unknown"


class CLIApplication:
    """Typer application exposing the API server and database maintenance."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()
        self._app = typer.Typer(
            add_completion=False,
            rich_markup_mode="rich",
            help="Video sharing backend: run the API server and manage its database.",
        )
        self._app.callback(invoke_without_command=True)(self._root)
        register_commands(self._app, self.console)

    @property
    def app(self) -> typer.Typer:
        return self._app

    def run(self, *, prog_name: Optional[str] = None, args: Optional[list[str]] = None) -> None:
        self._app(prog_name=prog_name, args=args)

    def _root(
        self,
        ctx: typer.Context,
        log_level: Optional[str] = typer.Option(
            None,
            "--log-level",
            help="Override LOG_LEVEL for this invocation (DEBUG, INFO, WARNING, ...)",
        ),
        show_version: bool = typer.Option(False, "--version", help="Print the installed version and exit"),
    ) -> None:
        if show_version:
            self.console.print(f"vidshare {_installed_version()}")
            raise typer.Exit()
        if log_level:
            configure_logging(log_level.upper(), console=self.console)
        if ctx.invoked_subcommand is None:
            self.console.print("[bold green]vidshare CLI ready for commands.[/bold green]")


def create_app(console: Optional[Console] = None) -> typer.Typer:
    """Factory helper that returns the configured Typer application."""

    return CLIApplication(console=console).app


def main() -> None:
    """Console script entry point for the installed `vidshare` command."""

    CLIApplication().run(prog_name="vidshare")


__all__ = ["CLIApplication", "create_app", "main"]
