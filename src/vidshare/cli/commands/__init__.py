"""Subcommands of the vidshare CLI."""

from __future__ import annotations

import typer
from rich.console import Console

from vidshare.cli.commands import database, server


def register_commands(app: typer.Typer, console: Console) -> None:
    """Attach the server and database commands to ``app``."""

    server.register(app, console)
    database.register(app, console)


__all__ = ["register_commands"]
