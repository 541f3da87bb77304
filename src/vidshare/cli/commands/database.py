"""Database maintenance commands."""

from __future__ import annotations

import typer
from psycopg2 import Error as PsycopgError
from rich.console import Console

from vidshare.config.settings import get_settings
from vidshare.db.connection import connection_from_dsn
from vidshare.db.migrate import run_migrations


class DatabaseExitCode:
    """Mapping of meaningful CLI exit codes."""

    SUCCESS = 0
    DATABASE_ERROR = 1


def register(app: typer.Typer, console: Console) -> None:
    """Register migration and connectivity commands."""

    @app.command("migrate")
    def migrate() -> None:
        """Apply the bundled SQL migrations."""

        try:
            applied = run_migrations(console=console)
        except PsycopgError as exc:
            raise typer.Exit(code=DatabaseExitCode.DATABASE_ERROR) from exc
        console.print(f"[green]{len(applied)} migration(s) applied.[/green]")

    @app.command("check-db")
    def check_db() -> None:
        """Connect to DATABASE_URL and run `SELECT 1`."""

        settings = get_settings()
        try:
            conn = connection_from_dsn(str(settings.database_url))
            try:
                with conn.cursor() as cur:
                    cur.execute("SELECT 1;")
                    result = cur.fetchone()
            finally:
                conn.close()
        except PsycopgError as exc:
            console.print(f"[red]Connection failed:[/red] {exc}")
            raise typer.Exit(code=DatabaseExitCode.DATABASE_ERROR) from exc
        console.print(f"[green]Connection successful[/green], SELECT 1 returned: {result}")


__all__ = ["DatabaseExitCode", "register"]
