"""Apply the SQL files under `db/migrations` and record them in `schema_migrations`."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Set

from psycopg2.extensions import cursor as PsycopgCursor
from rich.console import Console
from rich.table import Table

from vidshare.config.settings import Settings, get_settings
from vidshare.db.connection import connection_from_dsn

MIGRATIONS_ROOT = Path(__file__).resolve().parent / "migrations"

_CREATE_LEDGER = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    filename TEXT PRIMARY KEY,
    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
)
"""


def pending_migrations(directory: Path, applied: Set[str]) -> List[Path]:
    """Return the SQL files in ``directory`` not yet listed in ``applied``, in name order."""

    return [path for path in sorted(directory.glob("*.sql")) if path.name not in applied]


def _applied_names(db_cursor: PsycopgCursor) -> Set[str]:
    db_cursor.execute(_CREATE_LEDGER)
    db_cursor.execute("SELECT filename FROM schema_migrations")
    return {row[0] for row in db_cursor.fetchall()}


def run_migrations(
    console: Optional[Console] = None,
    *,
    settings: Optional[Settings] = None,
    directory: Path = MIGRATIONS_ROOT,
) -> List[str]:
    """Apply pending migrations in one transaction and return their file names.

    A failure rolls back every file of the run, so the ledger never lists a
    migration whose statements were not committed.
    """

    console = console or Console()
    settings = settings or get_settings()
    connection = connection_from_dsn(str(settings.database_url))

    table = Table(title="Database Migrations")
    table.add_column("Migration", style="cyan")
    table.add_column("Status", style="green")

    applied: List[str] = []
    try:
        with connection.cursor() as db_cursor:
            already_applied = _applied_names(db_cursor)
            for name in sorted(already_applied):
                table.add_row(name, "[dim]up to date[/dim]")
            for migration in pending_migrations(directory, already_applied):
                db_cursor.execute(migration.read_text(encoding="utf-8"))
                db_cursor.execute(
                    "INSERT INTO schema_migrations (filename) VALUES (%(filename)s)",
                    {"filename": migration.name},
                )
                table.add_row(migration.name, "applied")
                applied.append(migration.name)
        connection.commit()
    except Exception as exc:
        connection.rollback()
        console.print(f"[red]Migration failed:[/red] {exc}")
        raise
    finally:
        connection.close()

    if table.row_count:
        console.print(table)
    else:
        console.print("[yellow]No migrations found.[/yellow]")
    return applied


def main() -> None:
    """Entry point for running migrations via `python -m vidshare.db.migrate`."""

    run_migrations()


if __name__ == "__main__":  # pragma: no cover
    main()


__all__ = ["MIGRATIONS_ROOT", "pending_migrations", "run_migrations"]
