"""CLI commands exercised through Typer's test runner."""

from __future__ import annotations

import logging

import psycopg2
from rich.console import Console
from typer.testing import CliRunner

from vidshare.cli.commands import database
from vidshare.cli.main import create_app

runner = CliRunner()


class StubCursor:
    def __enter__(self) -> "StubCursor":
        return self

    def __exit__(self, *exc_info: object) -> bool:
        return False

    def execute(self, query: str) -> None:
        self.query = query

    def fetchone(self):
        return (1,)


class StubConnection:
    def __init__(self) -> None:
        self.closed = False

    def cursor(self) -> StubCursor:
        return StubCursor()

    def close(self) -> None:
        self.closed = True


def _app():
    return create_app(console=Console(force_terminal=False, width=120))


def test_without_subcommand_prints_banner():
    result = runner.invoke(_app(), [])

    assert result.exit_code == 0
    assert "vidshare CLI ready" in result.output


def test_version_flag():
    result = runner.invoke(_app(), ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("vidshare ")


def test_log_level_option_configures_package_logger(monkeypatch):
    monkeypatch.setattr(database, "run_migrations", lambda console: [])

    result = runner.invoke(_app(), ["--log-level", "debug", "migrate"])

    assert result.exit_code == 0
    assert logging.getLogger("vidshare").level == logging.DEBUG


def test_migrate_reports_applied_files(monkeypatch):
    monkeypatch.setattr(database, "run_migrations", lambda console: ["001_create_users.sql"])

    result = runner.invoke(_app(), ["migrate"])

    assert result.exit_code == 0
    assert "1 migration(s) applied." in result.output


def test_migrate_database_failure_exits_with_error(monkeypatch):
    def fail(console):
        raise psycopg2.OperationalError("connection refused")

    monkeypatch.setattr(database, "run_migrations", fail)

    result = runner.invoke(_app(), ["migrate"])

    assert result.exit_code == database.DatabaseExitCode.DATABASE_ERROR


def test_check_db_success(monkeypatch, settings):
    connection = StubConnection()
    monkeypatch.setattr(database, "get_settings", lambda: settings)
    monkeypatch.setattr(database, "connection_from_dsn", lambda dsn: connection)

    result = runner.invoke(_app(), ["check-db"])

    assert result.exit_code == 0
    assert "Connection successful" in result.output
    assert connection.closed


def test_check_db_failure(monkeypatch, settings):
    def refuse(dsn):
        raise psycopg2.OperationalError("could not connect")

    monkeypatch.setattr(database, "get_settings", lambda: settings)
    monkeypatch.setattr(database, "connection_from_dsn", refuse)

    result = runner.invoke(_app(), ["check-db"])

    assert result.exit_code == database.DatabaseExitCode.DATABASE_ERROR
    assert "Connection failed" in result.output
