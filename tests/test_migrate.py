"""Migration runner bookkeeping, checked against a stub connection."""

from __future__ import annotations

import pytest
from rich.console import Console

from vidshare.db import migrate


class LedgerCursor:
    def __init__(self, connection: "LedgerConnection") -> None:
        self._connection = connection

    def __enter__(self) -> "LedgerCursor":
        return self

    def __exit__(self, *exc_info: object) -> bool:
        return False

    def execute(self, query: str, params: object = None) -> None:
        if self._connection.fail_on and self._connection.fail_on in query:
            raise RuntimeError("syntax error")
        self._connection.executed.append((query, params))

    def fetchall(self):
        return [(name,) for name in self._connection.recorded]


class LedgerConnection:
    def __init__(self, recorded=(), fail_on=None) -> None:
        self.recorded = list(recorded)
        self.fail_on = fail_on
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self) -> LedgerCursor:
        return LedgerCursor(self)

    def commit(self) -> None:
        self.committed = True

    def rollback(self) -> None:
        self.rolled_back = True

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def migrations_dir(tmp_path):
    (tmp_path / "001_first.sql").write_text("CREATE TABLE first ();", encoding="utf-8")
    (tmp_path / "002_second.sql").write_text("CREATE TABLE second ();", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    return tmp_path


def _run(monkeypatch, settings, connection, directory):
    monkeypatch.setattr(migrate, "connection_from_dsn", lambda dsn: connection)
    console = Console(file=None, force_terminal=False, quiet=True)
    return migrate.run_migrations(console, settings=settings, directory=directory)


def test_pending_migrations_skips_recorded_files(migrations_dir):
    pending = migrate.pending_migrations(migrations_dir, {"001_first.sql"})

    assert [path.name for path in pending] == ["002_second.sql"]


def test_applies_and_records_new_files(monkeypatch, settings, migrations_dir):
    connection = LedgerConnection()

    applied = _run(monkeypatch, settings, connection, migrations_dir)

    assert applied == ["001_first.sql", "002_second.sql"]
    recorded = [params["filename"] for _, params in connection.executed if params]
    assert recorded == applied
    assert connection.committed and connection.closed


def test_second_run_applies_nothing(monkeypatch, settings, migrations_dir):
    connection = LedgerConnection(recorded=["001_first.sql", "002_second.sql"])

    assert _run(monkeypatch, settings, connection, migrations_dir) == []
    assert not any("CREATE TABLE first" in query for query, _ in connection.executed)


def test_failure_rolls_back(monkeypatch, settings, migrations_dir):
    connection = LedgerConnection(fail_on="CREATE TABLE second")

    with pytest.raises(RuntimeError):
        _run(monkeypatch, settings, connection, migrations_dir)

    assert connection.rolled_back
    assert not connection.committed
    assert connection.closed
