"""Database connection utilities using psycopg2 connection pooling."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from psycopg2 import connect
from psycopg2.extensions import connection as PsycopgConnection
from psycopg2.pool import ThreadedConnectionPool

from vidshare.config.settings import Settings

DEFAULT_MIN_CONNECTIONS = 1
DEFAULT_MAX_CONNECTIONS = 5
DEFAULT_ACQUIRE_TIMEOUT = 30.0


class PoolTimeoutError(RuntimeError):
    """Raised when no pooled connection frees up within the acquire timeout."""


class DatabasePool:
    """Lightweight wrapper around psycopg2's ThreadedConnectionPool.

    The API serves synchronous route handlers from a thread pool, so the
    thread-safe pool variant is required. psycopg2 raises as soon as every
    connection is checked out; a semaphore sized to ``max_connections`` makes
    callers wait for a free connection instead.
    """

    def __init__(
        self,
        dsn: str,
        *,
        min_connections: int = DEFAULT_MIN_CONNECTIONS,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        acquire_timeout: Optional[float] = DEFAULT_ACQUIRE_TIMEOUT,
    ) -> None:
        self._pool = ThreadedConnectionPool(min_connections, max_connections, dsn)
        self._slots = threading.BoundedSemaphore(max_connections)
        self._acquire_timeout = acquire_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabasePool":
        """Create a pool sized according to the application settings."""

        return cls(
            str(settings.database_url),
            min_connections=settings.db_min_connections,
            max_connections=settings.db_max_connections,
            acquire_timeout=settings.db_acquire_timeout,
        )

    @contextmanager
    def connection(self) -> Iterator[PsycopgConnection]:
        """Yield a transactional connection, waiting while the pool is exhausted."""

        if not self._slots.acquire(timeout=self._acquire_timeout):
            raise PoolTimeoutError("Database is busy, try again shortly")
        try:
            conn = self._pool.getconn()
            try:
                yield conn
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                self._pool.putconn(conn)
        finally:
            self._slots.release()

    def ping(self) -> bool:
        """Return ``True`` when a trivial query succeeds on a pooled connection."""

        with self.connection() as conn:
            with conn.cursor() as cursor:
                cursor.execute("SELECT 1")
                return cursor.fetchone() == (1,)

    def close(self) -> None:
        """Close all pooled connections."""

        self._pool.closeall()


def connection_from_dsn(dsn: str) -> PsycopgConnection:
    """Create a standalone connection using the given DSN."""

    return connect(dsn)


__all__ = ["DatabasePool", "PoolTimeoutError", "connection_from_dsn"]
