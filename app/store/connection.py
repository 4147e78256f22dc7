"""
Directory Store Connection
==========================
One psycopg2 connection per call. Every connection carries a server-side
statement_timeout so no read can block a request indefinitely.

There is no global "connected" flag: is_available() probes the database
on demand and callers decide what to do with the answer.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import psycopg2
from psycopg2.extras import RealDictCursor

from app.shared.errors import ServiceUnavailable

logger = logging.getLogger(__name__)


class Database:
    """Connection factory for the directory's PostgreSQL database."""

    def __init__(
        self,
        database_url: Optional[str],
        statement_timeout_ms: int = 5000,
        connect_timeout_s: int = 5,
    ):
        self.database_url = database_url
        self.statement_timeout_ms = statement_timeout_ms
        self.connect_timeout_s = connect_timeout_s

    def _open(self):
        if not self.database_url:
            raise ServiceUnavailable("Database is not configured (DATABASE_URL missing)")
        try:
            return psycopg2.connect(
                self.database_url,
                cursor_factory=RealDictCursor,
                connect_timeout=self.connect_timeout_s,
                options=f"-c statement_timeout={self.statement_timeout_ms}",
            )
        except psycopg2.OperationalError as e:
            logger.error(f"Database connection error: {e}")
            raise ServiceUnavailable("Database service unavailable") from e

    @contextmanager
    def connect(self) -> Iterator["psycopg2.extensions.connection"]:
        """
        Yield a connection; commit on success, roll back on error, always close.

        OperationalError raised mid-call (dropped connection, statement
        timeout) surfaces as ServiceUnavailable.
        """
        conn = self._open()
        try:
            yield conn
            conn.commit()
        except psycopg2.OperationalError as e:
            _rollback_quietly(conn)
            logger.error(f"Database operation failed: {e}")
            raise ServiceUnavailable("Database service unavailable") from e
        except Exception:
            _rollback_quietly(conn)
            raise
        finally:
            conn.close()

    @contextmanager
    def cursor(self) -> Iterator[RealDictCursor]:
        with self.connect() as conn:
            with conn.cursor() as cur:
                yield cur

    def is_available(self) -> bool:
        """Connection-health capability query (SELECT 1)."""
        try:
            with self.cursor() as cur:
                cur.execute("SELECT 1")
                cur.fetchone()
            return True
        except ServiceUnavailable:
            return False

    def server_time(self):
        with self.cursor() as cur:
            cur.execute("SELECT NOW() AS current_time")
            return cur.fetchone()["current_time"]


def _rollback_quietly(conn) -> None:
    try:
        conn.rollback()
    except psycopg2.Error as e:
        # connection already unusable; close() in the caller still runs
        logger.warning(f"Rollback failed: {e}")
