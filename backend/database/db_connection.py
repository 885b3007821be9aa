"""
PostgreSQL connection helper.
Provides the Database wrapper used by every store.
"""

from contextlib import contextmanager
from typing import Iterator

import psycopg2
import psycopg2.errors
from psycopg2.extras import DictCursor

from backend.config import Config


class StoreError(Exception):
    """Raised when the database fails or times out."""


class DuplicateRecord(StoreError):
    """Raised when an insert violates a uniqueness constraint."""


class Database:
    """
    Opens short-lived connections against the configured database.

    Every connection carries a connect timeout and a statement timeout so
    that no store call blocks longer than `config.query_timeout_seconds`.
    """

    def __init__(self, config: Config) -> None:
        self.config = config

    def get_db(self):
        """
        Returns a new psycopg2 connection with dictionary-based row access.

        Returns:
            psycopg2.extensions.connection: A connection object with DictCursor factory.

        Raises:
            psycopg2.Error: If connection fails.
        """
        timeout = self.config.query_timeout_seconds
        conn = psycopg2.connect(
            self.config.dsn,
            connect_timeout=timeout,
            options=f"-c statement_timeout={timeout * 1000}",
        )
        conn.cursor_factory = DictCursor
        return conn

    @contextmanager
    def connection(self) -> Iterator:
        """
        Yield a connection inside a transaction and always close it.

        psycopg2's own `with conn:` commits or rolls back but leaves the
        connection open.
        """
        conn = self.get_db()
        try:
            with conn:
                yield conn
        finally:
            conn.close()

    @contextmanager
    def cursor(self) -> Iterator:
        """
        Yield a cursor, translating driver errors into store errors.

        Usage:
            with db.cursor() as cur:
                cur.execute(...)

        Raises:
            DuplicateRecord: On a unique constraint violation.
            StoreError: On any other database failure, including timeouts.
        """
        try:
            with self.connection() as conn:
                with conn.cursor() as cur:
                    yield cur
        except psycopg2.errors.UniqueViolation as e:
            raise DuplicateRecord(str(e)) from e
        except psycopg2.Error as e:
            raise StoreError(str(e)) from e
