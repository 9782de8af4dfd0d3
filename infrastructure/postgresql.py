# ============================================================================
# POSTGRESQL CONNECTION INFRASTRUCTURE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Infrastructure - PostgreSQL connection handling
# PURPOSE: Open one read-only catalog session per export
# CREATED: 19 OCT 2026
# ============================================================================
"""
PostgreSQL Connection Infrastructure

Provides the single database handle an export runs on:
- DSN built from ConnectionDefaults (PG* environment variables)
- dict_row factory (columns accessed by name, never by index)
- Context manager that always closes the handle

The handle is one logical session. Catalog accessors are issued on it one
after another; it is not meant to be shared between threads.

Usage:
    connection = PostgreSQLConnection()
    with connection.get_connection() as conn:
        repo = CatalogRepository(conn)
"""

from contextlib import contextmanager
from typing import Optional

import psycopg
from psycopg.rows import dict_row

from core.config import ConnectionDefaults
from core.logging import ComponentType, get_logger
from infrastructure.base_repository import ConnectionFailure

logger = get_logger(__name__, ComponentType.INFRASTRUCTURE)


class PostgreSQLConnection:
    """
    Connection factory for catalog reads.

    Args:
        defaults: Connection settings (defaults to the PG* environment)
        connection_string: Optional explicit DSN, overrides defaults
    """

    def __init__(
        self,
        defaults: Optional[ConnectionDefaults] = None,
        connection_string: Optional[str] = None,
    ):
        self.defaults = defaults or ConnectionDefaults.from_env()
        self._conn_string = connection_string

    @property
    def conn_string(self) -> str:
        """Explicit DSN if one was given, otherwise built from defaults."""
        if self._conn_string is None:
            self._conn_string = self.defaults.dsn()
        return self._conn_string

    @contextmanager
    def get_connection(self):
        """
        Context manager for a PostgreSQL connection.

        The session runs one read-only REPEATABLE READ transaction, so every
        accessor sees the same moment of catalog state. Closing the handle
        discards it.

        Yields:
            psycopg connection with dict_row factory

        Raises:
            ConnectionFailure: If the server cannot be reached or rejects the login
        """
        conn = None
        try:
            logger.debug(f"Connecting to PostgreSQL at {self.defaults.safe_dsn()}...")
            conn = psycopg.connect(self.conn_string, row_factory=dict_row)
            conn.isolation_level = psycopg.IsolationLevel.REPEATABLE_READ
            conn.read_only = True
            logger.debug("PostgreSQL connection established")
        except psycopg.Error as e:
            logger.error(f"PostgreSQL connection error: {e}")
            if conn:
                conn.close()
            raise ConnectionFailure(
                f"Could not connect to {self.defaults.safe_dsn()}: {e}",
                operation="connect",
            ) from e

        try:
            yield conn
        finally:
            conn.close()


__all__ = [
    "PostgreSQLConnection",
]
