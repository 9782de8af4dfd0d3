# ============================================================================
# BASE REPOSITORY - ERROR HANDLING PATTERNS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Infrastructure - Base repository patterns
# PURPOSE: Failure taxonomy and error context for catalog readers
# CREATED: 19 OCT 2026
# ============================================================================
"""
Base Repository Patterns

Abstract base class that provides common infrastructure for catalog readers:
- Failure taxonomy (connection, query, scan, conversion)
- Consistent error handling with a context manager
- Standardized logging

No local recovery: every failure is logged once and re-raised to the caller.
"""

from abc import ABC
from contextlib import contextmanager
from typing import Optional

import psycopg
import pydantic

from core.logging import ComponentType, get_logger


class RepositoryError(Exception):
    """Base exception for catalog repository operations."""

    def __init__(self, message: str, operation: str = None, entity_id: str = None):
        self.operation = operation
        self.entity_id = entity_id
        super().__init__(message)


class QueryFailure(RepositoryError):
    """A catalog query was rejected (permissions, syntax, missing relation)."""


class ConnectionFailure(QueryFailure):
    """The database handle cannot be opened or was lost mid-query."""


class ScanFailure(RepositoryError):
    """A result row could not be decoded into the expected shape."""


class ConversionFailure(RepositoryError):
    """A textual field could not be converted to its numeric meaning."""

    def __init__(self, message: str, field: str = None, value: object = None):
        self.field = field
        self.value = value
        super().__init__(message)


_TAXONOMY = (ConnectionFailure, QueryFailure, ScanFailure, ConversionFailure)

# SQLSTATE class for connection exceptions (08000, 08003, 08006, ...)
CONNECTION_EXCEPTION_CLASS = "08"


class BaseRepository(ABC):
    """
    Abstract base repository with common patterns.

    Provides:
    - Error context manager mapping driver errors onto the failure taxonomy
    - Standardized logging

    Subclasses implement the catalog queries.
    """

    def __init__(self, conn=None):
        """
        Args:
            conn: Database session the subclass queries; inspected on failure
        """
        self.conn = conn
        self.logger = get_logger(self.__class__.__module__, ComponentType.REPOSITORY)
        self.logger.debug(f"{self.__class__.__name__} initialized")

    @contextmanager
    def _error_context(self, operation: str, entity_id: Optional[str] = None):
        """
        Context manager for consistent error handling.

        Driver errors are translated into the failure taxonomy:
            psycopg.Error, session lost           -> ConnectionFailure
            psycopg.Error, otherwise              -> QueryFailure
            KeyError / TypeError / AttributeError -> ScanFailure
            pydantic.ValidationError              -> ScanFailure

        Failures already in the taxonomy are re-raised untouched.

        Args:
            operation: Human-readable description of the operation
            entity_id: Optional entity (table, type) for context

        Example:
            with self._error_context("primary key lookup", "public.users"):
                rows = self._fetch_all(QUERY, params)
        """
        try:
            yield
        except _TAXONOMY:
            raise
        except psycopg.Error as e:
            error_cls = ConnectionFailure if self._session_lost(e) else QueryFailure
            raise self._wrap(error_cls, operation, entity_id, e) from e
        except (KeyError, TypeError, AttributeError, pydantic.ValidationError) as e:
            raise self._wrap(ScanFailure, operation, entity_id, e) from e

    def _session_lost(self, error: psycopg.Error) -> bool:
        """
        True when the error means the session itself is gone.

        Checked in order:
        - handle reports itself broken or closed
        - SQLSTATE in class 08 (connection exception)
        - OperationalError with no SQLSTATE (socket-level failure)

        Statement timeouts (57014) and lock timeouts (55P03) leave the
        session usable and stay query failures.
        """
        if self.conn is not None and (
            getattr(self.conn, "broken", False) or getattr(self.conn, "closed", False)
        ):
            return True
        if error.sqlstate:
            return error.sqlstate.startswith(CONNECTION_EXCEPTION_CLASS)
        return isinstance(error, psycopg.OperationalError)

    def _wrap(self, error_cls, operation: str, entity_id: Optional[str], error: Exception):
        error_msg = f"{operation} failed"
        if entity_id:
            error_msg += f" for {entity_id}"
        error_msg += f": {error}"
        self.logger.error(error_msg)
        return error_cls(error_msg, operation=operation, entity_id=entity_id)

    def _log_operation(self, operation: str, entity_id: str, count: int) -> None:
        """
        Log a completed read with consistent formatting.

        Format:
            "operation: entity_id | rows=N"
        """
        self.logger.debug(f"{operation}: {entity_id} | rows={count}")


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "ConnectionFailure",
    "QueryFailure",
    "ScanFailure",
    "ConversionFailure",
]
