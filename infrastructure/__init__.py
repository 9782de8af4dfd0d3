# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Infrastructure - Database connectivity and error taxonomy
# PURPOSE: Open the catalog session and define repository failures
# CREATED: 19 OCT 2026
# ============================================================================
"""
Infrastructure module for the catalog exporter.

Provides:
- PostgreSQLConnection: One read-only psycopg session per export
- BaseRepository: Error context and logging shared by repositories
- RepositoryError and its subclasses: the failure taxonomy

Usage:
    from infrastructure import PostgreSQLConnection

    with PostgreSQLConnection().get_connection() as conn:
        ...
"""

from infrastructure.base_repository import (
    BaseRepository,
    RepositoryError,
    ConnectionFailure,
    QueryFailure,
    ScanFailure,
    ConversionFailure,
)
from infrastructure.postgresql import PostgreSQLConnection

__all__ = [
    # PostgreSQL
    'PostgreSQLConnection',
    # Repository base
    'BaseRepository',
    # Failures
    'RepositoryError',
    'ConnectionFailure',
    'QueryFailure',
    'ScanFailure',
    'ConversionFailure',
]
