# ============================================================================
# REPOSITORIES MODULE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Database access layer
# PURPOSE: Read-only catalog queries
# CREATED: 19 OCT 2026
# ============================================================================
"""
Repositories Module

Provides read access to the PostgreSQL system catalog.
Uses a single synchronous psycopg3 connection per export.

Usage:
    from repositories import CatalogRepository

    with PostgreSQLConnection().get_connection() as conn:
        repo = CatalogRepository(conn)
        tables = repo.list_tables()
"""

from .catalog_repo import CatalogRepository

__all__ = [
    "CatalogRepository",
]
