# ============================================================================
# SCHEMA EXPORT SERVICE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Domain service - Catalog snapshot to DDL text
# PURPOSE: Coordinate catalog reads and rendering for tables and the schema
# CREATED: 19 OCT 2026
# ============================================================================
"""
SchemaExportService

Reads one table's catalog facts into a TableSnapshot, renders it, and
stitches tables, views and enum types into the full current-schema DDL
that the schema differ compares against the desired schema.

Pattern: Constructor injection of the connection, repository instantiated
in __init__, synchronous methods. A table is either rendered completely or
the failure propagates; there is no partial output.
"""

from typing import List, Optional, Union

from core.config import CatalogDefaults
from core.logging import ComponentType, get_logger, log_context
from core.models import TableRef, TableSnapshot
from core.schema.ddl_renderer import render_enum_ddl, render_table_ddl, render_view_ddl
from repositories import CatalogRepository

logger = get_logger(__name__, ComponentType.SERVICE)

STATEMENT_SEPARATOR = "\n\n"


class SchemaExportService:
    """Turns live catalog state into canonical DDL text."""

    def __init__(self, conn, defaults: Optional[CatalogDefaults] = None):
        self.defaults = defaults or CatalogDefaults()
        self.catalog_repo = CatalogRepository(conn, self.defaults)

    # =========================================================================
    # TABLES
    # =========================================================================

    def snapshot_table(self, table: Union[TableRef, str]) -> TableSnapshot:
        """Read every catalog fact the renderer needs for one table."""
        if not isinstance(table, TableRef):
            table = TableRef.parse(table, default_schema=self.defaults.default_schema)

        with log_context(schema=table.schema_name, table=table.name, operation="snapshot"):
            columns, overflow_checks = self.catalog_repo.column_rows(table)
            primary_key = self.catalog_repo.primary_key_columns(table)
            indexes = self.catalog_repo.indexes(table)
            foreign_keys = self.catalog_repo.foreign_keys(table)
            policies = self.catalog_repo.policies(table)
            checks = self.catalog_repo.check_constraints(table)
            uniques = self.catalog_repo.unique_constraints(table)

            logger.debug(
                "Table snapshot read",
                extra={"columns": len(columns), "indexes": len(indexes)},
            )

        return TableSnapshot(
            table=table,
            columns=columns,
            primary_key=primary_key,
            indexes=indexes,
            foreign_keys=foreign_keys,
            policies=policies,
            checks=checks + overflow_checks,
            uniques=uniques,
        )

    def dump_table_ddl(self, table: Union[TableRef, str]) -> str:
        """Canonical DDL for one table (CREATE TABLE plus its trailing statements)."""
        return render_table_ddl(self.snapshot_table(table))

    # =========================================================================
    # SCHEMA-LEVEL OBJECTS
    # =========================================================================

    def views_ddl(self) -> List[str]:
        """One CREATE VIEW statement per view, ordered by schema and name."""
        return [render_view_ddl(view) for view in self.catalog_repo.list_views()]

    def types_ddl(self) -> List[str]:
        """One CREATE TYPE ... AS ENUM statement per enum type."""
        return [
            render_enum_ddl(enum_type, self.defaults.default_schema)
            for enum_type in self.catalog_repo.list_enum_types()
        ]

    def export(self, tables: Optional[List[Union[TableRef, str]]] = None) -> str:
        """
        Full current-schema DDL.

        Enum types come first so column types resolve when the text is
        re-parsed, then tables, then views. Statements are separated by a
        blank line.

        Args:
            tables: Restrict the export to these tables (default: all tables)
        """
        types = self.types_ddl()
        table_refs = tables if tables is not None else self.catalog_repo.list_tables()
        table_ddls = [self.dump_table_ddl(table) for table in table_refs]
        views = self.views_ddl()

        logger.info(
            "Schema exported",
            extra={"types": len(types), "tables": len(table_ddls), "views": len(views)},
        )
        return STATEMENT_SEPARATOR.join(types + table_ddls + views)


__all__ = [
    "SchemaExportService",
    "STATEMENT_SEPARATOR",
]
