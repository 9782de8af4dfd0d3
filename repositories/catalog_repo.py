# ============================================================================
# CATALOG REPOSITORY
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Catalog query layer
# PURPOSE: Read-only accessors over the PostgreSQL system catalog
# CREATED: 19 OCT 2026
# ============================================================================
"""
Catalog Repository

One accessor per catalog fact. Each accessor:
- issues exactly one parameterized query (indexes() issues two: the
  constraint-name exclusion set first, then the index list),
- opens a cursor, drains it and closes it before returning, on every path,
- maps driver and decoding errors onto the failure taxonomy.

The connection is injected, so tests can pass a fake session. Accessors are
meant to be called one after another on a single handle; there is no
locking, retrying or caching here.

Usage:
    with PostgreSQLConnection().get_connection() as conn:
        repo = CatalogRepository(conn)
        for table in repo.list_tables():
            columns = repo.columns(table)
"""

from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from psycopg import sql

from core.config import CatalogDefaults
from core.contracts import ConstraintType
from core.models import Column, EnumType, ForeignKey, IndexDefinition, NamedConstraint, Policy, TableRef, View
from core.schema.normalize import normalize_view_definition, parse_server_version
from core.schema.resolver import (
    build_columns,
    build_named_constraints,
    build_policies,
    filter_constraint_indexes,
    group_foreign_keys,
)
from infrastructure.base_repository import BaseRepository, ScanFailure

from . import catalog_queries as q

TableLike = Union[TableRef, str]


class CatalogRepository(BaseRepository):
    """
    Read-only catalog accessors for one database session.

    Args:
        conn: psycopg connection (dict_row factory) or a compatible fake
        defaults: Catalog filtering settings
    """

    def __init__(self, conn, defaults: Optional[CatalogDefaults] = None):
        super().__init__(conn)
        self.defaults = defaults or CatalogDefaults()

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _ref(self, table: TableLike) -> TableRef:
        if isinstance(table, TableRef):
            return table
        return TableRef.parse(table, default_schema=self.defaults.default_schema)

    @staticmethod
    def _table_params(ref: TableRef) -> Dict[str, Any]:
        return {"schema": ref.schema_name, "table": ref.name}

    def _excluded_relations(self) -> List[str]:
        return [f"{schema}.{name}" for schema, name in self.defaults.excluded_relations]

    def _fetch_all(self, query: sql.Composable, params: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """Execute and drain one query; the cursor is closed before returning."""
        with self.conn.cursor() as cur:
            cur.execute(query, params)
            return cur.fetchall()

    # =========================================================================
    # SCHEMA-LEVEL OBJECTS
    # =========================================================================

    def list_tables(self) -> List[TableRef]:
        """Base tables outside the system schemas, ordered by schema and name."""
        with self._error_context("table listing"):
            rows = self._fetch_all(q.LIST_TABLES, {
                "excluded_schemas": list(self.defaults.system_schemas),
                "excluded_relations": self._excluded_relations(),
            })
            tables = [TableRef(schema_name=r["table_schema"], name=r["table_name"]) for r in rows]
        self._log_operation("list tables", "*", len(tables))
        return tables

    def list_views(self) -> List[View]:
        """Views outside the system and maintenance schemas, with normalized bodies."""
        with self._error_context("view listing"):
            rows = self._fetch_all(q.LIST_VIEWS, {
                "excluded_schemas": list(self.defaults.view_excluded_schemas),
                "excluded_relations": self._excluded_relations(),
            })
            views = [
                View(
                    schema_name=r["table_schema"],
                    name=r["table_name"],
                    definition=normalize_view_definition(r["definition"]),
                )
                for r in rows
            ]
        self._log_operation("list views", "*", len(views))
        return views

    def list_enum_types(self) -> List[EnumType]:
        """Enum types with labels in declaration order."""
        with self._error_context("enum type listing"):
            rows = self._fetch_all(q.LIST_ENUM_TYPES)
            types = [
                EnumType(schema_name=r["type_schema"], name=r["type_name"], labels=tuple(r["labels"]))
                for r in rows
            ]
        self._log_operation("list enum types", "*", len(types))
        return types

    def server_version(self) -> str:
        """
        server_version_num as the server reports it, e.g. "90624" or "130005".

        Raises:
            ScanFailure: If pg_settings has no server_version_num row
        """
        with self._error_context("server version lookup"):
            rows = self._fetch_all(q.SERVER_VERSION)
            if not rows or rows[0]["setting"] is None:
                raise ScanFailure(
                    "pg_settings returned no server_version_num",
                    operation="server version lookup",
                )
            return str(rows[0]["setting"])

    def server_version_number(self) -> int:
        """server_version() parsed to an int (ConversionFailure if not numeric)."""
        return parse_server_version(self.server_version())

    # =========================================================================
    # TABLE-SCOPED OBJECTS
    # =========================================================================

    def column_rows(self, table: TableLike) -> Tuple[List[Column], List[NamedConstraint]]:
        """
        Columns plus any single-column checks that could not be inlined.

        A column carries at most one inline check; extra single-column
        checks on the same column come back in the second element.
        """
        ref = self._ref(table)
        with self._error_context("column lookup", ref.qualified_name):
            rows = self._fetch_all(q.TABLE_COLUMNS, self._table_params(ref))
            columns, overflow = build_columns(rows)
        self._log_operation("columns", ref.qualified_name, len(columns))
        return columns, overflow

    def columns(self, table: TableLike) -> List[Column]:
        """
        Columns in ordinal order, each with at most one inline check.

        Extra single-column checks on the same column are not returned here;
        callers that render DDL must use column_rows() so they are not lost.
        """
        return self.column_rows(table)[0]

    def primary_key_columns(self, table: TableLike) -> List[str]:
        """Primary key column names in key order; empty when there is no primary key."""
        ref = self._ref(table)
        with self._error_context("primary key lookup", ref.qualified_name):
            rows = self._fetch_all(q.PRIMARY_KEY_COLUMNS, self._table_params(ref))
            names = [r["column_name"] for r in rows]
        self._log_operation("primary key", ref.qualified_name, len(names))
        return names

    def constraint_index_names(self, table: TableLike) -> FrozenSet[str]:
        """Names of the primary key and unique constraints (and so of their indexes)."""
        ref = self._ref(table)
        with self._error_context("constraint name lookup", ref.qualified_name):
            rows = self._fetch_all(q.CONSTRAINT_NAMES, {
                **self._table_params(ref),
                "contypes": list(ConstraintType.index_backed()),
            })
            return frozenset(r["conname"] for r in rows)

    def indexes(self, table: TableLike) -> List[IndexDefinition]:
        """
        Index definitions, without the ones that back PK/UNIQUE constraints.

        The exclusion set is fetched first; index rows are filtered against
        it by exact name.
        """
        ref = self._ref(table)
        excluded = self.constraint_index_names(ref)
        with self._error_context("index lookup", ref.qualified_name):
            rows = self._fetch_all(q.TABLE_INDEXES, self._table_params(ref))
            indexes = filter_constraint_indexes(rows, excluded)
        self._log_operation("indexes", ref.qualified_name, len(indexes))
        return indexes

    def foreign_keys(self, table: TableLike) -> List[ForeignKey]:
        """Foreign keys ordered by constraint name, composite keys grouped."""
        ref = self._ref(table)
        with self._error_context("foreign key lookup", ref.qualified_name):
            rows = self._fetch_all(q.FOREIGN_KEYS, self._table_params(ref))
            fks = group_foreign_keys(rows)
        self._log_operation("foreign keys", ref.qualified_name, len(fks))
        return fks

    def check_constraints(self, table: TableLike) -> List[NamedConstraint]:
        """CHECK constraints spanning more than one column."""
        ref = self._ref(table)
        with self._error_context("check constraint lookup", ref.qualified_name):
            rows = self._fetch_all(q.MULTI_COLUMN_CHECKS, self._table_params(ref))
            checks = build_named_constraints(rows)
        self._log_operation("check constraints", ref.qualified_name, len(checks))
        return checks

    def unique_constraints(self, table: TableLike) -> List[NamedConstraint]:
        """All UNIQUE constraints, whatever their width."""
        ref = self._ref(table)
        with self._error_context("unique constraint lookup", ref.qualified_name):
            rows = self._fetch_all(q.UNIQUE_CONSTRAINTS, self._table_params(ref))
            uniques = build_named_constraints(rows)
        self._log_operation("unique constraints", ref.qualified_name, len(uniques))
        return uniques

    def policies(self, table: TableLike) -> List[Policy]:
        """
        Row-level security policies.

        The server version is read once per call. Servers older than
        permissive_policy_min_version have no pg_policies.permissive column,
        so the query selects an empty string in its place.
        """
        ref = self._ref(table)
        version = self.server_version_number()
        if version < self.defaults.permissive_policy_min_version:
            self.logger.debug(f"Server version {version} has no permissive policies")
            query = q.POLICIES_WITHOUT_PERMISSIVE
        else:
            query = q.POLICIES_WITH_PERMISSIVE

        with self._error_context("policy lookup", ref.qualified_name):
            rows = self._fetch_all(query, self._table_params(ref))
            policies = build_policies(rows)
        self._log_operation("policies", ref.qualified_name, len(policies))
        return policies


__all__ = [
    "CatalogRepository",
]
