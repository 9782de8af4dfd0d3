# ============================================================================
# CONSTRAINT & INDEX RESOLVER
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Row-to-model resolution
# PURPOSE: Turn raw catalog rows into columns, constraints, indexes, policies
# CREATED: 19 OCT 2026
# EXPORTS: build_columns, filter_constraint_indexes, group_foreign_keys,
#          build_policies, order_by_name
# DEPENDENCIES: pydantic
# ============================================================================
"""
Constraint & Index Resolver.

Pure functions over dict rows (psycopg dict_row). They decide where each
constraint is rendered:

- single-column CHECK  -> inline on its column
- multi-column CHECK   -> standalone CONSTRAINT clause in the table body
- UNIQUE               -> trailing ALTER TABLE ... ADD CONSTRAINT
- PK/UNIQUE indexes    -> dropped, the constraint already creates them

Missing keys raise KeyError and unexpected nulls raise AttributeError or pydantic's
ValidationError; the repository maps all of them to ScanFailure.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from core.contracts import ReferentialAction
from core.models import (
    Column,
    ColumnCheck,
    ForeignKey,
    IndexDefinition,
    NamedConstraint,
    Policy,
)
from core.schema.normalize import is_auto_increment, parse_length, strip_role_braces

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


# ============================================================================
# COLUMNS
# ============================================================================

def build_columns(rows: Iterable[Row]) -> Tuple[List[Column], List[NamedConstraint]]:
    """
    Collapse joined column/check rows into Column models.

    The columns query LEFT JOINs single-column checks, so a column with two
    such checks arrives twice. Rows are ordered by ordinal position, then
    check name: the first check stays inline and the rest are returned as
    table-level checks so no constraint is lost.

    Returns:
        (columns in ordinal order, overflow checks)
    """
    columns: Dict[str, Column] = {}
    overflow: List[NamedConstraint] = []

    for row in rows:
        name = row["column_name"].strip('" ')
        check = None
        if row["check_name"] is not None and row["check_definition"] is not None:
            check = ColumnCheck(name=row["check_name"], definition=row["check_definition"])

        if name in columns:
            if check is not None:
                logger.debug(f"Column {name} has more than one check, moving {check.name} to table level")
                overflow.append(NamedConstraint(name=check.name, definition=check.definition))
            continue

        default = row["column_default"]
        columns[name] = Column(
            name=name,
            data_type=row["data_type"],
            length=parse_length(row["character_maximum_length"]),
            nullable=row["is_nullable"] == "YES",
            default=default,
            is_auto_increment=is_auto_increment(default),
            identity_generation=row["identity_generation"] or None,
            check=check,
        )

    return list(columns.values()), overflow


# ============================================================================
# INDEXES
# ============================================================================

def filter_constraint_indexes(
    rows: Iterable[Row],
    excluded_names: Iterable[str],
) -> List[IndexDefinition]:
    """
    Drop indexes that back a primary key or unique constraint.

    The exclusion set is materialized before the rows are walked; the
    match is on exact index name.
    """
    excluded = frozenset(excluded_names)
    indexes = []
    for row in rows:
        name = row["indexname"].strip('" ')
        if name in excluded:
            continue
        indexes.append(IndexDefinition(name=name, definition=row["indexdef"]))
    return indexes


# ============================================================================
# FOREIGN KEYS
# ============================================================================

def group_foreign_keys(rows: Iterable[Row]) -> List[ForeignKey]:
    """
    Group one-row-per-column foreign key rows into ForeignKey models.

    Constraints keep the order the query returned them in; column pairs keep
    their key position order.
    """
    grouped: Dict[str, Dict[str, Any]] = {}

    for row in rows:
        name = row["constraint_name"]
        entry = grouped.get(name)
        if entry is None:
            entry = {
                "schema_name": row["table_schema"],
                "table": row["table_name"],
                "constraint_name": name,
                "columns": [],
                "referenced_schema": row["foreign_table_schema"],
                "referenced_table": row["foreign_table_name"],
                "referenced_columns": [],
                "on_update": ReferentialAction.from_code(row["update_rule"]),
                "on_delete": ReferentialAction.from_code(row["delete_rule"]),
            }
            grouped[name] = entry
        entry["columns"].append(row["column_name"])
        entry["referenced_columns"].append(row["foreign_column_name"])

    return [
        ForeignKey(
            **{**entry, "columns": tuple(entry["columns"]),
               "referenced_columns": tuple(entry["referenced_columns"])}
        )
        for entry in grouped.values()
    ]


# ============================================================================
# CHECK / UNIQUE / POLICIES
# ============================================================================

def build_named_constraints(rows: Iterable[Row]) -> List[NamedConstraint]:
    """(conname, definition) rows -> NamedConstraint list."""
    return [NamedConstraint(name=row["conname"], definition=row["definition"]) for row in rows]


def order_by_name(constraints: Sequence[NamedConstraint]) -> List[NamedConstraint]:
    """
    Lexicographic order by constraint name.

    Both check and unique constraints are rendered in this order so the
    output does not depend on how the catalog happened to return them.
    """
    return sorted(constraints, key=lambda c: c.name)


def build_policies(rows: Iterable[Row]) -> List[Policy]:
    """pg_policies rows -> Policy list, with role array braces removed."""
    return [
        Policy(
            name=row["policyname"],
            permissive=row["permissive"],
            roles=strip_role_braces(row["roles"]),
            command=row["cmd"],
            using=row["qual"],
            with_check=row["with_check"],
        )
        for row in rows
    ]


__all__ = [
    "build_columns",
    "filter_constraint_indexes",
    "group_foreign_keys",
    "build_named_constraints",
    "order_by_name",
    "build_policies",
]
