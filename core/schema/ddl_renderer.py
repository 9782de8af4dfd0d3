# ============================================================================
# DDL RENDERER
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Canonical DDL text from catalog snapshots
# PURPOSE: Deterministically assemble CREATE/ALTER statements per object
# CREATED: 19 OCT 2026
# EXPORTS: render_table_ddl, render_column, render_foreign_key, render_policy,
#          render_unique_constraint, render_view_ddl, render_enum_ddl
# DEPENDENCIES: core.models, core.schema.normalize
# ============================================================================
"""
DDL Renderer.

Every function here is pure: same snapshot in, byte-identical text out.
The output is what the schema differ compares against the desired schema,
so spacing, quoting and statement order are part of the contract.

Table layout:

    CREATE TABLE public.users (
        "id" serial NOT NULL,
        "email" character varying(255) NOT NULL,
        PRIMARY KEY ("id")
    );
    <index statements>;
    <foreign key statements>;
    <policy statements>;
    ALTER TABLE public.users ADD CONSTRAINT users_email_key UNIQUE (email);

Usage:
    from core.schema.ddl_renderer import render_table_ddl

    ddl = render_table_ddl(snapshot)
"""

from typing import List

from core.models import (
    Column,
    EnumType,
    ForeignKey,
    NamedConstraint,
    Policy,
    TableRef,
    TableSnapshot,
    View,
)
from core.schema.normalize import canonical_type
from core.schema.resolver import order_by_name

INDENT = "    "


# ============================================================================
# TABLE
# ============================================================================

def render_column(column: Column) -> str:
    """One column line of the CREATE TABLE body, without indent or comma."""
    parts = [f'"{column.name}" {canonical_type(column.data_type, column.is_auto_increment)}']
    if column.length:
        parts.append(f"({column.length})")
    if not column.nullable:
        parts.append(" NOT NULL")
    # serial already implies its nextval() default
    if column.default is not None and column.default != "" and not column.is_auto_increment:
        parts.append(f" DEFAULT {column.default}")
    if column.identity_generation is not None:
        parts.append(f" GENERATED {column.identity_generation.value} AS IDENTITY")
    if column.check is not None:
        parts.append(f" CONSTRAINT {column.check.name} {column.check.definition}")
    return "".join(parts)


def render_primary_key(columns: List[str]) -> str:
    quoted = '", "'.join(columns)
    return f'PRIMARY KEY ("{quoted}")'


def render_foreign_key(fk: ForeignKey) -> str:
    """ALTER TABLE ONLY ... FOREIGN KEY ... REFERENCES ... ON UPDATE ... ON DELETE ...;"""
    return (
        f"ALTER TABLE ONLY {fk.schema_name}.{fk.table} "
        f"ADD CONSTRAINT {fk.constraint_name} "
        f"FOREIGN KEY ({', '.join(fk.columns)}) "
        f"REFERENCES {fk.referenced_schema}.{fk.referenced_table}"
        f"({', '.join(fk.referenced_columns)}) "
        f"ON UPDATE {fk.on_update.value} ON DELETE {fk.on_delete.value};"
    )


def render_policy(policy: Policy, table: TableRef) -> str:
    """
    CREATE POLICY statement.

    The policy is attached to the bare table name. An empty permissive
    value leaves its slot empty ("AS  FOR"), which is what servers without
    permissive policies report.
    """
    ddl = (
        f"CREATE POLICY {policy.name} ON {table.name} "
        f"AS {policy.permissive} FOR {policy.command} TO {policy.roles}"
    )
    if policy.using is not None:
        ddl += f" USING ({policy.using})"
    if policy.with_check is not None:
        ddl += f" WITH CHECK ({policy.with_check})"
    return ddl + ";"


def render_unique_constraint(constraint: NamedConstraint, table: TableRef) -> str:
    return f"ALTER TABLE {table.qualified_name} ADD CONSTRAINT {constraint.name} {constraint.definition};"


def render_table_ddl(snapshot: TableSnapshot) -> str:
    """
    Render one table and everything hanging off it.

    Section order is fixed: columns, primary key, table checks (by name),
    closing paren, indexes, foreign keys, policies, unique constraints
    (by name). The result has no trailing newline.
    """
    table = snapshot.table
    body: List[str] = [render_column(column) for column in snapshot.columns]

    if snapshot.primary_key:
        body.append(render_primary_key(snapshot.primary_key))

    for check in order_by_name(snapshot.checks):
        body.append(f"CONSTRAINT {check.name} {check.definition}")

    lines = [f"CREATE TABLE {table.qualified_name} ("]
    if body:
        lines.append(",\n".join(INDENT + item for item in body))
    lines.append(");")

    lines.extend(f"{index.definition};" for index in snapshot.indexes)
    lines.extend(render_foreign_key(fk) for fk in snapshot.foreign_keys)
    lines.extend(render_policy(policy, table) for policy in snapshot.policies)
    lines.extend(
        render_unique_constraint(unique, table) for unique in order_by_name(snapshot.uniques)
    )

    return "\n".join(lines).rstrip("\n")


# ============================================================================
# SCHEMA-LEVEL OBJECTS
# ============================================================================

def render_view_ddl(view: View) -> str:
    return f"CREATE VIEW {view.qualified_name} AS {view.definition};"


def _quote_literal(label: str) -> str:
    return "'" + label.replace("'", "''") + "'"


def render_enum_ddl(enum_type: EnumType, default_schema: str = "public") -> str:
    """
    CREATE TYPE ... AS ENUM (...);

    Types in the default schema are rendered with their bare name.
    """
    if enum_type.schema_name == default_schema:
        name = enum_type.name
    else:
        name = f"{enum_type.schema_name}.{enum_type.name}"
    labels = ", ".join(_quote_literal(label) for label in enum_type.labels)
    return f"CREATE TYPE {name} AS ENUM ({labels});"


__all__ = [
    "INDENT",
    "render_column",
    "render_primary_key",
    "render_foreign_key",
    "render_policy",
    "render_unique_constraint",
    "render_table_ddl",
    "render_view_ddl",
    "render_enum_ddl",
]
