# ============================================================================
# TABLE MODELS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core model - Table reference and per-table snapshot
# PURPOSE: Identify a table and hold everything needed to render its DDL
# CREATED: 19 OCT 2026
# EXPORTS: TableRef, TableSnapshot
# DEPENDENCIES: pydantic
# ============================================================================
"""
Table Models

TableRef is the (schema, name) pair every catalog query is scoped by.
TableSnapshot is a read-only bundle of one table's catalog facts, built
once per dump call and discarded after rendering.
"""

from typing import List

from pydantic import BaseModel, Field

from core.models.column import Column
from core.models.constraint import ForeignKey, IndexDefinition, NamedConstraint
from core.models.policy import Policy
from infrastructure.base_repository import ConversionFailure

DEFAULT_SCHEMA = "public"


class TableRef(BaseModel):
    """
    Qualified table name.

    Always exactly two components: parse() splits on the first "." only,
    so "a.b.c" is schema "a", table "b.c".
    """

    schema_name: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, qualified: str, default_schema: str = DEFAULT_SCHEMA) -> "TableRef":
        """
        Parse "schema.table" or a bare "table" (which gets default_schema).

        Raises:
            ConversionFailure: If the schema or table part is empty
                ("", "public.", ".users")
        """
        schema_name, sep, name = qualified.partition(".")
        if not sep:
            schema_name, name = default_schema, qualified
        if not schema_name or not name:
            raise ConversionFailure(
                f"Invalid table reference {qualified!r}: expected table or schema.table",
                field="table",
                value=qualified,
            )
        return cls(schema_name=schema_name, name=name)

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.name}"

    def __str__(self) -> str:
        return self.qualified_name


class TableSnapshot(BaseModel):
    """
    Everything the renderer needs for one table.

    checks and uniques are table-level constraints; single-column checks
    live on their Column instead.
    """

    table: TableRef
    columns: List[Column] = Field(default_factory=list)
    primary_key: List[str] = Field(
        default_factory=list,
        description="Primary key columns in ordinal order; empty means no primary key",
    )
    indexes: List[IndexDefinition] = Field(default_factory=list)
    foreign_keys: List[ForeignKey] = Field(default_factory=list)
    policies: List[Policy] = Field(default_factory=list)
    checks: List[NamedConstraint] = Field(default_factory=list)
    uniques: List[NamedConstraint] = Field(default_factory=list)

    model_config = {"frozen": True}
