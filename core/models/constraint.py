# ============================================================================
# CONSTRAINT MODELS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core model - Table-level constraints and indexes
# PURPOSE: Multi-column checks, unique constraints, indexes, foreign keys
# CREATED: 19 OCT 2026
# EXPORTS: NamedConstraint, IndexDefinition, ForeignKey
# DEPENDENCIES: pydantic
# ============================================================================
"""
Constraint Models

Definitions are kept as the catalog prints them (pg_get_constraintdef,
pg_indexes.indexdef) so the rendered DDL re-parses to the same structure.
"""

from typing import Tuple

from pydantic import BaseModel, Field, model_validator

from core.contracts import ReferentialAction


class NamedConstraint(BaseModel):
    """A table-level CHECK or UNIQUE constraint."""

    name: str
    definition: str

    model_config = {"frozen": True}


class IndexDefinition(BaseModel):
    """A CREATE INDEX statement as stored in pg_indexes (without ';')."""

    name: str
    definition: str

    model_config = {"frozen": True}


class ForeignKey(BaseModel):
    """
    A foreign key constraint.

    columns and referenced_columns are paired by position, so composite
    keys keep their column mapping.
    """

    schema_name: str
    table: str
    constraint_name: str
    columns: Tuple[str, ...] = Field(..., min_length=1)
    referenced_schema: str
    referenced_table: str
    referenced_columns: Tuple[str, ...] = Field(..., min_length=1)
    on_update: ReferentialAction = ReferentialAction.NO_ACTION
    on_delete: ReferentialAction = ReferentialAction.NO_ACTION

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _columns_pair_up(self) -> "ForeignKey":
        if len(self.columns) != len(self.referenced_columns):
            raise ValueError(
                f"foreign key {self.constraint_name} has {len(self.columns)} columns "
                f"but references {len(self.referenced_columns)}"
            )
        return self
