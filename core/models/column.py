# ============================================================================
# COLUMN MODEL
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core model - Table column as reported by the catalog
# PURPOSE: One column's type, nullability, default, identity and inline check
# CREATED: 19 OCT 2026
# EXPORTS: Column, ColumnCheck
# DEPENDENCIES: pydantic
# ============================================================================
"""
Column Model

data_type is the raw catalog spelling ("integer", "character varying",
"timestamp without time zone", or format_type() output for arrays and
user-defined types). The renderer turns it into the canonical token.
"""

from typing import Optional

from pydantic import BaseModel, Field

from core.contracts import IdentityGeneration


class ColumnCheck(BaseModel):
    """Check constraint whose key covers exactly one column."""

    name: str
    definition: str = Field(..., description="pg_get_constraintdef() output, e.g. CHECK ((age > 0))")

    model_config = {"frozen": True}


class Column(BaseModel):
    """
    A table column.

    Invariant: is_auto_increment implies the default is a nextval() call;
    the renderer then emits a serial type and no DEFAULT clause.
    """

    name: str
    data_type: str
    length: Optional[int] = Field(
        default=None,
        ge=0,
        description="character_maximum_length; None for unbounded types",
    )
    nullable: bool = True
    default: Optional[str] = None
    is_auto_increment: bool = False
    identity_generation: Optional[IdentityGeneration] = None
    check: Optional[ColumnCheck] = None

    model_config = {"frozen": True}
