# ============================================================================
# MODELS MODULE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Model exports
# PURPOSE: Central export point for all catalog snapshot models
# CREATED: 19 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

Read-only Pydantic models for one moment of catalog state.
Created per dump call, never mutated, never cached.
"""

from core.models.column import Column, ColumnCheck
from core.models.constraint import ForeignKey, IndexDefinition, NamedConstraint
from core.models.enum_type import EnumType
from core.models.policy import Policy
from core.models.table import DEFAULT_SCHEMA, TableRef, TableSnapshot
from core.models.view import View

__all__ = [
    # Tables
    "DEFAULT_SCHEMA",
    "TableRef",
    "TableSnapshot",
    # Columns
    "Column",
    "ColumnCheck",
    # Constraints
    "NamedConstraint",
    "IndexDefinition",
    "ForeignKey",
    # Schema-level objects
    "Policy",
    "EnumType",
    "View",
]
