# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Foundation - Catalog enums
# PURPOSE: Name the single-letter and keyword codes the catalog reports
# CREATED: 19 OCT 2026
# EXPORTS: ConstraintType, IdentityGeneration, ReferentialAction
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for the catalog exporter.

The PostgreSQL catalog encodes constraint kinds and foreign key actions as
single characters (pg_constraint.contype, confupdtype, confdeltype). These
enums give them names and carry the keyword used when rendering DDL.
"""

from enum import Enum


class ConstraintType(str, Enum):
    """pg_constraint.contype codes."""
    CHECK = "c"
    FOREIGN_KEY = "f"
    PRIMARY_KEY = "p"
    UNIQUE = "u"

    @classmethod
    def index_backed(cls) -> tuple:
        """Constraint kinds that create an index with the constraint's name."""
        return (cls.PRIMARY_KEY.value, cls.UNIQUE.value)


class IdentityGeneration(str, Enum):
    """information_schema.columns.identity_generation values."""
    ALWAYS = "ALWAYS"
    BY_DEFAULT = "BY DEFAULT"


class ReferentialAction(str, Enum):
    """
    Foreign key ON UPDATE / ON DELETE actions.

    Values are the keywords rendered into DDL; from_code() maps the
    pg_constraint single-letter codes onto them.
    """
    NO_ACTION = "NO ACTION"
    RESTRICT = "RESTRICT"
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"

    @classmethod
    def from_code(cls, code: str) -> "ReferentialAction":
        """Map confupdtype/confdeltype to an action. Raises KeyError on unknown codes."""
        return _ACTION_CODES[code]


_ACTION_CODES = {
    "a": ReferentialAction.NO_ACTION,
    "r": ReferentialAction.RESTRICT,
    "c": ReferentialAction.CASCADE,
    "n": ReferentialAction.SET_NULL,
    "d": ReferentialAction.SET_DEFAULT,
}


__all__ = [
    "ConstraintType",
    "IdentityGeneration",
    "ReferentialAction",
]
