# ============================================================================
# ENUM TYPE MODEL
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core model - User-defined enum type
# PURPOSE: Enum type name with its labels in sort order
# CREATED: 19 OCT 2026
# EXPORTS: EnumType
# DEPENDENCIES: pydantic
# ============================================================================

from typing import Tuple

from pydantic import BaseModel


class EnumType(BaseModel):
    """An enum type; labels are ordered by pg_enum.enumsortorder."""

    schema_name: str
    name: str
    labels: Tuple[str, ...]

    model_config = {"frozen": True}
