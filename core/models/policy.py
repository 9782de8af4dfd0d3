# ============================================================================
# POLICY MODEL
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core model - Row-level security policy
# PURPOSE: One pg_policies row
# CREATED: 19 OCT 2026
# EXPORTS: Policy
# DEPENDENCIES: pydantic
# ============================================================================

from typing import Optional

from pydantic import BaseModel, Field


class Policy(BaseModel):
    """
    Row-level security policy.

    permissive is "" on servers whose pg_policies has no permissive column.
    roles is the role list with the array braces already removed.
    """

    name: str
    permissive: str = ""
    roles: str
    command: str = Field(..., description="ALL, SELECT, INSERT, UPDATE or DELETE")
    using: Optional[str] = None
    with_check: Optional[str] = None

    model_config = {"frozen": True}
