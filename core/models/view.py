# ============================================================================
# VIEW MODEL
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core model - View definition
# PURPOSE: View name with its normalized SELECT body
# CREATED: 19 OCT 2026
# EXPORTS: View
# DEPENDENCIES: pydantic
# ============================================================================

from pydantic import BaseModel


class View(BaseModel):
    """
    A view.

    definition is already normalized: single line, runs of spaces collapsed,
    no trailing semicolon.
    """

    schema_name: str
    name: str
    definition: str

    model_config = {"frozen": True}

    @property
    def qualified_name(self) -> str:
        return f"{self.schema_name}.{self.name}"
