# ============================================================================
# CORE MODULE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core module initialization
# PURPOSE: Contracts, snapshot models, normalization and rendering
# CREATED: 19 OCT 2026
# ============================================================================
"""
Core package.

Import from the submodules directly:

    from core.models import TableRef, TableSnapshot
    from core.schema import render_table_ddl
"""
