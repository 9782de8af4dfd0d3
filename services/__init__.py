# ============================================================================
# SERVICES MODULE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Domain services
# PURPOSE: Export current schema DDL from the catalog
# CREATED: 19 OCT 2026
# ============================================================================

from services.schema_export_service import SchemaExportService

__all__ = [
    "SchemaExportService",
]
