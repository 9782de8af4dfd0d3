# ============================================================================
# SCHEMA MODULE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Catalog rows to canonical DDL
# PURPOSE: Normalize catalog metadata and render it as DDL text
# CREATED: 19 OCT 2026
# ============================================================================

from core.schema.normalize import (
    canonical_type,
    is_auto_increment,
    normalize_view_definition,
    parse_server_version,
    strip_role_braces,
)
from core.schema.ddl_renderer import (
    render_enum_ddl,
    render_table_ddl,
    render_view_ddl,
)

__all__ = [
    # Normalizer
    "canonical_type",
    "is_auto_increment",
    "normalize_view_definition",
    "parse_server_version",
    "strip_role_braces",
    # Renderer
    "render_table_ddl",
    "render_view_ddl",
    "render_enum_ddl",
]
