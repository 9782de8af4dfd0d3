# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for the catalog exporter.
"""

from core.config.defaults import (
    ConnectionDefaults,
    CatalogDefaults,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "ConnectionDefaults",
    "CatalogDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
