# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for connection and catalog filtering
# CREATED: 19 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides sensible defaults for connecting to PostgreSQL and for deciding
which catalog objects are exported.
These can be overridden via environment variables or CLI arguments.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple
from urllib.parse import quote_plus


@dataclass(frozen=True)
class ConnectionDefaults:
    """
    Defaults for the PostgreSQL connection.

    Uses libpq's own environment variable names (PGHOST, PGPORT, ...).
    DATABASE_URL overrides everything else when set.
    """
    host: str = "127.0.0.1"
    port: int = 5432
    user: str = "postgres"
    password: str = ""
    dbname: str = "postgres"

    # Only rendered into the DSN when set
    sslmode: Optional[str] = None
    sslrootcert: Optional[str] = None

    database_url: Optional[str] = None

    def dsn(self) -> str:
        """Build a postgres:// URL. User and password are quoted so ':' and '@' survive."""
        if self.database_url:
            return self.database_url

        options = []
        if self.sslmode:
            options.append(f"sslmode={self.sslmode}")
        if self.sslrootcert:
            options.append(f"sslrootcert={self.sslrootcert}")

        url = (
            f"postgresql://{quote_plus(self.user)}:{quote_plus(self.password)}"
            f"@{self.host}:{self.port}/{self.dbname}"
        )
        if options:
            url += "?" + "&".join(options)
        return url

    def safe_dsn(self) -> str:
        """DSN with the password masked, for logs."""
        if self.database_url:
            return self.database_url.split("@")[-1]
        return f"{self.user}@{self.host}:{self.port}/{self.dbname}"

    def with_overrides(self, **overrides) -> "ConnectionDefaults":
        """Return a copy with the non-None overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    @classmethod
    def from_env(cls) -> "ConnectionDefaults":
        """Create from environment variables."""
        return cls(
            host=os.getenv("PGHOST", "127.0.0.1"),
            port=int(os.getenv("PGPORT", 5432)),
            user=os.getenv("PGUSER", "postgres"),
            password=os.getenv("PGPASSWORD", ""),
            dbname=os.getenv("PGDATABASE", "postgres"),
            sslmode=os.getenv("PGSSLMODE"),
            sslrootcert=os.getenv("PGSSLROOTCERT"),
            database_url=os.getenv("DATABASE_URL"),
        )


@dataclass(frozen=True)
class CatalogDefaults:
    """
    Defaults for catalog filtering and version-dependent queries.
    """
    # Bare table names resolve to this schema
    default_schema: str = "public"

    # Never exported
    system_schemas: Tuple[str, ...] = ("information_schema", "pg_catalog")
    # (schema, relation) pairs created by extensions
    excluded_relations: Tuple[Tuple[str, str], ...] = (("public", "pg_buffercache"),)
    # pg_repack leaves views behind in its own schema
    maintenance_schema: str = "repack"

    # pg_policies.permissive appeared in PostgreSQL 10
    permissive_policy_min_version: int = 100000

    @property
    def view_excluded_schemas(self) -> Tuple[str, ...]:
        return self.system_schemas + (self.maintenance_schema,)

    @classmethod
    def from_env(cls) -> "CatalogDefaults":
        """Create from environment variables."""
        return cls(
            default_schema=os.getenv("CATALOG_DEFAULT_SCHEMA", "public"),
            maintenance_schema=os.getenv("CATALOG_MAINTENANCE_SCHEMA", "repack"),
            permissive_policy_min_version=int(
                os.getenv("CATALOG_PERMISSIVE_POLICY_MIN_VERSION", 100000)
            ),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    connection: ConnectionDefaults = field(default_factory=ConnectionDefaults)
    catalog: CatalogDefaults = field(default_factory=CatalogDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            connection=ConnectionDefaults.from_env(),
            catalog=CatalogDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ConnectionDefaults",
    "CatalogDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
