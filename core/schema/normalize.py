# ============================================================================
# TYPE & TEXT NORMALIZATION
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Core - Pure normalization helpers
# PURPOSE: Canonical type tokens, serial detection, view/role/version cleanup
# CREATED: 19 OCT 2026
# EXPORTS: SERIAL_TYPE_MAP, TYPE_ALIASES, canonical_type, is_auto_increment,
#          normalize_view_definition, strip_role_braces, parse_server_version,
#          parse_length
# ============================================================================
"""
Normalization Utilities.

The catalog reports types and defaults in several spellings; the desired
schema file uses the short dialect spellings. Everything here is a pure
function over strings, and every pattern is compiled once at import time.

Usage:
    from core.schema.normalize import canonical_type, is_auto_increment

    serial = is_auto_increment("nextval('users_id_seq'::regclass)")   # True
    canonical_type("integer", serial)                                 # "serial"
    canonical_type("timestamp without time zone", False)              # "timestamp"
"""

import re
from typing import Optional, Union

from infrastructure.base_repository import ConversionFailure


# ============================================================================
# TYPE MAPPING
# ============================================================================

# Integer family -> auto-increment keyword, applied only to sequence-backed columns
SERIAL_TYPE_MAP = {
    "smallint": "smallserial",
    "integer": "serial",
    "bigint": "bigserial",
}

# Catalog spelling -> dialect abbreviation. The SQL standard makes plain
# "timestamp" / "time" mean the zone-naive variants.
TYPE_ALIASES = {
    "timestamp without time zone": "timestamp",
    "time without time zone": "time",
}

SEQUENCE_DEFAULT_PREFIX = "nextval("

_TRAILING_SEMICOLON = re.compile(r";$")
_SPACE_RUNS = re.compile(r"[ ]+")
_ROLES_PREFIX = re.compile(r"^\{")
_ROLES_SUFFIX = re.compile(r"\}$")
_VERSION_NUM = re.compile(r"^\d+$")


def is_auto_increment(default: Optional[str]) -> bool:
    """
    True when a column default is a sequence advance call.

    PostgreSQL has no "is serial" flag; a serial column is just an integer
    column whose default is nextval(...).
    """
    return default is not None and default.startswith(SEQUENCE_DEFAULT_PREFIX)


def canonical_type(raw_type: str, auto_increment: bool) -> str:
    """
    Map a catalog type spelling to its canonical DDL token.

    Args:
        raw_type: data_type as reported by the catalog
        auto_increment: whether the column default is a nextval() call

    Returns:
        Canonical type token
    """
    if auto_increment and raw_type in SERIAL_TYPE_MAP:
        return SERIAL_TYPE_MAP[raw_type]
    return TYPE_ALIASES.get(raw_type, raw_type)


# ============================================================================
# TEXT CLEANUP
# ============================================================================

def normalize_view_definition(definition: str) -> str:
    """
    Flatten a pg_views definition onto one line.

    Strips surrounding whitespace, removes newlines, drops one trailing
    semicolon and collapses runs of spaces to a single space.
    """
    definition = definition.strip()
    definition = definition.replace("\n", "")
    definition = _TRAILING_SEMICOLON.sub("", definition)
    return _SPACE_RUNS.sub(" ", definition)


def strip_role_braces(roles: str) -> str:
    """
    Remove the array braces from a pg_policies.roles literal.

    Only one leading "{" and one trailing "}" are removed; role names are
    not otherwise parsed, so names containing braces are not supported.
    """
    roles = _ROLES_PREFIX.sub("", roles, count=1)
    return _ROLES_SUFFIX.sub("", roles, count=1)


# ============================================================================
# NUMERIC FIELDS
# ============================================================================

def parse_server_version(setting: Union[str, int, None]) -> int:
    """
    Parse server_version_num ("90624", "130005") into an int.

    Raises:
        ConversionFailure: If the setting is not a plain integer
    """
    text = str(setting).strip() if setting is not None else ""
    if not _VERSION_NUM.match(text):
        raise ConversionFailure(
            f"server_version_num is not numeric: {setting!r}",
            field="server_version_num",
            value=setting,
        )
    return int(text)


def parse_length(value: Union[str, int, None]) -> Optional[int]:
    """
    Convert character_maximum_length to an int, keeping None for unbounded types.

    Raises:
        ConversionFailure: If the value is present but not an integer
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConversionFailure(
            f"character_maximum_length is not numeric: {value!r}",
            field="character_maximum_length",
            value=value,
        ) from e


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "SERIAL_TYPE_MAP",
    "TYPE_ALIASES",
    "SEQUENCE_DEFAULT_PREFIX",
    "is_auto_increment",
    "canonical_type",
    "normalize_view_definition",
    "strip_role_braces",
    "parse_server_version",
    "parse_length",
]
