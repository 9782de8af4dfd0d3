# ============================================================================
# SHARED TEST FIXTURES
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Tests - Fake catalog session
# PURPOSE: Stand-in for a psycopg connection with canned catalog rows
# CREATED: 19 OCT 2026
# ============================================================================
"""
Shared fixtures.

FakeConnection answers each catalog query object with canned dict rows,
records what was executed, and tracks whether every cursor was closed.
Queries without a canned answer return no rows.
"""

from typing import Any, Dict, List, Optional

import pytest

from repositories import catalog_queries as q


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self.closed = False
        self._rows: List[Dict[str, Any]] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    def execute(self, query, params=None):
        self.conn.executed.append((query, params))
        error = self.conn.errors.get(id(query))
        if error is not None:
            raise error
        self._rows = list(self.conn.responses.get(id(query), []))

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows


class FakeConnection:
    def __init__(self):
        self.responses: Dict[int, List[Dict[str, Any]]] = {}
        self.errors: Dict[int, Exception] = {}
        self.executed: List[tuple] = []
        self.cursors: List[FakeCursor] = []
        # Mirrors psycopg.Connection.broken / .closed
        self.broken = False
        self.closed = False

    def respond(self, query, rows: List[Dict[str, Any]]) -> "FakeConnection":
        self.responses[id(query)] = rows
        return self

    def fail(self, query, error: Exception) -> "FakeConnection":
        self.errors[id(query)] = error
        return self

    def set_version(self, setting: Optional[str]) -> "FakeConnection":
        return self.respond(q.SERVER_VERSION, [{"setting": setting}])

    def cursor(self):
        cur = FakeCursor(self)
        self.cursors.append(cur)
        return cur

    def executed_queries(self) -> list:
        return [query for query, _ in self.executed]

    @property
    def all_cursors_closed(self) -> bool:
        return all(c.closed for c in self.cursors)


@pytest.fixture
def fake_conn():
    """A fake session reporting PostgreSQL 13."""
    return FakeConnection().set_version("130005")


def column_row(
    name: str,
    data_type: str,
    *,
    default: Optional[str] = None,
    nullable: bool = True,
    length: Any = None,
    identity: Optional[str] = None,
    check_name: Optional[str] = None,
    check_definition: Optional[str] = None,
) -> Dict[str, Any]:
    """One row shaped like the TABLE_COLUMNS query output."""
    return {
        "column_name": name,
        "column_default": default,
        "is_nullable": "YES" if nullable else "NO",
        "character_maximum_length": length,
        "data_type": data_type,
        "identity_generation": identity,
        "check_name": check_name,
        "check_definition": check_definition,
    }


@pytest.fixture
def make_column_row():
    return column_row


@pytest.fixture
def empty_conn():
    """A fake session with no canned rows at all, not even a server version."""
    return FakeConnection()
