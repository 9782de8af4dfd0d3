# ============================================================================
# EXPORT SCRIPT TESTS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Tests - Command line entry point
# PURPOSE: Verify argument handling, stdout/stderr split and exit codes
# CREATED: 19 OCT 2026
# ============================================================================
"""
Export Script Tests

Run with:
    pytest tests/test_export_script.py -v
"""

import importlib.util
import logging
from contextlib import contextmanager
from pathlib import Path

import pytest

from core.config import reset_defaults
from infrastructure import ConnectionFailure
from repositories import catalog_queries as q

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "export_schema.py"


@pytest.fixture
def script(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    reset_defaults()
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    spec = importlib.util.spec_from_file_location("export_schema", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    yield module
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)
    reset_defaults()


class _FakeFactory:
    """Stands in for PostgreSQLConnection and remembers the settings it got."""

    def __init__(self, conn, error=None):
        self.conn = conn
        self.error = error

    def __call__(self, defaults):
        self.defaults = defaults
        return self

    @contextmanager
    def get_connection(self):
        if self.error is not None:
            raise self.error
        yield self.conn


class TestParser:
    def test_psql_style_options(self, script):
        args = script.build_parser().parse_args(
            ["-U", "app", "-W", "pw", "-h", "db.local", "-p", "6432", "shop"]
        )
        assert (args.user, args.password, args.host, args.port, args.dbname) == (
            "app", "pw", "db.local", 6432, "shop",
        )

    def test_repeatable_table(self, script):
        args = script.build_parser().parse_args(["shop", "--table", "users", "--table", "billing.invoices"])
        assert args.tables == ["users", "billing.invoices"]

    def test_dbname_required(self, script):
        with pytest.raises(SystemExit):
            script.build_parser().parse_args([])


class TestMain:
    def test_prints_ddl(self, script, monkeypatch, capsys, fake_conn):
        fake_conn.respond(q.LIST_ENUM_TYPES, [
            {"type_schema": "public", "type_name": "mood", "labels": ["ok"]},
        ])
        factory = _FakeFactory(fake_conn)
        monkeypatch.setattr(script, "PostgreSQLConnection", factory)

        assert script.main(["-U", "app", "shop"]) == 0

        out = capsys.readouterr().out
        assert out == "CREATE TYPE mood AS ENUM ('ok');\n"
        assert factory.defaults.dbname == "shop"
        assert factory.defaults.user == "app"

    def test_failure_exit_code(self, script, monkeypatch, capsys, fake_conn):
        factory = _FakeFactory(fake_conn, error=ConnectionFailure("could not connect", operation="connect"))
        monkeypatch.setattr(script, "PostgreSQLConnection", factory)

        assert script.main(["shop"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "could not connect" in captured.err

    def test_malformed_table_reports_error(self, script, monkeypatch, capsys, fake_conn):
        monkeypatch.setattr(script, "PostgreSQLConnection", _FakeFactory(fake_conn))

        assert script.main(["shop", "--table", "public."]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Invalid table reference 'public.'" in captured.err
