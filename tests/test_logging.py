# ============================================================================
# LOGGING TESTS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Tests - Context-aware logging
# PURPOSE: Verify log_context nesting and formatter output
# CREATED: 19 OCT 2026
# ============================================================================
"""
Logging Tests

Run with:
    pytest tests/test_logging.py -v
"""

import json
import logging

from core.logging import (
    ComponentType,
    HumanFormatter,
    StructuredFormatter,
    get_current_context,
    get_logger,
    log_context,
)
from repositories import CatalogRepository


def _record(msg="Reading columns"):
    return logging.LogRecord("services.export", logging.INFO, __file__, 10, msg, None, None)


class TestLogContext:
    def test_nested_context_inherits(self):
        with log_context(schema="public", table="users"):
            with log_context(operation="snapshot"):
                ctx = get_current_context()
                assert (ctx.schema, ctx.table, ctx.operation) == ("public", "users", "snapshot")
            assert get_current_context().operation is None
        assert get_current_context().table is None

    def test_popped_on_error(self):
        try:
            with log_context(table="users"):
                raise ValueError("x")
        except ValueError:
            pass
        assert get_current_context().table is None


class TestFormatters:
    def test_human_includes_table(self):
        with log_context(schema="public", table="users", operation="snapshot"):
            line = HumanFormatter().format(_record())
        assert "[table=public.users, op=snapshot]" in line
        assert line.endswith("Reading columns")

    def test_json_carries_context(self):
        with log_context(schema="billing", table="invoices"):
            payload = json.loads(StructuredFormatter().format(_record()))
        assert payload["message"] == "Reading columns"
        assert payload["context"] == {"schema": "billing", "table": "invoices"}
        assert payload["level"] == "INFO"


class TestComponentTagging:
    LOGGER_NAME = "catalog.tagging"

    def _emit(self, caplog, component, **extra):
        caplog.set_level(logging.INFO, logger=self.LOGGER_NAME)
        get_logger(self.LOGGER_NAME, component).info("hello", extra=extra or None)
        return caplog.records[-1]

    def test_component_reaches_json(self, caplog):
        record = self._emit(caplog, ComponentType.SERVICE)
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["data"]["component"] == "service"

    def test_caller_extra_kept_alongside_component(self, caplog):
        record = self._emit(caplog, ComponentType.SCRIPT, tables=3)
        payload = json.loads(StructuredFormatter().format(record))
        assert payload["data"] == {"component": "script", "tables": 3}

    def test_component_in_human_line(self, caplog):
        record = self._emit(caplog, ComponentType.INFRASTRUCTURE)
        line = HumanFormatter().format(record)
        assert f"{self.LOGGER_NAME} (infrastructure): hello" in line

    def test_no_component_no_data(self, caplog):
        record = self._emit(caplog, None)
        payload = json.loads(StructuredFormatter().format(record))
        assert "data" not in payload

    def test_repositories_log_as_repository(self, fake_conn):
        repo = CatalogRepository(fake_conn)
        assert repo.logger.extra["component"] is ComponentType.REPOSITORY
