# ============================================================================
# MODEL TESTS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Tests - Snapshot models
# PURPOSE: Verify table reference parsing and model validation
# CREATED: 19 OCT 2026
# ============================================================================
"""
Model Tests

Run with:
    pytest tests/test_models.py -v
"""

import pydantic
import pytest

from core.models import ForeignKey, TableRef
from infrastructure.base_repository import ConversionFailure, RepositoryError


class TestTableRefParse:
    def test_bare_name_gets_default_schema(self):
        assert TableRef.parse("users") == TableRef(schema_name="public", name="users")

    def test_custom_default_schema(self):
        assert TableRef.parse("users", default_schema="app").schema_name == "app"

    def test_splits_on_first_dot_only(self):
        ref = TableRef.parse("a.b.c")
        assert (ref.schema_name, ref.name) == ("a", "b.c")

    @pytest.mark.parametrize("bad", ["", "public.", ".users", "."])
    def test_empty_part_is_conversion_failure(self, bad):
        with pytest.raises(ConversionFailure) as exc_info:
            TableRef.parse(bad)
        assert isinstance(exc_info.value, RepositoryError)
        assert exc_info.value.field == "table"
        assert exc_info.value.value == bad

    def test_qualified_name(self):
        assert str(TableRef(schema_name="billing", name="invoices")) == "billing.invoices"


class TestForeignKey:
    def test_column_lists_must_pair_up(self):
        with pytest.raises(pydantic.ValidationError):
            ForeignKey(
                schema_name="public", table="orders", constraint_name="fk",
                columns=("a", "b"), referenced_schema="public",
                referenced_table="accounts", referenced_columns=("id",),
            )
