# ============================================================================
# RESOLVER TESTS
# ============================================================================
# EPOCH: 1 - CATALOG EXPORT
# STATUS: Tests - Catalog rows to models
# PURPOSE: Verify column/check merging, index filtering, FK grouping
# CREATED: 19 OCT 2026
# ============================================================================
"""
Resolver Tests

Run with:
    pytest tests/test_resolver.py -v
"""

import pydantic
import pytest

from core.contracts import IdentityGeneration, ReferentialAction
from core.models import NamedConstraint
from core.schema.resolver import (
    build_columns,
    build_policies,
    filter_constraint_indexes,
    group_foreign_keys,
    order_by_name,
)
from infrastructure.base_repository import ConversionFailure


def _fk_row(name, column, ref_column, update="a", delete="a", ref_table="accounts"):
    return {
        "table_schema": "public",
        "constraint_name": name,
        "table_name": "orders",
        "column_name": column,
        "foreign_table_schema": "public",
        "foreign_table_name": ref_table,
        "foreign_column_name": ref_column,
        "update_rule": update,
        "delete_rule": delete,
    }


# ============================================================================
# COLUMNS
# ============================================================================


class TestBuildColumns:
    def test_serial_column(self, make_column_row):
        columns, overflow = build_columns([
            make_column_row("id", "integer", default="nextval('users_id_seq'::regclass)", nullable=False),
        ])
        assert overflow == []
        col = columns[0]
        assert col.is_auto_increment is True
        assert col.default == "nextval('users_id_seq'::regclass)"
        assert col.nullable is False

    def test_length_and_nullability(self, make_column_row):
        columns, _ = build_columns([
            make_column_row("email", "character varying", length=255, nullable=False),
            make_column_row("bio", "text"),
        ])
        assert [c.name for c in columns] == ["email", "bio"]
        assert columns[0].length == 255
        assert columns[1].length is None
        assert columns[1].nullable is True

    def test_quoted_name_is_trimmed(self, make_column_row):
        columns, _ = build_columns([make_column_row('"Order" ', "text")])
        assert columns[0].name == "Order"

    def test_identity(self, make_column_row):
        columns, _ = build_columns([
            make_column_row("id", "bigint", identity="BY DEFAULT", nullable=False),
        ])
        assert columns[0].identity_generation is IdentityGeneration.BY_DEFAULT
        assert columns[0].is_auto_increment is False

    def test_inline_check(self, make_column_row):
        columns, _ = build_columns([
            make_column_row("age", "integer", check_name="age_positive",
                            check_definition="CHECK ((age > 0))"),
        ])
        assert columns[0].check.name == "age_positive"
        assert columns[0].check.definition == "CHECK ((age > 0))"

    def test_second_check_moves_to_table_level(self, make_column_row):
        columns, overflow = build_columns([
            make_column_row("age", "integer", check_name="age_max",
                            check_definition="CHECK ((age < 200))"),
            make_column_row("age", "integer", check_name="age_min",
                            check_definition="CHECK ((age > 0))"),
            make_column_row("name", "text"),
        ])
        assert [c.name for c in columns] == ["age", "name"]
        assert columns[0].check.name == "age_max"
        assert overflow == [NamedConstraint(name="age_min", definition="CHECK ((age > 0))")]

    def test_non_numeric_length_raises_conversion(self, make_column_row):
        with pytest.raises(ConversionFailure):
            build_columns([make_column_row("code", "character", length="n/a")])

    def test_null_column_name_raises(self, make_column_row):
        with pytest.raises((AttributeError, TypeError, pydantic.ValidationError)):
            build_columns([make_column_row(None, "text")])

    def test_missing_key_raises(self):
        with pytest.raises(KeyError):
            build_columns([{"column_name": "x"}])


# ============================================================================
# INDEXES
# ============================================================================


class TestFilterConstraintIndexes:
    def test_constraint_backed_indexes_dropped(self):
        rows = [
            {"indexname": "users_pkey", "indexdef": "CREATE UNIQUE INDEX users_pkey ON public.users USING btree (id)"},
            {"indexname": "users_email_key", "indexdef": "CREATE UNIQUE INDEX users_email_key ON public.users USING btree (email)"},
            {"indexname": "users_created_idx", "indexdef": "CREATE INDEX users_created_idx ON public.users USING btree (created_at)"},
        ]
        indexes = filter_constraint_indexes(rows, {"users_pkey", "users_email_key"})
        assert [i.name for i in indexes] == ["users_created_idx"]

    def test_exact_name_match_only(self):
        rows = [{"indexname": "users_email_key_lower", "indexdef": "CREATE INDEX users_email_key_lower ON public.users (lower(email))"}]
        indexes = filter_constraint_indexes(rows, ["users_email_key"])
        assert len(indexes) == 1

    def test_accepts_generator_exclusions(self):
        rows = [{"indexname": "a", "indexdef": "CREATE INDEX a ON t (x)"}]
        assert filter_constraint_indexes(rows, (n for n in ["a"])) == []


# ============================================================================
# FOREIGN KEYS
# ============================================================================


class TestGroupForeignKeys:
    def test_single_column(self):
        fks = group_foreign_keys([_fk_row("orders_account_fk", "account_id", "id", "a", "c")])
        assert len(fks) == 1
        fk = fks[0]
        assert fk.columns == ("account_id",)
        assert fk.referenced_columns == ("id",)
        assert fk.on_update is ReferentialAction.NO_ACTION
        assert fk.on_delete is ReferentialAction.CASCADE

    def test_composite_keeps_pairing(self):
        fks = group_foreign_keys([
            _fk_row("orders_tenant_account_fk", "tenant_id", "tenant_id"),
            _fk_row("orders_tenant_account_fk", "account_id", "id"),
        ])
        assert len(fks) == 1
        assert fks[0].columns == ("tenant_id", "account_id")
        assert fks[0].referenced_columns == ("tenant_id", "id")

    def test_order_of_constraints_preserved(self):
        fks = group_foreign_keys([
            _fk_row("b_fk", "b_id", "id", ref_table="b"),
            _fk_row("a_fk", "a_id", "id", ref_table="a"),
        ])
        assert [fk.constraint_name for fk in fks] == ["b_fk", "a_fk"]

    def test_unknown_action_code(self):
        with pytest.raises(KeyError):
            group_foreign_keys([_fk_row("x_fk", "x", "id", update="z")])


# ============================================================================
# CONSTRAINT ORDER / POLICIES
# ============================================================================


class TestOrderByName:
    def test_lexicographic(self):
        constraints = [
            NamedConstraint(name="zeta", definition="CHECK (true)"),
            NamedConstraint(name="alpha", definition="CHECK (true)"),
        ]
        assert [c.name for c in order_by_name(constraints)] == ["alpha", "zeta"]


class TestBuildPolicies:
    def test_roles_braces_removed(self):
        policies = build_policies([{
            "policyname": "tenant_isolation",
            "permissive": "PERMISSIVE",
            "roles": "{app_user,admin}",
            "cmd": "SELECT",
            "qual": "(tenant_id = current_setting('app.tenant'::text))",
            "with_check": None,
        }])
        assert policies[0].roles == "app_user,admin"
        assert policies[0].with_check is None
