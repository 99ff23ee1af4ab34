"""
Unit tests for the declarative table query.

Covers rendering of select lists, filters, OR-groups, ordering and ranges
into query-string pairs.
"""

import pytest

from holyspots_admin.backend import ColumnFilter, FilterOperator, OrderClause, TableQuery
from holyspots_admin.backend.query import encode_scalar, quote_value


class TestScalarRendering:
    @pytest.mark.parametrize(
        "value, expected",
        [(None, "null"), (True, "true"), (False, "false"), (12, "12"), ("abc", "abc")],
    )
    def test_encode_scalar(self, value, expected):
        assert encode_scalar(value) == expected

    def test_quote_plain_value_unchanged(self):
        assert quote_value("lake") == "lake"

    def test_quote_reserved_characters(self):
        assert quote_value("a,b") == '"a,b"'
        assert quote_value("x (y)") == '"x (y)"'

    def test_quote_escapes_quotes_and_backslashes(self):
        assert quote_value('say "hi"') == '"say \\"hi\\""'
        assert quote_value("a\\b") == '"a\\\\b"'


class TestColumnFilter:
    def test_eq_param(self):
        assert ColumnFilter("type", FilterOperator.eq, 2).as_param() == ("type", "eq.2")

    def test_in_param_quotes_items(self):
        f = ColumnFilter("id", FilterOperator.in_, ["a", "b,c"])
        assert f.as_param() == ("id", 'in.(a,"b,c")')

    def test_nested_term_quotes_value(self):
        f = ColumnFilter("name->>ru", FilterOperator.ilike, "*a, b*")
        assert f.as_term() == 'name->>ru.ilike."*a, b*"'


class TestOrderClause:
    def test_render(self):
        assert OrderClause("created_at", ascending=False).render() == "created_at.desc.nullsfirst"
        assert OrderClause("name", nulls_first=False).render() == "name.asc.nullslast"


class TestTableQuery:
    def test_full_query_params_in_order(self):
        query = (
            TableQuery("spots")
            .select("*")
            .eq("type", "2")
            .or_([ColumnFilter("name->>ru", FilterOperator.ilike, "*lake*")])
            .order_by("created_at", ascending=False)
            .range(20, 10)
            .with_count()
        )
        assert query.to_params() == [
            ("select", "*"),
            ("type", "eq.2"),
            ("or", "(name->>ru.ilike.*lake*)"),
            ("order", "created_at.desc.nullsfirst"),
            ("limit", "10"),
            ("offset", "20"),
        ]
        assert query.count

    def test_empty_or_group_is_skipped(self):
        query = TableQuery("spots").or_([])
        assert query.any_of == []
        assert not query.has_filters

    def test_multiple_order_terms_are_joined(self):
        query = TableQuery("users").order_by("name").order_by("id", ascending=False)
        assert ("order", "name.asc.nullsfirst,id.desc.nullsfirst") in query.to_params()

    def test_has_filters(self):
        assert TableQuery("spots").eq("id", 1).has_filters
        assert not TableQuery("spots").select("id").has_filters
