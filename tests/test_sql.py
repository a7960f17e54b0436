"""
Tests for the SQL fragment builders.

Tests cover:
- SET clauses for partial updates
- WHERE clauses from declarative filters
- Column lists with API aliases
"""

import pytest

from app.core.exceptions import BadRequestError
from app.core.sql import (
    FilterClause,
    contains,
    is_true,
    select_columns,
    sql_for_filters,
    sql_for_partial_update,
)
from app.crud import company as company_crud
from app.crud import job as job_crud


class TestPartialUpdate:
    """Tests for sql_for_partial_update"""

    def test_maps_names_and_numbers_placeholders(self):
        """Mapped names are translated, others used verbatim"""
        result = sql_for_partial_update(
            {"test": "v1", "newTest": "v2"},
            {"newTest": "new_test"},
        )

        assert result.set_cols == '"test"=$1, "new_test"=$2'
        assert result.values == ["v1", "v2"]

    def test_single_field(self):
        result = sql_for_partial_update({"firstName": "Aliya"}, {"firstName": "first_name"})

        assert result.set_cols == '"first_name"=$1'
        assert result.values == ["Aliya"]

    def test_none_values_are_kept(self):
        """Setting a column to NULL is a valid update"""
        result = sql_for_partial_update({"salary": None}, {})

        assert result.set_cols == '"salary"=$1'
        assert result.values == [None]

    def test_empty_data_rejected(self):
        """No fields means there is nothing to update"""
        with pytest.raises(BadRequestError) as exc_info:
            sql_for_partial_update({}, {"a": "b"})

        assert exc_info.value.message == "No data"
        assert exc_info.value.status_code == 400

    def test_values_never_in_sql(self):
        """Values only travel as bound parameters"""
        result = sql_for_partial_update({"name": "x'; DROP TABLE users; --"}, {})

        assert "DROP" not in result.set_cols
        assert result.values == ["x'; DROP TABLE users; --"]


class TestFilters:
    """Tests for sql_for_filters"""

    def test_all_job_filters(self):
        where = job_crud.filter_sql(title="1", min_salary=1000, has_equity=True)

        assert where.where_sql == "WHERE title ILIKE $1 AND salary >= $2 AND equity > 0"
        assert where.values == ["%1%", 1000]

    def test_no_filters(self):
        where = job_crud.filter_sql()

        assert where.where_sql == ""
        assert where.values == []

    def test_has_equity_false_is_ignored(self):
        where = job_crud.filter_sql(min_salary=500, has_equity=False)

        assert where.where_sql == "WHERE salary >= $1"
        assert where.values == [500]

    def test_has_equity_only_adds_no_parameter(self):
        where = job_crud.filter_sql(has_equity=True)

        assert where.where_sql == "WHERE equity > 0"
        assert where.values == []

    def test_clause_order_follows_declaration(self):
        """Filter mapping order does not change the SQL"""
        clauses = (
            FilterClause("a", "a = {param}"),
            FilterClause("b", "b = {param}"),
        )

        first = sql_for_filters({"b": 2, "a": 1}, clauses)
        second = sql_for_filters({"a": 1, "b": 2}, clauses)

        assert first == second
        assert first.where_sql == "WHERE a = $1 AND b = $2"
        assert first.values == [1, 2]

    def test_start_offsets_placeholders(self):
        clauses = (FilterClause("a", "a = {param}"),)

        where = sql_for_filters({"a": "x"}, clauses, start=3)

        assert where.where_sql == "WHERE a = $3"

    def test_company_filters(self):
        where = sql_for_filters(
            {"nameLike": "net", "minEmployees": 10, "maxEmployees": 100},
            company_crud.FILTERS,
        )

        assert where.where_sql == (
            "WHERE name ILIKE $1 AND num_employees >= $2 AND num_employees <= $3"
        )
        assert where.values == ["%net%", 10, 100]

    def test_zero_is_inactive_by_default(self):
        """Default activation is truthiness, as for an omitted filter"""
        where = sql_for_filters({"minEmployees": 0}, company_crud.FILTERS)

        assert where.where_sql == ""


class TestHelpers:

    def test_contains(self):
        assert contains("net") == "%net%"

    def test_is_true_only_for_boolean_true(self):
        assert is_true(True)
        assert not is_true("true")
        assert not is_true(1)
        assert not is_true(None)

    def test_select_columns(self):
        cols = select_columns({"id": "id", "company_handle": "companyHandle"})

        assert cols == 'id, company_handle AS "companyHandle"'
