import pytest

from src.employee_timesheets.employee_timesheets.common.query_builder import (
    ListQuery,
    build_count,
    build_select,
    like_pattern,
    page_count,
    page_offset,
    parse_page,
)
from src.employee_timesheets.employee_timesheets.core.enums import SortOrder
from src.employee_timesheets.employee_timesheets.employees.repository import (
    EMPLOYEE_DEFAULT_SORT,
    EMPLOYEE_SORT_COLUMNS,
)
from src.employee_timesheets.employee_timesheets.timesheets.repository import (
    TIMESHEET_DEFAULT_SORT,
    TIMESHEET_SORT_COLUMNS,
)


def _employee_query(args):
    return ListQuery.from_args(args, allowed_sorts=EMPLOYEE_SORT_COLUMNS, default_sort=EMPLOYEE_DEFAULT_SORT)


def test_defaults_for_empty_args():
    query = _employee_query({})
    assert query == ListQuery(search="", sort="full_name", order=SortOrder.ASC, page=1)


def test_timesheet_default_sort_is_start_time():
    query = ListQuery.from_args({}, allowed_sorts=TIMESHEET_SORT_COLUMNS, default_sort=TIMESHEET_DEFAULT_SORT)
    assert query.sort == "start_time"


@pytest.mark.parametrize("raw,expected", [("desc", SortOrder.DESC), ("DESC", SortOrder.DESC), ("asc", SortOrder.ASC), ("sideways", SortOrder.ASC), (None, SortOrder.ASC)])
def test_order_parsing(raw, expected):
    assert SortOrder.parse(raw) == expected


@pytest.mark.parametrize("raw,expected", [("3", 3), ("0", 1), ("-2", 1), ("abc", 1), (None, 1)])
def test_page_parsing(raw, expected):
    assert parse_page(raw) == expected


def test_unknown_sort_column_falls_back_to_default():
    query = _employee_query({"sort": "salary; DROP TABLE employees", "order": "desc"})
    sql, _ = build_select(
        select_from="SELECT id FROM employees",
        search_column="full_name",
        sort_columns=EMPLOYEE_SORT_COLUMNS,
        tiebreak_column="id",
        query=query,
    )
    assert "DROP" not in sql
    assert "ORDER BY full_name DESC, id ASC" in sql


def test_hand_built_query_cannot_smuggle_sort_column():
    with pytest.raises(ValueError):
        build_select(
            select_from="SELECT id FROM employees",
            search_column="full_name",
            sort_columns=EMPLOYEE_SORT_COLUMNS,
            tiebreak_column="id",
            query=ListQuery(sort="(SELECT 1)"),
        )


def test_paginated_select_binds_search_limit_and_offset():
    query = _employee_query({"search": "Jane", "sort": "salary", "order": "desc", "page": "3"})
    sql, params = build_select(
        select_from="SELECT id FROM employees",
        search_column="full_name",
        sort_columns=EMPLOYEE_SORT_COLUMNS,
        tiebreak_column="id",
        query=query,
        page_size=5,
    )
    assert "Jane" not in sql
    assert sql.endswith("LIMIT :limit OFFSET :offset")
    assert "ORDER BY salary DESC" in sql
    assert params == {"search": "%Jane%", "limit": 5, "offset": 10}


def test_timesheet_sort_uses_joined_column():
    query = ListQuery.from_args({"sort": "full_name"}, allowed_sorts=TIMESHEET_SORT_COLUMNS, default_sort=TIMESHEET_DEFAULT_SORT)
    sql, params = build_select(
        select_from="SELECT t.id FROM timesheets t JOIN employees e ON t.employee_id = e.id",
        search_column="e.full_name",
        sort_columns=TIMESHEET_SORT_COLUMNS,
        tiebreak_column="t.id",
        query=query,
    )
    assert "ORDER BY e.full_name ASC, t.id ASC" in sql
    assert "LIMIT" not in sql
    assert set(params) == {"search"}


def test_count_mirrors_search_filter():
    sql, params = build_count(count_from="employees", search_column="full_name", query=ListQuery(search="ann"))
    assert sql.startswith("SELECT COUNT(*) AS count FROM employees WHERE LOWER(full_name) LIKE LOWER(:search)")
    assert params == {"search": "%ann%"}


def test_like_pattern_escapes_wildcards():
    assert like_pattern("") == "%%"
    assert like_pattern("50%_off!") == "%50!%!_off!!%"


def test_page_math():
    assert page_offset(1, 5) == 0
    assert page_offset(3, 5) == 10
    assert page_count(12, 5) == 3
    assert page_count(10, 5) == 2
    assert page_count(0, 5) == 0
