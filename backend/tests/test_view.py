from dataclasses import dataclass

import pytest

from roster.core.constants import SortDirection, SortField
from roster.core.errors import ValidationError
from roster.processing import view
from roster.processing.view import ViewState


@dataclass
class Row:
    first_name: str
    last_name: str
    email: str
    department: str
    salary: int


def make_rows(count, department="Engineering"):
    return [
        Row(f"First{i:02d}", f"Last{i:02d}", f"user{i}@x.com", department, 1000 * i)
        for i in range(count)
    ]


JANE = Row("Jane", "Doe", "jane@x.com", "Engineering", 80000)
RAJ = Row("Raj", "Kumar", "raj@x.com", "Finance", 65000)
ANN = Row("Ann", "Lee", "ann@x.com", "Engineering", 120000)


def test_department_filter_is_exact():
    rows = [JANE, RAJ, ANN]
    assert view.filter_records(rows, department="Engineering") == [JANE, ANN]
    assert view.filter_records(rows, department="engineering") == []
    assert view.filter_records(rows, department="all") == rows


def test_search_matches_name_email_or_department_case_insensitively():
    rows = [JANE, RAJ, ANN]
    assert view.filter_records(rows, search="JANE D") == [JANE]
    assert view.filter_records(rows, search="raj@") == [RAJ]
    assert view.filter_records(rows, search="fin") == [RAJ]
    assert view.filter_records(rows, search="") == rows


def test_search_and_department_combine():
    rows = [JANE, RAJ, ANN]
    assert view.filter_records(rows, search="a", department="Finance") == [RAJ]


def test_salary_sort_reverses_exactly():
    rows = [JANE, RAJ, ANN]
    ascending = view.sort_records(rows, SortField.SALARY, SortDirection.ASC)
    descending = view.sort_records(rows, SortField.SALARY, SortDirection.DESC)
    assert ascending == [RAJ, JANE, ANN]
    assert descending == list(reversed(ascending))


def test_salary_sort_is_numeric():
    small = Row("A", "A", "a@x.com", "X", 9)
    big = Row("B", "B", "b@x.com", "X", 10)
    assert view.sort_records([big, small], SortField.SALARY) == [small, big]


def test_string_sort_ignores_case():
    lower = Row("alice", "smith", "a@x.com", "X", 1)
    upper = Row("Bob", "Jones", "b@x.com", "X", 1)
    assert view.sort_records([upper, lower], SortField.NAME) == [lower, upper]
    assert view.sort_records([lower, upper], SortField.LAST_NAME) == [upper, lower]


def test_ties_keep_input_order_both_directions():
    first = Row("A", "A", "a@x.com", "X", 5)
    second = Row("B", "B", "b@x.com", "X", 5)
    assert view.sort_records([first, second], SortField.SALARY, SortDirection.ASC) == [first, second]
    assert view.sort_records([first, second], SortField.SALARY, SortDirection.DESC) == [first, second]


def test_pagination_of_25_rows():
    rows = make_rows(25)
    sizes = [
        len(view.derive_view(rows, ViewState(page=page)).rows)
        for page in (1, 2, 3)
    ]
    assert sizes == [10, 10, 5]

    last = view.derive_view(rows, ViewState(page=3))
    assert last.total_pages == 3
    assert last.has_previous and not last.has_next
    assert last.summary == "25 results · Page 3 of 3"


def test_page_is_clamped():
    rows = make_rows(25)
    assert view.derive_view(rows, ViewState(page=4)).page == 3
    assert view.derive_view(rows, ViewState(page=0)).page == 1


def test_empty_list_has_one_page():
    result = view.derive_view([], ViewState())
    assert result.rows == []
    assert result.total_pages == 1
    assert result.page == 1
    assert not result.has_next


def test_filtered_view_is_unpaged():
    rows = make_rows(25)
    result = view.derive_view(rows, ViewState(page_size=5))
    assert len(result.rows) == 5
    assert len(result.filtered) == 25


def test_toggle_sort():
    state = ViewState()
    assert state.sort_field == SortField.NAME
    assert state.sort_direction == SortDirection.ASC

    state = view.toggle_sort(state, SortField.SALARY)
    assert (state.sort_field, state.sort_direction) == (SortField.SALARY, SortDirection.ASC)

    state = view.toggle_sort(state, "salary")
    assert state.sort_direction == SortDirection.DESC

    state = view.toggle_sort(state, SortField.EMAIL)
    assert (state.sort_field, state.sort_direction) == (SortField.EMAIL, SortDirection.ASC)


def test_sort_keeps_current_page():
    state = view.toggle_sort(ViewState(page=2), SortField.SALARY)
    assert state.page == 2


def test_filter_changes_reset_page():
    state = ViewState(page=3)
    assert view.with_search(state, "x").page == 1
    assert view.with_department(state, "Finance").page == 1
    assert view.with_page_size(state, 20).page == 1


def test_empty_department_means_all():
    assert view.with_department(ViewState(), "").department == "all"


def test_page_size_must_be_an_offered_choice():
    with pytest.raises(ValidationError):
        view.with_page_size(ViewState(), 7)


def test_go_to_page_clamps_to_available_pages():
    state = view.go_to_page(ViewState(), 99, filtered_count=25)
    assert state.page == 3
    assert view.go_to_page(state, -1, filtered_count=25).page == 1


def test_departments_are_distinct_and_sorted():
    assert view.departments([JANE, RAJ, ANN]) == ["Engineering", "Finance"]


def test_with_sort_sets_field_and_direction_outright():
    state = view.with_sort(ViewState(), SortField.NAME)
    assert (state.sort_field, state.sort_direction) == (SortField.NAME, SortDirection.ASC)

    state = view.with_sort(state, "salary", "desc")
    assert (state.sort_field, state.sort_direction) == (SortField.SALARY, SortDirection.DESC)
