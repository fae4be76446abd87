"""
View pipeline — filter → sort → paginate over an in-memory employee list.

Everything here is pure: ``derive_view(records, state)`` is recomputed from
scratch on every input change and nothing is cached between calls. User
actions are modelled as functions that return a new ``ViewState``.

Usage::

    state = ViewState()
    state = with_search(state, "eng")
    state = toggle_sort(state, SortField.SALARY)
    view = derive_view(cache.employees, state)
    view.rows          # the visible page
    view.filtered      # the filtered + sorted list (what exports read)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Protocol, Sequence, TypeVar

from roster.core.constants import (
    ALL_DEPARTMENTS,
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_CHOICES,
    SortDirection,
    SortField,
)
from roster.core.errors import ValidationError


class EmployeeLike(Protocol):
    first_name: str
    last_name: str
    email: str
    department: str
    salary: int


E = TypeVar("E", bound=EmployeeLike)

# wire name → attribute name for the plain string columns
_STRING_ATTRS = {
    SortField.FIRST_NAME: "first_name",
    SortField.LAST_NAME: "last_name",
    SortField.EMAIL: "email",
    SortField.DEPARTMENT: "department",
}


@dataclass(frozen=True)
class ViewState:
    """Every input of the view pipeline except the records themselves."""

    search: str = ""
    department: str = ALL_DEPARTMENTS
    sort_field: SortField = SortField.NAME
    sort_direction: SortDirection = SortDirection.ASC
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class View:
    """Derived output: the visible page plus pagination metadata."""

    rows: list
    filtered: list
    page: int
    page_size: int
    total_pages: int

    @property
    def total_results(self) -> int:
        return len(self.filtered)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def summary(self) -> str:
        return f"{self.total_results} results · Page {self.page} of {self.total_pages}"


# ─── Stages ───────────────────────────────────────────────

def full_name(record: EmployeeLike) -> str:
    return f"{record.first_name} {record.last_name}"


def matches(record: EmployeeLike, search: str, department: str) -> bool:
    """Search matches name, email or department; department must match exactly."""
    query = search.lower()
    matches_search = (
        not query
        or query in full_name(record).lower()
        or query in record.email.lower()
        or query in record.department.lower()
    )
    matches_department = department == ALL_DEPARTMENTS or record.department == department
    return matches_search and matches_department


def filter_records(records: Sequence[E], search: str = "", department: str = ALL_DEPARTMENTS) -> list[E]:
    return [r for r in records if matches(r, search, department)]


def sort_key(field: SortField):
    """Key function for ``field``: lower-cased strings, numeric salary."""
    if field == SortField.NAME:
        return lambda r: full_name(r).lower()
    if field == SortField.SALARY:
        return lambda r: r.salary
    attr = _STRING_ATTRS[field]
    return lambda r: getattr(r, attr).lower()


def sort_records(
    records: Sequence[E],
    field: SortField = SortField.NAME,
    direction: SortDirection = SortDirection.ASC,
) -> list[E]:
    """Stable sort; equal keys keep their input order in both directions."""
    return sorted(records, key=sort_key(field), reverse=direction == SortDirection.DESC)


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, count: int, page_size: int) -> int:
    return min(max(page, 1), total_pages(count, page_size))


def paginate(records: Sequence[E], page: int, page_size: int) -> list[E]:
    start = (page - 1) * page_size
    return list(records[start:start + page_size])


def derive_view(records: Sequence[E], state: ViewState) -> View:
    """Run the whole pipeline for ``state``."""
    filtered = sort_records(
        filter_records(records, state.search, state.department),
        state.sort_field,
        state.sort_direction,
    )
    page = clamp_page(state.page, len(filtered), state.page_size)
    return View(
        rows=paginate(filtered, page, state.page_size),
        filtered=filtered,
        page=page,
        page_size=state.page_size,
        total_pages=total_pages(len(filtered), state.page_size),
    )


def departments(records: Sequence[EmployeeLike]) -> list[str]:
    """Distinct departments present in ``records``, sorted for a filter menu."""
    return sorted({r.department for r in records}, key=str.lower)


# ─── State transitions ────────────────────────────────────

def with_search(state: ViewState, search: str) -> ViewState:
    return replace(state, search=search, page=1)


def with_department(state: ViewState, department: str) -> ViewState:
    return replace(state, department=department or ALL_DEPARTMENTS, page=1)


def with_page_size(state: ViewState, page_size: int) -> ViewState:
    if page_size not in PAGE_SIZE_CHOICES:
        raise ValidationError(
            f"Page size must be one of {', '.join(map(str, PAGE_SIZE_CHOICES))}",
            details={"page_size": page_size},
        )
    return replace(state, page_size=page_size, page=1)


def toggle_sort(state: ViewState, field: SortField | str) -> ViewState:
    """Same field flips direction; a new field starts ascending."""
    field = SortField(field)
    if field == state.sort_field:
        return replace(state, sort_direction=state.sort_direction.flipped())
    return replace(state, sort_field=field, sort_direction=SortDirection.ASC)


def with_sort(
    state: ViewState,
    field: SortField | str,
    direction: SortDirection | str = SortDirection.ASC,
) -> ViewState:
    """Set the sort outright, regardless of the current column."""
    return replace(state, sort_field=SortField(field), sort_direction=SortDirection(direction))


def go_to_page(state: ViewState, page: int, filtered_count: int) -> ViewState:
    return replace(state, page=clamp_page(page, filtered_count, state.page_size))
