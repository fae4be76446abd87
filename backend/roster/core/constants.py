"""Shared constants and enums used across the application."""

from enum import StrEnum


class SortField(StrEnum):
    """Columns the employee table can be sorted by."""

    NAME = "name"
    FIRST_NAME = "firstName"
    LAST_NAME = "lastName"
    EMAIL = "email"
    DEPARTMENT = "department"
    SALARY = "salary"


class SortDirection(StrEnum):
    """Sort order for the employee view."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class ExportFormat(StrEnum):
    """Supported export file types."""

    CSV = "csv"
    XLSX = "xlsx"


class NotificationVariant(StrEnum):
    """Visual variant of a dashboard notification."""

    DEFAULT = ""
    DESTRUCTIVE = "destructive"


# Department filter value meaning "no department restriction"
ALL_DEPARTMENTS = "all"

PAGE_SIZE_CHOICES: tuple[int, ...] = (5, 10, 20, 50)
DEFAULT_PAGE_SIZE = 10

EXPORT_MEDIA_TYPES = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.XLSX: "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}
