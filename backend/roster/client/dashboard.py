"""
Dashboard — the employee table screen, without the DOM.

Holds the cache, the current ViewState and a Notifier. Every handler
mirrors one user action: it updates state, recomputes the view through
``derive_view`` and reports the outcome as a notification. API failures
are reported, never retried, and leave the cache as it was.
"""

from __future__ import annotations

from pathlib import Path

from roster.api.schemas.employees import EmployeeRequest, EmployeeResponse
from roster.client.api import RosterClient
from roster.client.cache import EmployeeCache
from roster.client.notify import LogNotifier, Notifier
from roster.core.constants import ExportFormat, NotificationVariant, SortDirection, SortField
from roster.core.errors import RosterError
from roster.core.logging import get_logger
from roster.processing import export, view
from roster.processing.view import View, ViewState

logger = get_logger(__name__)

DESTRUCTIVE = NotificationVariant.DESTRUCTIVE


class Dashboard:
    def __init__(
        self,
        api: RosterClient,
        notifier: Notifier | None = None,
        state: ViewState | None = None,
    ) -> None:
        self.api = api
        self.cache = EmployeeCache(api)
        self.notifier = notifier or LogNotifier()
        self.state = state or ViewState()
        self.view: View = view.derive_view([], self.state)

    def refresh(self) -> View:
        self.view = view.derive_view(self.cache.employees, self.state)
        return self.view

    # ─── Loading ──────────────────────────────────────────
    async def start(self) -> bool:
        """Check the session then load the list. False means "go to login"."""
        try:
            await self.api.me()
        except RosterError:
            return False
        await self.load()
        return True

    async def load(self) -> View:
        try:
            await self.cache.load()
        except RosterError as exc:
            logger.warning("Employee load failed", error=exc.message)
            self.notifier.notify("Error", "Failed to load employees", DESTRUCTIVE)
        return self.refresh()

    # ─── View inputs ──────────────────────────────────────
    def search(self, text: str) -> View:
        self.state = view.with_search(self.state, text)
        return self.refresh()

    def filter_department(self, department: str) -> View:
        self.state = view.with_department(self.state, department)
        return self.refresh()

    def sort_by(self, field: SortField | str) -> View:
        self.state = view.toggle_sort(self.state, field)
        return self.refresh()

    def set_sort(self, field: SortField | str, direction: SortDirection | str = SortDirection.ASC) -> View:
        self.state = view.with_sort(self.state, field, direction)
        return self.refresh()

    def set_page_size(self, page_size: int) -> View:
        self.state = view.with_page_size(self.state, page_size)
        return self.refresh()

    def change_page(self, page: int) -> View:
        self.state = view.go_to_page(self.state, page, self.view.total_results)
        return self.refresh()

    def next_page(self) -> View:
        return self.change_page(self.view.page + 1)

    def previous_page(self) -> View:
        return self.change_page(self.view.page - 1)

    def departments(self) -> list[str]:
        return view.departments(self.cache.employees)

    # ─── Mutations ────────────────────────────────────────
    async def add_employee(self, data: EmployeeRequest) -> EmployeeResponse | None:
        if self.cache.has_email(data.email):
            self.notifier.notify("Duplicate Email", "An employee with this email already exists.", DESTRUCTIVE)
            return None
        try:
            created = await self.cache.add(data)
        except RosterError as exc:
            self.notifier.notify("Error", exc.message or "Failed to add employee", DESTRUCTIVE)
            return None
        self.refresh()
        self.notifier.notify(
            "Employee Added",
            f"{data.first_name} {data.last_name} has been added successfully.",
        )
        return created

    async def edit_employee(self, employee_id: str, data: EmployeeRequest) -> EmployeeResponse | None:
        try:
            updated = await self.cache.update(employee_id, data)
        except RosterError as exc:
            self.notifier.notify("Error", exc.message or "Failed to update employee", DESTRUCTIVE)
            return None
        self.refresh()
        self.notifier.notify(
            "Employee Updated",
            f"{data.first_name} {data.last_name} has been updated successfully.",
        )
        return updated

    async def delete_employee(self, employee_id: str) -> bool:
        employee = self.cache.find(employee_id)
        if employee is None:
            return False
        try:
            await self.cache.remove(employee_id)
        except RosterError:
            self.notifier.notify("Error", "Failed to delete employee", DESTRUCTIVE)
            return False
        self.refresh()
        self.notifier.notify(
            "Employee Deleted",
            f"{employee.full_name} has been removed.",
            DESTRUCTIVE,
        )
        return True

    async def logout(self) -> None:
        try:
            await self.api.logout()
        except RosterError as exc:
            logger.warning("Logout failed", error=exc.message)

    # ─── Export ───────────────────────────────────────────
    def export(self, fmt: ExportFormat | str, path: str | Path | None = None) -> bytes | None:
        """Serialise the filtered view; optionally write it to ``path``."""
        fmt = ExportFormat(fmt)
        try:
            data = export.export_records(self.view.filtered, fmt)
            if path is not None:
                Path(path).write_bytes(data)
        except (RosterError, OSError) as exc:
            logger.warning("Export failed", format=str(fmt), error=str(exc))
            label = "CSV" if fmt == ExportFormat.CSV else "Excel"
            self.notifier.notify("Error", f"Failed to export to {label}", DESTRUCTIVE)
            return None

        if fmt == ExportFormat.CSV:
            self.notifier.notify("CSV Exported", "Employee data has been exported to CSV.")
        else:
            self.notifier.notify("Excel Exported", "Employee data has been exported to Excel.")
        return data
