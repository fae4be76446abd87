"""
EmployeeCache — the caller's full employee list, held in memory.

The list is fetched once per load. Mutations go to the API first and the
cache is patched only after the server confirms; a failed call leaves the
list untouched and re-raises. There is no protection against overlapping
calls: whichever response arrives last decides the cached row.
"""

from __future__ import annotations

from roster.api.schemas.employees import EmployeeRequest, EmployeeResponse
from roster.client.api import RosterClient


class EmployeeCache:
    def __init__(self, api: RosterClient) -> None:
        self._api = api
        self._employees: list[EmployeeResponse] = []

    @property
    def employees(self) -> list[EmployeeResponse]:
        return list(self._employees)

    def __len__(self) -> int:
        return len(self._employees)

    def find(self, employee_id: str) -> EmployeeResponse | None:
        return next((e for e in self._employees if e.id == employee_id), None)

    def has_email(self, email: str, *, exclude_id: str | None = None) -> bool:
        """Case-insensitive email check among cached records."""
        needle = email.lower()
        return any(
            e.email.lower() == needle and e.id != exclude_id
            for e in self._employees
        )

    async def load(self) -> list[EmployeeResponse]:
        self._employees = await self._api.list_employees()
        return self.employees

    async def add(self, data: EmployeeRequest) -> EmployeeResponse:
        created = await self._api.create_employee(data)
        self._employees.append(created)
        return created

    async def update(self, employee_id: str, data: EmployeeRequest) -> EmployeeResponse:
        updated = await self._api.update_employee(employee_id, data)
        for index, employee in enumerate(self._employees):
            if employee.id == employee_id:
                self._employees[index] = updated
                break
        return updated

    async def remove(self, employee_id: str) -> None:
        await self._api.delete_employee(employee_id)
        self._employees = [e for e in self._employees if e.id != employee_id]
