"""HTTP client for the Roster REST API."""

from __future__ import annotations

from typing import Any

import httpx

from roster.api.schemas.auth import UserResponse
from roster.api.schemas.employees import EmployeeRequest, EmployeeResponse
from roster.core.constants import ExportFormat
from roster.core.errors import error_for_status


class RosterClient:
    """Cookie-carrying async client for the auth and employee endpoints.

    Any non-2xx response is raised as the matching RosterError subclass
    (ValidationError, UnauthorizedError, NotFoundError, ConflictError).

    Usage::

        async with RosterClient("http://localhost:5000") as api:
            await api.login("me@example.com", "secret1")
            employees = await api.list_employees()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "RosterClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._http.request(method, url, **kwargs)
        if response.is_error:
            raise error_for_status(response.status_code, _error_message(response))
        return response

    # ─── Auth ─────────────────────────────────────────────
    async def register(self, name: str, email: str, password: str) -> UserResponse:
        response = await self._request(
            "POST", "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        return UserResponse.model_validate(response.json()["user"])

    async def login(self, email: str, password: str) -> UserResponse:
        response = await self._request(
            "POST", "/api/auth/login",
            json={"email": email, "password": password},
        )
        return UserResponse.model_validate(response.json()["user"])

    async def me(self) -> UserResponse:
        response = await self._request("GET", "/api/auth/me")
        return UserResponse.model_validate(response.json()["user"])

    async def logout(self) -> None:
        await self._request("POST", "/api/auth/logout")
        self._http.cookies.clear()

    # ─── Employees ────────────────────────────────────────
    async def list_employees(self) -> list[EmployeeResponse]:
        response = await self._request("GET", "/api/employees")
        return [EmployeeResponse.model_validate(item) for item in response.json()]

    async def create_employee(self, data: EmployeeRequest) -> EmployeeResponse:
        response = await self._request(
            "POST", "/api/employees",
            json=data.model_dump(mode="json", by_alias=True),
        )
        return EmployeeResponse.model_validate(response.json())

    async def update_employee(self, employee_id: str, data: EmployeeRequest) -> EmployeeResponse:
        response = await self._request(
            "PUT", f"/api/employees/{employee_id}",
            json=data.model_dump(mode="json", by_alias=True),
        )
        return EmployeeResponse.model_validate(response.json())

    async def delete_employee(self, employee_id: str) -> None:
        await self._request("DELETE", f"/api/employees/{employee_id}")

    async def export_employees(
        self,
        fmt: ExportFormat = ExportFormat.CSV,
        **params: str,
    ) -> bytes:
        """Server-side export of the filtered view (see /api/employees/export)."""
        response = await self._request(
            "GET", "/api/employees/export",
            params={"format": str(fmt), **params},
        )
        return response.content


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or response.reason_phrase)
    return response.reason_phrase
