"""Employee CRUD and export endpoints, scoped to the logged-in user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from roster.api.deps import get_current_user, get_db
from roster.api.schemas.employees import EmployeeRequest, EmployeeResponse
from roster.core.constants import (
    ALL_DEPARTMENTS,
    EXPORT_MEDIA_TYPES,
    ExportFormat,
    SortDirection,
    SortField,
)
from roster.db.models.user import User
from roster.processing.export import EXPORT_FILENAMES, export_records
from roster.processing.view import filter_records, sort_records
from roster.repositories import employees as employee_repository

router = APIRouter(prefix="/employees", tags=["Employees"])


@router.get("", response_model=list[EmployeeResponse])
async def list_employees(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[EmployeeResponse]:
    """All of the caller's employees, ordered by last then first name."""
    employees = await employee_repository.list_employees(db, current_user.id)
    return [EmployeeResponse.model_validate(e) for e in employees]


@router.get("/export")
async def export_employees(
    export_format: ExportFormat = Query(ExportFormat.CSV, alias="format"),
    search: str = "",
    department: str = ALL_DEPARTMENTS,
    sort: SortField = SortField.NAME,
    direction: SortDirection = SortDirection.ASC,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    """Download the filtered, sorted (unpaged) view as CSV or XLSX."""
    rows = [
        EmployeeResponse.model_validate(e)
        for e in await employee_repository.list_employees(db, current_user.id)
    ]
    view = sort_records(filter_records(rows, search, department), sort, direction)
    filename = EXPORT_FILENAMES[export_format]
    return Response(
        content=export_records(view, export_format),
        media_type=EXPORT_MEDIA_TYPES[export_format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{employee_id}", response_model=EmployeeResponse)
async def get_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EmployeeResponse:
    employee = await employee_repository.get_employee(db, current_user.id, employee_id)
    return EmployeeResponse.model_validate(employee)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(
    payload: EmployeeRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EmployeeResponse:
    """Add an employee; 409 if the caller already has that email."""
    employee = await employee_repository.create_employee(db, current_user.id, **payload.model_dump())
    return EmployeeResponse.model_validate(employee)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: str,
    payload: EmployeeRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> EmployeeResponse:
    employee = await employee_repository.update_employee(
        db, current_user.id, employee_id, **payload.model_dump()
    )
    return EmployeeResponse.model_validate(employee)


@router.delete("/{employee_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_employee(
    employee_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    await employee_repository.delete_employee(db, current_user.id, employee_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
