"""
Employee repository — every query is scoped to the owning user.

Email uniqueness per owner is left to the database index; an
IntegrityError raised on flush is reported as ConflictError.
"""

from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.errors import ConflictError, NotFoundError
from roster.core.logging import get_logger
from roster.db.models.employee import Employee

logger = get_logger(__name__)

DUPLICATE_EMAIL_MESSAGE = "An employee with this email already exists."
NOT_FOUND_MESSAGE = "Employee not found"

_MUTABLE_FIELDS = ("first_name", "last_name", "email", "department", "salary")


async def _flush_or_conflict(db: AsyncSession, owner_id: str, email: str) -> None:
    try:
        await db.flush()
    except IntegrityError as exc:
        logger.info("Duplicate employee email rejected", owner_id=owner_id, email=email)
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE, details={"email": email}) from exc


async def list_employees(db: AsyncSession, owner_id: str) -> list[Employee]:
    """All employees of ``owner_id`` ordered by (last_name, first_name)."""
    stmt = (
        select(Employee)
        .where(Employee.owner_id == owner_id)
        .order_by(Employee.last_name, Employee.first_name)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_employee(db: AsyncSession, owner_id: str, employee_id: str) -> Employee:
    """Fetch one employee by id, raising NotFoundError for other owners' rows."""
    stmt = select(Employee).where(
        Employee.id == employee_id,
        Employee.owner_id == owner_id,
    )
    result = await db.execute(stmt)
    employee = result.scalar_one_or_none()
    if employee is None:
        raise NotFoundError(NOT_FOUND_MESSAGE, details={"id": employee_id})
    return employee


async def create_employee(
    db: AsyncSession,
    owner_id: str,
    *,
    first_name: str,
    last_name: str,
    email: str,
    department: str,
    salary: int,
) -> Employee:
    """Insert an employee for ``owner_id``."""
    employee = Employee(
        owner_id=owner_id,
        first_name=first_name,
        last_name=last_name,
        email=email,
        department=department,
        salary=salary,
    )
    db.add(employee)
    await _flush_or_conflict(db, owner_id, email)
    logger.info("Employee created", owner_id=owner_id, employee_id=employee.id)
    return employee


async def update_employee(
    db: AsyncSession,
    owner_id: str,
    employee_id: str,
    **fields: object,
) -> Employee:
    """Overwrite the mutable fields of an owned employee."""
    employee = await get_employee(db, owner_id, employee_id)
    for key, value in fields.items():
        if key not in _MUTABLE_FIELDS:
            continue
        setattr(employee, key, value)

    await _flush_or_conflict(db, owner_id, employee.email)
    logger.info("Employee updated", owner_id=owner_id, employee_id=employee_id)
    return employee


async def delete_employee(db: AsyncSession, owner_id: str, employee_id: str) -> None:
    """Hard-delete an owned employee; NotFoundError if nothing matched."""
    stmt = delete(Employee).where(
        Employee.id == employee_id,
        Employee.owner_id == owner_id,
    )
    result = await db.execute(stmt)
    if result.rowcount == 0:
        raise NotFoundError(NOT_FOUND_MESSAGE, details={"id": employee_id})
    await db.flush()
    logger.info("Employee deleted", owner_id=owner_id, employee_id=employee_id)
