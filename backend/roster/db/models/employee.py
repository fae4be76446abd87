"""
Employee model — one record in a user's private roster.

Uniqueness of (owner, lower(email)) is enforced by the
`employees_user_email_lower_unique` expression index, so concurrent
writers race at the database and the loser gets an IntegrityError.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from roster.db.models.base import Base, generate_id, utcnow

EMAIL_UNIQUE_INDEX = "employees_user_email_lower_unique"


class Employee(Base):
    __tablename__ = "employees"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    owner_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    department: Mapped[str] = mapped_column(String(255), nullable=False)
    salary: Mapped[int] = mapped_column(Integer, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    __table_args__ = (
        CheckConstraint("salary >= 0", name="employees_salary_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Employee id={self.id} {self.email} owner={self.owner_id}>"


Index(EMAIL_UNIQUE_INDEX, Employee.owner_id, func.lower(Employee.email), unique=True)
