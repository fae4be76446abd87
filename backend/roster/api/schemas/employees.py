"""Employee request/response schemas (camelCase on the wire)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class EmployeeRequest(_CamelModel):
    """Body of create and update. Every field is required."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=320)
    department: str = Field(..., min_length=1, max_length=255)
    salary: int = Field(..., ge=0, strict=True)


class EmployeeResponse(_CamelModel):
    """Employee wire shape: {id, firstName, lastName, email, department, salary}."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    email: str
    department: str
    salary: int

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
