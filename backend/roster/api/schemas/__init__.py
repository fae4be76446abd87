"""API schema package."""

from roster.api.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from roster.api.schemas.employees import EmployeeRequest, EmployeeResponse

__all__ = [
    "AuthResponse",
    "CurrentUserResponse",
    "EmployeeRequest",
    "EmployeeResponse",
    "LoginRequest",
    "RegisterRequest",
    "UserResponse",
]
