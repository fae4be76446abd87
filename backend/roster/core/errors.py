"""
Domain-specific exception hierarchy.

Every error the API can report inherits from RosterError and carries the
HTTP status it maps to, so the web layer has a single handler and the
client library can map responses back into the same classes.
"""

from __future__ import annotations


class RosterError(Exception):
    """Base exception for all application errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(RosterError):
    """A request field is missing or malformed."""

    status_code = 400


class UnauthorizedError(RosterError):
    """Missing, invalid or expired session, or bad credentials."""

    status_code = 401


class NotFoundError(RosterError):
    """No row matches the id for the calling owner."""

    status_code = 404


class ConflictError(RosterError):
    """A uniqueness constraint was violated (duplicate email)."""

    status_code = 409


class ExportError(RosterError):
    """Serialising the employee view to a file failed."""


_BY_STATUS: dict[int, type[RosterError]] = {
    ValidationError.status_code: ValidationError,
    UnauthorizedError.status_code: UnauthorizedError,
    NotFoundError.status_code: NotFoundError,
    ConflictError.status_code: ConflictError,
}


def error_for_status(status_code: int, message: str) -> RosterError:
    """Build the exception matching an HTTP error status."""
    exc_class = _BY_STATUS.get(status_code, RosterError)
    exc = exc_class(message, details={"status_code": status_code})
    if exc_class is RosterError:
        exc.status_code = status_code
    return exc
