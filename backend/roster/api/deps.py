"""Shared dependencies for API routes."""

from __future__ import annotations

from typing import Any, AsyncGenerator

from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.config import settings
from roster.core.errors import UnauthorizedError
from roster.core.security import decode_access_token
from roster.db.models.user import User
from roster.db.session import get_db as _get_db
from roster.repositories import users as user_repository

session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield an async DB session."""
    async for session in _get_db():
        yield session


async def get_session_payload(
    token: str | None = Depends(session_cookie),
) -> dict[str, Any]:
    """Extract and validate the signed session cookie."""
    if not token:
        raise UnauthorizedError("Unauthorized")

    payload = decode_access_token(token)
    if payload is None:
        raise UnauthorizedError("Invalid or expired session")
    return payload


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    session_payload: dict[str, Any] = Depends(get_session_payload),
) -> User:
    """Resolve the caller from the session cookie."""
    subject = session_payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise UnauthorizedError("Invalid session")

    user = await user_repository.get_user_by_id(db, subject)
    if user is None:
        raise UnauthorizedError("Unauthorized")

    return user
