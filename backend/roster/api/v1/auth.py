"""Authentication endpoints: register, login, current user, logout."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from roster.api.deps import get_current_user, get_db
from roster.api.schemas.auth import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from roster.core.config import settings
from roster.core.errors import UnauthorizedError
from roster.core.logging import get_logger
from roster.core.security import create_access_token
from roster.db.models.user import User
from roster.repositories import users as user_repository

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = get_logger(__name__)


def _is_secure(request: Request) -> bool:
    return (
        request.url.scheme == "https"
        or request.headers.get("x-forwarded-proto") == "https"
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(payload: RegisterRequest, db: AsyncSession = Depends(get_db)) -> AuthResponse:
    """Create an account. Does not log the new user in."""
    user = await user_repository.create_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(
        message="Registration successful",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Check credentials and set the session cookie."""
    user = await user_repository.authenticate_user(
        db,
        email=payload.email,
        password=payload.password,
    )
    if user is None:
        logger.info("Login rejected")
        raise UnauthorizedError("Invalid email or password")

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=create_access_token(user.id),
        max_age=settings.SESSION_EXPIRE_MINUTES * 60,
        path="/",
        httponly=True,
        samesite="lax",
        secure=_is_secure(request),
    )
    logger.info("User logged in", user_id=user.id)
    return AuthResponse(
        message="Login successful",
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=CurrentUserResponse)
async def read_current_user(current_user: User = Depends(get_current_user)) -> CurrentUserResponse:
    """Return the user the session cookie belongs to."""
    return CurrentUserResponse(user=UserResponse.model_validate(current_user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> Response:
    """Clear the session cookie. Always succeeds."""
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        samesite="lax",
        secure=_is_secure(request),
    )
    return response
