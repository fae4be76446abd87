"""
User repository containing all data-access operations for the users table.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roster.core.errors import ConflictError
from roster.core.logging import get_logger
from roster.core.security import hash_password, verify_password
from roster.db.models.user import User

logger = get_logger(__name__)


def normalize_email(email: str) -> str:
    return email.lower().strip()


async def create_user(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    password: str,
) -> User:
    """Create a new user with a hashed password.

    Raises ConflictError when the email is already registered.
    """
    email = normalize_email(email)
    if await get_user_by_email(db, email) is not None:
        raise ConflictError("User with this email already exists")

    user = User(
        name=name.strip(),
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError as exc:
        # lost a race with a concurrent registration
        raise ConflictError("User with this email already exists") from exc

    logger.info("User registered", user_id=user.id)
    return user


async def get_user_by_id(db: AsyncSession, user_id: str) -> User | None:
    """Fetch a user by primary key."""
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email address (case-insensitive)."""
    stmt = select(User).where(User.email == normalize_email(email))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def authenticate_user(
    db: AsyncSession,
    *,
    email: str,
    password: str,
) -> User | None:
    """Validate credentials and return the user on success."""
    user = await get_user_by_email(db, email)
    if user is None:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user
