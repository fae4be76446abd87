"""
Password hashing and session tokens.

The session cookie carries a signed JWT (HS256) whose ``sub`` claim is the
user id and whose ``exp`` claim bounds its lifetime. Holding the cookie is
still enough to act as the user until it expires or the user logs out.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from roster.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt ignores everything past 72 bytes
_BCRYPT_MAX_BYTES = 72


def _prepare(password: str) -> str:
    if len(password.encode("utf-8")) > _BCRYPT_MAX_BYTES:
        return hashlib.sha256(password.encode("utf-8")).hexdigest()
    return password


def hash_password(password: str) -> str:
    return pwd_context.hash(_prepare(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(_prepare(plain_password), hashed_password)
    except ValueError:
        # malformed stored hash
        return False


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Issue a signed session token for ``subject`` (the user id)."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    claims: dict[str, Any] = {
        **(extra_claims or {}),
        "sub": subject,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, settings.SESSION_SECRET_KEY, algorithm=settings.SESSION_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Return the token claims, or None if the signature or expiry is invalid."""
    try:
        return jwt.decode(token, settings.SESSION_SECRET_KEY, algorithms=[settings.SESSION_ALGORITHM])
    except JWTError:
        return None
