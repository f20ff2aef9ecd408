"""
Authentication: password hashing, bearer tokens and credential checks.

Passwords are hashed with bcrypt. Tokens are HS256 JWTs carrying the user's
``id`` and ``username``; the signing secret comes from ``Settings.jwt_secret``.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError

from car_api.config import Settings
from car_api.database import UserRepository
from car_api.exceptions import (
    ForbiddenError,
    InvalidCredentialsError,
    UnauthenticatedError,
    ValidationError,
)
from car_api.models.user import User
from car_api.schemas.user import TokenClaims

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: int,
    username: str,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed token for ``user_id``/``username``."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "username": username,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_access_token(token: Optional[str], settings: Settings) -> TokenClaims:
    """
    Verify ``token`` and return its claims.

    Raises ``UnauthenticatedError`` when no token is given and
    ``ForbiddenError`` when it is invalid or expired.
    """
    if not token:
        raise UnauthenticatedError("Access denied. No token provided.")
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.ExpiredSignatureError:
        raise ForbiddenError("Token has expired") from None
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected token: %s", exc)
        raise ForbiddenError("Invalid token") from None
    try:
        return TokenClaims.model_validate(payload)
    except PydanticValidationError:
        raise ForbiddenError("Invalid token") from None


def register_user(username: str, password: str, users: UserRepository, rounds: int = 10) -> User:
    """Store a new user. The caller still has to log in to get a token."""
    if len(password.encode()) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password cannot be longer than {MAX_PASSWORD_BYTES} bytes")
    if users.get_by_username(username) is not None:
        raise ValidationError("User already exists")
    user = users.create(username, hash_password(password, rounds=rounds))
    logger.info("Registered user %s (id=%d)", user.username, user.id)
    return user


def authenticate_user(username: str, password: str, users: UserRepository) -> User:
    user = users.get_by_username(username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", username)
        raise InvalidCredentialsError("Invalid credentials")
    return user
