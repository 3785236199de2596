"""
Authentication Utilities Module

Provides password hashing, JWT session tokens, email verification tokens and
the authorization guard chain used by the routers.
Uses bcrypt for password hashing and python-jose for JWT.

Guard chain (each step short-circuits on failure):
    get_current_user        401 without token, 403 on bad token / deleted user
    require_role(*roles)    403 when the user's role is not permitted
    require_verified_email  403 while the email is unverified

Usage:
    from auth import get_current_user, require_contributor, require_verified_email

    @router.post("/words", dependencies=[Depends(require_verified_email)])
    async def create_word(...):
        ...
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from config.constants import DICTIONARY_MANAGER_ROLES, USER_MANAGER_ROLES
from core import models
from core.database import get_db
from utils.exceptions import UnauthorizedError, ForbiddenError
from utils.logging import get_logger

logger = get_logger(__name__)

# Bearer token extraction from the Authorization header; missing token -> None
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


# =============================================================================
# Password Hashing
# =============================================================================

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The bcrypt hashed password to compare against

    Returns:
        bool: True if password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode('utf-8'),
            hashed_password.encode('utf-8')
        )
    except ValueError as e:
        logger.error(f"Password verification failed: {e}")
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password to hash

    Returns:
        str: Bcrypt hashed password
    """
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


# =============================================================================
# Email Verification Tokens
# =============================================================================

def generate_verification_token() -> str:
    """Random opaque hex token proving control of an email address."""
    return secrets.token_hex(settings.VERIFICATION_TOKEN_BYTES)


# =============================================================================
# JWT Token Management
# =============================================================================

def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Payload data to encode in the token.
              Should include "sub" (subject) with the user id.
        expires_delta: Optional custom expiration time.
                       Defaults to ACCESS_TOKEN_EXPIRE_MINUTES from settings.

    Returns:
        str: Encoded JWT token
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_session_token(user: models.User) -> str:
    """Issue the 24-hour session token for a user."""
    return create_access_token({"sub": user.id})


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string

    Returns:
        dict: Decoded token payload, or None if invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None


# =============================================================================
# Guard Chain Dependencies
# =============================================================================

async def get_current_user(
    token: Optional[str] = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> models.User:
    """
    FastAPI dependency resolving the bearer token to a user.

    Raises:
        UnauthorizedError: 401 if no token was presented
        ForbiddenError: 403 if the token is invalid, expired, or its user is gone
    """
    if not token:
        raise UnauthorizedError("Access token required")

    payload = decode_access_token(token)
    user_id = payload.get("sub") if payload else None

    if user_id is None:
        logger.warning("Rejected invalid or expired session token")
        raise ForbiddenError("Invalid or expired token")

    user = await db.get(models.User, user_id)

    if user is None:
        logger.warning(f"Session token for missing user: {user_id}")
        raise ForbiddenError("Invalid or expired token")

    return user


def require_role(*roles: str):
    """
    Build a dependency admitting only users whose role is in `roles`.

    Usage:
        require_admin = require_role("admin")
    """
    permitted = frozenset(roles)

    async def dependency(
        user: models.User = Depends(get_current_user)
    ) -> models.User:
        if user.role not in permitted:
            logger.warning(f"Role '{user.role}' denied for {user.username}")
            raise ForbiddenError(f"{' or '.join(sorted(permitted)).capitalize()} access required")
        return user

    return dependency


require_contributor = require_role(*DICTIONARY_MANAGER_ROLES)
require_admin = require_role(*USER_MANAGER_ROLES)


async def require_verified_email(
    user: models.User = Depends(get_current_user)
) -> models.User:
    """Admit only users who completed email verification."""
    if not user.email_verified:
        raise ForbiddenError("Email verification required to perform this action")
    return user
