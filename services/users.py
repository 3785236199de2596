"""
User Account Service

Persistence and lifecycle of dictionary accounts, including the email
verification state machine:

    Unverified (email_verified=False, token set)
        -- verify_email(token) -->
    Verified (email_verified=True, token NULL)

resend_verification() replaces the pending token of an unverified account,
invalidating the previous one. There is no path back to Unverified.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

import auth as auth_utils
from config.constants import ROLE_CONTRIBUTOR
from core.database import commit
from core.models import User
from utils.exceptions import (
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    NotFoundOrAlreadyVerifiedError,
    UnauthorizedError,
    ValidationError,
)
from utils.logging import get_logger

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("username", "email", "role")


class UserService:
    """Service for managing user accounts."""

    async def create(
        self,
        db: AsyncSession,
        username: str,
        email: str,
        password: str,
        role: str = ROLE_CONTRIBUTOR,
        email_verified: bool = False,
    ) -> User:
        """
        Create an account.

        New accounts start unverified with a fresh verification token unless
        email_verified is set (seeded accounts).

        Raises:
            ConflictError: username or email already taken
        """
        user = User(
            username=username,
            email=email,
            password_hash=auth_utils.get_password_hash(password),
            role=role,
            email_verified=email_verified,
            email_verification_token=None if email_verified else auth_utils.generate_verification_token(),
        )
        db.add(user)
        await self._commit_unique(db)
        await db.refresh(user)

        logger.info(f"Created {role} account: {username}")
        return user

    async def get_by_id(self, db: AsyncSession, user_id: str) -> User:
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError("User not found", resource="user", resource_id=user_id)
        return user

    async def get_by_username(self, db: AsyncSession, username: str) -> Optional[User]:
        result = await db.execute(select(User).filter(User.username == username))
        return result.scalars().first()

    async def list_users(self, db: AsyncSession) -> List[User]:
        """All accounts, newest first."""
        result = await db.execute(select(User).order_by(User.created_at.desc()))
        return list(result.scalars().all())

    async def count(self, db: AsyncSession) -> int:
        return await db.scalar(select(func.count(User.id)))

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> User:
        """
        Check login credentials.

        Raises:
            UnauthorizedError: unknown username or wrong password
        """
        user = await self.get_by_username(db, username)
        if user is None or not auth_utils.verify_password(password, user.password_hash):
            raise UnauthorizedError("Invalid credentials")
        return user

    async def update(self, db: AsyncSession, user_id: str, updates: dict) -> User:
        """
        Apply profile and role changes.

        Only keys in UPDATABLE_FIELDS with non-None values are applied.

        Raises:
            NotFoundError: unknown user
            ValidationError: nothing to update
            ConflictError: new username or email already taken
        """
        user = await self.get_by_id(db, user_id)

        changes = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and v is not None}

        if not changes:
            raise ValidationError("No fields to update")

        for field, value in changes.items():
            setattr(user, field, value)

        await self._commit_unique(db)
        await db.refresh(user)

        logger.info(f"Updated account {user.username}: {sorted(changes)}")
        return user

    async def delete(self, db: AsyncSession, user_id: str) -> None:
        user = await self.get_by_id(db, user_id)
        await db.delete(user)
        await commit(db)
        logger.info(f"Deleted account: {user.username}")

    # =========================================================================
    # Email verification
    # =========================================================================

    async def verify_email(self, db: AsyncSession, token: str) -> User:
        """
        Consume a verification token.

        Raises:
            InvalidTokenError: no unverified account holds this token
        """
        result = await db.execute(
            select(User).filter(
                User.email_verification_token == token,
                User.email_verified.is_(False),
            )
        )
        user = result.scalars().first()

        if user is None:
            raise InvalidTokenError()

        user.email_verified = True
        user.email_verification_token = None
        await commit(db)
        await db.refresh(user)
        return user

    async def resend_verification(self, db: AsyncSession, email: str) -> tuple:
        """
        Issue a replacement verification token for an unverified account.

        Returns:
            (user, token): the account and its new token

        Raises:
            NotFoundOrAlreadyVerifiedError: unknown email or already verified
        """
        result = await db.execute(
            select(User).filter(
                User.email == email,
                User.email_verified.is_(False),
            )
        )
        user = result.scalars().first()

        if user is None:
            raise NotFoundOrAlreadyVerifiedError()

        token = auth_utils.generate_verification_token()
        user.email_verification_token = token
        await commit(db)
        await db.refresh(user)
        return user, token

    async def _commit_unique(self, db: AsyncSession) -> None:
        """Commit, translating unique constraint violations to ConflictError."""
        try:
            await commit(db)
        except IntegrityError as e:
            await db.rollback()
            logger.warning(f"Unique constraint violation: {e.orig}")
            raise ConflictError("Username or email already exists")


# Singleton instance
_user_service = UserService()


def get_user_service() -> UserService:
    return _user_service
