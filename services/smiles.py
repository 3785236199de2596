"""
Smile Service

Tracks "smiles" (likes) on dictionary entries. Two paths share one counter:

    anonymous      increments Word.smile_count, nothing else is recorded
    authenticated  inserts a UserSmile row and increments the counter

For authenticated smiles the join row and the counter change are committed in
the same transaction, so they cannot drift apart. Decrements never take the
counter below zero.
"""

from typing import List

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import commit
from core.models import User, UserSmile, Word, utcnow
from services.words import get_word_service
from utils.exceptions import ValidationError
from utils.logging import get_logger

logger = get_logger(__name__)

ALREADY_SMILED = "You have already smiled at this word! 😊"
NOT_SMILED = "You haven't smiled at this word yet!"


class SmileService:
    """Service for smile counters and per-user smile records."""

    def __init__(self):
        self.words = get_word_service()

    async def add_anonymous_smile(self, db: AsyncSession, word_id: str) -> int:
        """
        Increment a word's counter without recording who smiled.

        Returns:
            int: The new smile count

        Raises:
            NotFoundError: unknown word
        """
        word = await self.words.get_by_id(db, word_id)

        await db.execute(self._increment(word_id))
        await commit(db)
        await db.refresh(word)

        logger.debug(f"Anonymous smile on '{word.word}' -> {word.smile_count}")
        return word.smile_count

    async def has_smiled(self, db: AsyncSession, user_id: str, word_id: str) -> bool:
        return await self._find(db, user_id, word_id) is not None

    async def add_user_smile(self, db: AsyncSession, user: User, word_id: str) -> int:
        """
        Record an authenticated smile.

        Raises:
            NotFoundError: unknown word
            ValidationError: the user already smiled at this word
        """
        word = await self.words.get_by_id(db, word_id)

        if await self.has_smiled(db, user.id, word_id):
            raise ValidationError(ALREADY_SMILED)

        try:
            db.add(UserSmile(user_id=user.id, word_id=word_id))
            await db.flush()
            await db.execute(self._increment(word_id))
            await commit(db)
        except IntegrityError:
            # A concurrent request inserted the same (user, word) row first
            await db.rollback()
            raise ValidationError(ALREADY_SMILED)

        await db.refresh(word)
        logger.debug(f"{user.username} smiled at '{word.word}' -> {word.smile_count}")
        return word.smile_count

    async def remove_user_smile(self, db: AsyncSession, user: User, word_id: str) -> int:
        """
        Undo an authenticated smile.

        Raises:
            ValidationError: the user has no smile on this word
        """
        smile = await self._find(db, user.id, word_id)
        if smile is None:
            raise ValidationError(NOT_SMILED)

        await db.delete(smile)
        await db.execute(
            update(Word)
            .where(Word.id == word_id, Word.smile_count > 0)
            .values(smile_count=Word.smile_count - 1, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        await commit(db)

        word = await self.words.get_by_id(db, word_id)
        await db.refresh(word)
        logger.debug(f"{user.username} removed smile from '{word.word}' -> {word.smile_count}")
        return word.smile_count

    async def list_smiled_word_ids(self, db: AsyncSession, user_id: str) -> List[str]:
        """Ids of the words a user smiled at, newest first."""
        result = await db.execute(
            select(UserSmile.word_id)
            .filter(UserSmile.user_id == user_id)
            .order_by(UserSmile.created_at.desc())
        )
        return list(result.scalars().all())

    async def _find(self, db: AsyncSession, user_id: str, word_id: str):
        result = await db.execute(
            select(UserSmile).filter(
                UserSmile.user_id == user_id,
                UserSmile.word_id == word_id,
            )
        )
        return result.scalars().first()

    @staticmethod
    def _increment(word_id: str):
        return (
            update(Word)
            .where(Word.id == word_id)
            .values(smile_count=Word.smile_count + 1, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )


# Singleton instance
_smile_service = SmileService()


def get_smile_service() -> SmileService:
    return _smile_service
