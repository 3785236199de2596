"""
Dictionary Word Service

CRUD and listing for dictionary entries.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from config.constants import SORT_CREATED
from core.database import commit
from core.models import Word
from utils.exceptions import NotFoundError, ValidationError
from utils.logging import get_logger

logger = get_logger(__name__)

# Columns that cannot be cleared with an explicit null
REQUIRED_FIELDS = ("word", "definition", "short_description")
OPTIONAL_FIELDS = ("category", "origin", "examples", "pronunciation")


class WordService:
    """Service for managing dictionary entries."""

    async def create(self, db: AsyncSession, data: Dict[str, Any]) -> Word:
        word = Word(
            word=data["word"],
            definition=data["definition"],
            short_description=data["short_description"],
            category=data.get("category") or None,
            origin=data.get("origin") or None,
            examples=data.get("examples"),
            pronunciation=data.get("pronunciation") or None,
        )
        db.add(word)
        await commit(db)
        await db.refresh(word)

        logger.info(f"Created word '{word.word}' ({word.id})")
        return word

    async def get_by_id(self, db: AsyncSession, word_id: str) -> Word:
        word = await db.get(Word, word_id)
        if word is None:
            raise NotFoundError("Word not found", resource="word", resource_id=word_id)
        return word

    async def list_page(
        self,
        db: AsyncSession,
        page: int,
        limit: int,
        sort: str
    ) -> Tuple[List[Word], int]:
        """
        One page of entries plus the total entry count.

        Args:
            page: 1-indexed page number
            limit: Page size
            sort: "alphabetical" (word ascending) or "created" (newest first)
        """
        if sort == SORT_CREATED:
            order_by = (Word.created_at.desc(), Word.id)
        else:
            order_by = (Word.word.asc(), Word.id)

        result = await db.execute(
            select(Word)
            .order_by(*order_by)
            .limit(limit)
            .offset((page - 1) * limit)
        )
        words = list(result.scalars().all())

        total = await db.scalar(select(func.count(Word.id)))
        return words, total

    async def list_alphabetical(self, db: AsyncSession) -> List[Word]:
        result = await db.execute(select(Word).order_by(Word.word.asc(), Word.id))
        return list(result.scalars().all())

    async def count(self, db: AsyncSession) -> int:
        return await db.scalar(select(func.count(Word.id)))

    async def update(self, db: AsyncSession, word_id: str, updates: Dict[str, Any]) -> Word:
        """
        Apply a partial update.

        Required columns are only changed by non-empty values; optional
        columns may be cleared with None.

        Raises:
            ValidationError: nothing to update
            NotFoundError: unknown word
        """
        changes: Dict[str, Optional[Any]] = {}
        for field in REQUIRED_FIELDS:
            if updates.get(field):
                changes[field] = updates[field]
        for field in OPTIONAL_FIELDS:
            if field in updates:
                changes[field] = updates[field]

        if not changes:
            raise ValidationError("No fields to update")

        word = await self.get_by_id(db, word_id)
        for field, value in changes.items():
            setattr(word, field, value)

        await commit(db)
        await db.refresh(word)

        logger.info(f"Updated word '{word.word}' ({word.id}): {sorted(changes)}")
        return word

    async def delete(self, db: AsyncSession, word_id: str) -> None:
        word = await self.get_by_id(db, word_id)
        await db.delete(word)
        await commit(db)
        logger.info(f"Deleted word '{word.word}' ({word_id})")


# Singleton instance
_word_service = WordService()


def get_word_service() -> WordService:
    return _word_service
