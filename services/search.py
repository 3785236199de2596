"""
Dictionary Search

Case-insensitive substring search over word, definition and short
description, ranked by a static relevance score:

    exact word match          100
    word starts with query     80
    query inside word          60
    query inside definition    40
    query inside short desc    20

Matching runs in Python with str.casefold() so Romanian diacritics
(Ă/ă, Ș/ș, Ț/ț, Â/â, Î/î) compare case-insensitively, which SQLite's
LOWER() does not do for non-ASCII text.
"""

from typing import Iterable, List, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.constants import (
    SCORE_EXACT_MATCH,
    SCORE_PREFIX_MATCH,
    SCORE_WORD_SUBSTRING,
    SCORE_DEFINITION_MATCH,
    SCORE_SHORT_DESC_MATCH,
)
from core.models import Word
from utils.exceptions import ValidationError
from utils.logging import get_logger

logger = get_logger(__name__)


def relevance_score(word: Word, query: str) -> int:
    """
    Score one entry against an already case-folded query.

    Returns 0 when no field contains the query.
    """
    headword = word.word.casefold()

    if headword == query:
        return SCORE_EXACT_MATCH
    if headword.startswith(query):
        return SCORE_PREFIX_MATCH
    if query in headword:
        return SCORE_WORD_SUBSTRING
    if query in (word.definition or "").casefold():
        return SCORE_DEFINITION_MATCH
    if query in (word.short_description or "").casefold():
        return SCORE_SHORT_DESC_MATCH
    return 0


def rank_words(words: Iterable[Word], query: str) -> List[Tuple[Word, int]]:
    """
    Filter and order entries by relevance to `query`.

    Ties keep the input order (sorted() is stable), so passing entries in
    alphabetical order yields alphabetical ties.
    """
    needle = query.strip().casefold()
    if not needle:
        return []

    scored = [(word, relevance_score(word, needle)) for word in words]
    matches = [(word, score) for word, score in scored if score > 0]
    return sorted(matches, key=lambda pair: pair[1], reverse=True)


class SearchService:
    """Runs ranked searches against the words table."""

    async def search(self, db: AsyncSession, query: str) -> List[Tuple[Word, int]]:
        """
        Raises:
            ValidationError: blank query
        """
        if not query or not query.strip():
            raise ValidationError("Search query is required", field="q")

        result = await db.execute(select(Word).order_by(Word.word.asc(), Word.id))
        ranked = rank_words(result.scalars().all(), query)

        logger.debug(f"Search '{query.strip()}' -> {len(ranked)} results")
        return ranked


# Singleton instance
_search_service = SearchService()


def get_search_service() -> SearchService:
    return _search_service
