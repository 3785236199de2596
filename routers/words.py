"""
Public Dictionary Router

Read-only access to dictionary entries.

Endpoints:
    GET /words - Paginated list (page, limit, sort)
    GET /words/alphabetical - Every entry, alphabetically
    GET /words/{word_id} - Single entry
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from config.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    SORT_ALPHABETICAL,
    SORT_CREATED,
)
from core import schemas
from core.database import get_db
from core.dependencies import get_word_service
from services.words import WordService

router = APIRouter(prefix="/words", tags=["Dictionary"])


@dataclass
class Pagination:
    page: int
    limit: int
    sort: str


def _positive_int(raw: Optional[str], default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value >= 1 else default


def pagination_params(
    page: Optional[str] = Query(None, description="1-indexed page number, default 1"),
    limit: Optional[str] = Query(None, description=f"Page size, default 10, at most {MAX_PAGE_SIZE}"),
    sort: Optional[str] = Query(None, description="alphabetical (default) or created"),
) -> Pagination:
    """
    Lenient paging parameters: missing, malformed or non-positive values
    fall back to the defaults, and an unknown sort means alphabetical.
    """
    return Pagination(
        page=_positive_int(page, DEFAULT_PAGE),
        limit=min(_positive_int(limit, DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE),
        sort=SORT_CREATED if sort == SORT_CREATED else SORT_ALPHABETICAL,
    )


async def paginated_words(
    db: AsyncSession,
    words: WordService,
    pagination: Pagination
) -> dict:
    """Build the {words, total, page, limit} envelope."""
    items, total = await words.list_page(db, pagination.page, pagination.limit, pagination.sort)
    return {
        "words": items,
        "total": total,
        "page": pagination.page,
        "limit": pagination.limit,
    }


@router.get("", response_model=schemas.DictionaryResponse, summary="List words")
async def list_words(
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    words: WordService = Depends(get_word_service),
):
    return await paginated_words(db, words, pagination)


@router.get("/alphabetical", response_model=schemas.WordListResponse, summary="All words A-Z")
async def list_words_alphabetically(
    db: AsyncSession = Depends(get_db),
    words: WordService = Depends(get_word_service),
):
    return {"words": await words.list_alphabetical(db)}


@router.get(
    "/{word_id}",
    response_model=schemas.WordResponse,
    summary="Get word",
    responses={404: {"description": "Word not found"}},
)
async def read_word(
    word_id: str,
    db: AsyncSession = Depends(get_db),
    words: WordService = Depends(get_word_service),
):
    return await words.get_by_id(db, word_id)
