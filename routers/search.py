"""
Search Router

GET /search?q=... returns entries ranked by relevance.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from core import schemas
from core.database import get_db
from core.dependencies import get_search_service
from services.search import SearchService

router = APIRouter(prefix="/search", tags=["Search"])


@router.get(
    "",
    response_model=schemas.SearchResponse,
    summary="Search words",
    responses={400: {"description": "Empty query"}},
)
async def search_words(
    q: str = Query("", description="Free-text query"),
    db: AsyncSession = Depends(get_db),
    search: SearchService = Depends(get_search_service),
):
    """
    Case-insensitive substring search over word, definition and short
    description. Results are ordered by relevance score, highest first.
    """
    ranked = await search.search(db, q)
    return {
        "results": [
            {"word": word, "relevance_score": score} for word, score in ranked
        ],
        "total": len(ranked),
        "query": q.strip(),
    }
