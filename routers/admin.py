"""
Dictionary Management Router

Endpoints for contributors and admins. Every route requires an authenticated
user with role admin or contributor; mutations additionally require a
verified email address.

Endpoints:
    POST /admin/words - Create word (verified email)
    GET /admin/words - Paginated list
    GET /admin/words/{word_id} - Single entry
    PUT /admin/words/{word_id} - Partial update (verified email)
    DELETE /admin/words/{word_id} - Delete (verified email)
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth import require_contributor, require_verified_email
from core import schemas
from core.database import get_db
from core.dependencies import get_word_service
from routers.words import Pagination, pagination_params, paginated_words
from services.words import WordService

router = APIRouter(
    prefix="/admin",
    tags=["Dictionary Management"],
    dependencies=[Depends(require_contributor)],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Insufficient role, invalid token or unverified email"},
    },
)


@router.post(
    "/words",
    response_model=schemas.WordResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_verified_email)],
    summary="Create word",
)
async def create_word(
    payload: schemas.WordCreateRequest,
    db: AsyncSession = Depends(get_db),
    words: WordService = Depends(get_word_service),
):
    return await words.create(db, payload.model_dump())


@router.get("/words", response_model=schemas.DictionaryResponse, summary="List words")
async def list_words(
    pagination: Pagination = Depends(pagination_params),
    db: AsyncSession = Depends(get_db),
    words: WordService = Depends(get_word_service),
):
    return await paginated_words(db, words, pagination)


@router.get(
    "/words/{word_id}",
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


@router.put(
    "/words/{word_id}",
    response_model=schemas.WordResponse,
    dependencies=[Depends(require_verified_email)],
    summary="Update word",
    responses={
        400: {"description": "No fields to update"},
        404: {"description": "Word not found"},
    },
)
async def update_word(
    word_id: str,
    payload: schemas.WordUpdateRequest,
    db: AsyncSession = Depends(get_db),
    words: WordService = Depends(get_word_service),
):
    """Only fields present in the body are changed."""
    return await words.update(db, word_id, payload.model_dump(exclude_unset=True))


@router.delete(
    "/words/{word_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_verified_email)],
    summary="Delete word",
    responses={404: {"description": "Word not found"}},
)
async def delete_word(
    word_id: str,
    db: AsyncSession = Depends(get_db),
    words: WordService = Depends(get_word_service),
):
    await words.delete(db, word_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
