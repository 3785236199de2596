"""
Smiles Router

Endpoints:
    POST /smiles - Anonymous smile (counter only)
    POST /smiles/user - Authenticated smile, once per user and word
    GET /smiles/user - Word ids the current user smiled at
    DELETE /smiles/user/{word_id} - Remove the current user's smile
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from auth import get_current_user
from core import models, schemas
from core.database import get_db
from core.dependencies import get_smile_service
from services.smiles import SmileService
from utils.rate_limit import limit_smile

router = APIRouter(prefix="/smiles", tags=["Smiles"])

SMILE_RECORDED = "Smile recorded successfully! 😊"
SMILE_REMOVED = "Smile removed successfully"


@router.post(
    "",
    response_model=schemas.SmileResponse,
    summary="Smile at a word anonymously",
    responses={404: {"description": "Word not found"}},
)
@limit_smile
async def add_anonymous_smile(
    request: Request,
    payload: schemas.SmileRequest,
    db: AsyncSession = Depends(get_db),
    smiles: SmileService = Depends(get_smile_service),
):
    """
    Increments the counter unconditionally. Duplicate anonymous smiles are
    only prevented client-side.
    """
    count = await smiles.add_anonymous_smile(db, payload.word_id)
    return {"success": True, "smile_count": count, "message": SMILE_RECORDED}


@router.post(
    "/user",
    response_model=schemas.SmileResponse,
    summary="Smile at a word as the current user",
    responses={
        400: {"description": "Already smiled at this word"},
        404: {"description": "Word not found"},
    },
)
@limit_smile
async def add_user_smile(
    request: Request,
    payload: schemas.SmileRequest,
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    smiles: SmileService = Depends(get_smile_service),
):
    count = await smiles.add_user_smile(db, current_user, payload.word_id)
    return {"success": True, "smile_count": count, "message": SMILE_RECORDED}


@router.get("/user", response_model=schemas.UserSmilesResponse, summary="List my smiles")
async def list_user_smiles(
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    smiles: SmileService = Depends(get_smile_service),
):
    word_ids = await smiles.list_smiled_word_ids(db, current_user.id)
    return {"smiled_word_ids": word_ids, "count": len(word_ids)}


@router.delete(
    "/user/{word_id}",
    response_model=schemas.SmileResponse,
    summary="Remove my smile",
    responses={400: {"description": "No smile to remove"}},
)
async def remove_user_smile(
    word_id: str,
    current_user: models.User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
    smiles: SmileService = Depends(get_smile_service),
):
    count = await smiles.remove_user_smile(db, current_user, word_id)
    return {"success": True, "smile_count": count, "message": SMILE_REMOVED}
