"""
User Management Router

Admin-only account management.

Endpoints:
    GET /users - List accounts, newest first
    POST /users - Create account with optional role
    GET /users/{user_id} - Single account
    PUT /users/{user_id} - Update username, email or role
    DELETE /users/{user_id} - Delete account (not your own)
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth import require_admin
from config.constants import ROLE_CONTRIBUTOR
from core import models, schemas
from core.database import get_db
from core.dependencies import get_user_service
from services.users import UserService
from utils.exceptions import ValidationError
from utils.logging import log_account_event

router = APIRouter(
    prefix="/users",
    tags=["User Management"],
    dependencies=[Depends(require_admin)],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Admin access required"},
    },
)


@router.get("", response_model=List[schemas.UserResponse], summary="List users")
async def list_users(
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    return await users.list_users(db)


@router.post(
    "",
    response_model=schemas.UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={409: {"description": "Username or email already exists"}},
)
async def create_user(
    payload: schemas.UserCreateRequest,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
    admin: models.User = Depends(require_admin),
):
    """Accounts created here start unverified, like self-registered ones."""
    user = await users.create(
        db,
        username=payload.username,
        email=payload.email,
        password=payload.password,
        role=payload.role or ROLE_CONTRIBUTOR,
    )
    log_account_event("create", user.username, success=True, details=f"by {admin.username}")
    return user


@router.get(
    "/{user_id}",
    response_model=schemas.UserResponse,
    summary="Get user",
    responses={404: {"description": "User not found"}},
)
async def read_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    return await users.get_by_id(db, user_id)


@router.put(
    "/{user_id}",
    response_model=schemas.UserResponse,
    summary="Update user",
    responses={
        400: {"description": "No fields to update"},
        404: {"description": "User not found"},
        409: {"description": "Username or email already exists"},
    },
)
async def update_user(
    user_id: str,
    payload: schemas.UserUpdateRequest,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Passwords cannot be changed through this endpoint and are ignored."""
    updates = payload.model_dump(exclude_unset=True, exclude={"password"})
    if not any(value is not None for value in updates.values()):
        raise ValidationError("No fields to update")
    return await users.update(db, user_id, updates)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    responses={
        400: {"description": "Cannot delete your own account"},
        404: {"description": "User not found"},
    },
)
async def delete_user(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
    admin: models.User = Depends(require_admin),
):
    if admin.id == user_id:
        log_account_event("delete", admin.username, success=False, details="self-deletion refused")
        raise ValidationError("Cannot delete your own account")

    await users.delete(db, user_id)
    log_account_event("delete", user_id, success=True, details=f"by {admin.username}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
