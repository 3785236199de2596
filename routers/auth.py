"""
Authentication Router

Provides endpoints for registration, login and email verification.

Endpoints:
    POST /auth/register - Create contributor account, returns session token
    POST /auth/login - Authenticate and get JWT token
    GET /auth/me - Get current user profile
    POST /auth/verify-email - Consume an email verification token
    POST /auth/resend-verification - Issue a new verification token
    POST /auth/logout - Client-side logout acknowledgement
"""

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

import auth as auth_utils
from core import models, schemas
from core.database import get_db
from core.dependencies import get_email_service, get_user_service
from services.email import EmailService
from services.users import UserService
from utils.exceptions import DictionaryError
from utils.logging import log_account_event
from utils.rate_limit import limit_auth

router = APIRouter(prefix="/auth", tags=["Authentication"])


# =============================================================================
# Registration
# =============================================================================

@router.post(
    "/register",
    response_model=schemas.LoginResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new contributor",
    responses={
        201: {"description": "Account created, verification email queued"},
        400: {"description": "Missing field or password too short"},
        409: {"description": "Username or email already exists"},
    }
)
@limit_auth
async def register(
    request: Request,
    payload: schemas.RegisterRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
):
    """
    Register a new contributor account.

    The account starts unverified. A verification email is sent in the
    background; delivery problems never fail the registration.
    """
    try:
        user = await users.create(
            db,
            username=payload.username,
            email=payload.email,
            password=payload.password,
        )
    except DictionaryError as e:
        log_account_event("register", payload.username, success=False, details=e.message)
        raise

    background_tasks.add_task(
        email_service.send_verification_email,
        user.email,
        user.username,
        user.email_verification_token,
    )

    log_account_event("register", user.username, success=True)
    return {"token": auth_utils.create_session_token(user), "user": user}


# =============================================================================
# Login
# =============================================================================

@router.post(
    "/login",
    response_model=schemas.LoginResponse,
    summary="Login for session token",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    }
)
@limit_auth
async def login(
    request: Request,
    payload: schemas.LoginRequest,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """
    Authenticate with username and password.

    Returns a bearer token valid for 24 hours together with the user profile.
    """
    try:
        user = await users.authenticate(db, payload.username, payload.password)
    except DictionaryError:
        log_account_event("login", payload.username, success=False)
        raise

    log_account_event("login", user.username, success=True)
    return {"token": auth_utils.create_session_token(user), "user": user}


# =============================================================================
# Profile
# =============================================================================

@router.get(
    "/me",
    response_model=schemas.UserResponse,
    summary="Get current user profile",
)
async def read_me(
    current_user: models.User = Depends(auth_utils.get_current_user)
):
    return current_user


# =============================================================================
# Email Verification
# =============================================================================

@router.post(
    "/verify-email",
    response_model=schemas.VerifyEmailResponse,
    summary="Verify email address",
    responses={400: {"description": "Invalid or already used token"}},
)
async def verify_email(
    payload: schemas.EmailVerificationRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
):
    """
    Consume a verification token and mark the account verified.

    A token works once: a second attempt with the same token fails.
    """
    try:
        user = await users.verify_email(db, payload.token)
    except DictionaryError as e:
        log_account_event("verify", "token", success=False, details=e.message)
        raise

    background_tasks.add_task(email_service.send_welcome_email, user.email, user.username)

    log_account_event("verify", user.username, success=True)
    return {"message": "Email verified successfully", "user": user}


@router.post(
    "/resend-verification",
    response_model=schemas.MessageResponse,
    summary="Resend verification email",
    responses={400: {"description": "User not found or already verified"}},
)
@limit_auth
async def resend_verification(
    request: Request,
    payload: schemas.ResendVerificationRequest,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    users: UserService = Depends(get_user_service),
    email_service: EmailService = Depends(get_email_service),
):
    """Replace the pending verification token and email the new one."""
    try:
        user, token = await users.resend_verification(db, payload.email)
    except DictionaryError as e:
        log_account_event("resend", payload.email, success=False, details=e.message)
        raise

    background_tasks.add_task(
        email_service.send_verification_email, user.email, user.username, token
    )

    log_account_event("resend", user.username, success=True)
    return {"message": "Verification email sent successfully"}


# =============================================================================
# Logout
# =============================================================================

@router.post(
    "/logout",
    response_model=schemas.MessageResponse,
    summary="Logout",
)
async def logout():
    """
    Session tokens are stateless, so logging out means discarding the token
    on the client. This endpoint only acknowledges it.
    """
    return {"message": "Logged out successfully"}
