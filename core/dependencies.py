"""
FastAPI Dependencies Module

Provides dependency injection for services.
Stateless services are module singletons; the email service is built from
settings in create_app() and stored on app.state so tests can swap it.

Usage:
    from core.dependencies import get_word_service

    @router.get("/words/{word_id}")
    async def read_word(
        word_id: str,
        words: WordService = Depends(get_word_service)
    ):
        ...
"""

from fastapi import Request

from services.email import EmailService
from services.search import get_search_service
from services.smiles import get_smile_service
from services.users import get_user_service
from services.words import get_word_service


def get_email_service(request: Request) -> EmailService:
    """
    Get the EmailService attached to the running application.

    Returns:
        EmailService: Configured sender (SMTP or log-only)
    """
    return request.app.state.email_service


__all__ = [
    "get_email_service",
    "get_search_service",
    "get_smile_service",
    "get_user_service",
    "get_word_service",
]
