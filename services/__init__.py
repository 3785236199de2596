"""
Services Module

Business logic for accounts, dictionary entries, search, smiles and email.
"""

from .email import EmailService
from .search import SearchService, get_search_service
from .smiles import SmileService, get_smile_service
from .users import UserService, get_user_service
from .words import WordService, get_word_service

__all__ = [
    "EmailService",
    "SearchService",
    "get_search_service",
    "SmileService",
    "get_smile_service",
    "UserService",
    "get_user_service",
    "WordService",
    "get_word_service",
]
