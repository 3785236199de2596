"""
Routers Module

API routers for the dictionary application.
"""

from .admin import router as admin_router
from .auth import router as auth_router
from .search import router as search_router
from .smiles import router as smiles_router
from .users import router as users_router
from .words import router as words_router

__all__ = [
    "admin_router",
    "auth_router",
    "search_router",
    "smiles_router",
    "users_router",
    "words_router",
]
