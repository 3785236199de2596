"""
Core Module

Provides database, models and schemas for the application.
"""

from .database import Base, Database, get_db
from .models import User, Word, UserSmile

__all__ = [
    # Database
    "Base",
    "Database",
    "get_db",
    # Models
    "User",
    "Word",
    "UserSmile",
]
