"""
API Schemas Module

Pydantic request and response models. Fields are snake_case in Python and
camelCase on the wire; requests accept either spelling.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from config.constants import (
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    WORD_MAX_LENGTH,
)

Role = Literal["admin", "contributor"]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Users & Auth
# =============================================================================

class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    role: Role
    email_verified: bool
    created_at: datetime
    updated_at: datetime


class RegisterRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=USERNAME_MAX_LENGTH)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)


class UserCreateRequest(RegisterRequest):
    role: Optional[Role] = None


class UserUpdateRequest(CamelModel):
    username: Optional[str] = Field(None, min_length=1, max_length=USERNAME_MAX_LENGTH)
    email: Optional[EmailStr] = None
    role: Optional[Role] = None
    # Accepted for compatibility, never applied through this endpoint
    password: Optional[str] = None


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(CamelModel):
    token: str
    user: UserResponse


class EmailVerificationRequest(CamelModel):
    token: str = Field(..., min_length=1)


class ResendVerificationRequest(CamelModel):
    email: EmailStr


class VerifyEmailResponse(CamelModel):
    message: str
    user: UserResponse


class MessageResponse(CamelModel):
    message: str


# =============================================================================
# Words
# =============================================================================

class WordResponse(CamelModel):
    id: str
    word: str
    definition: str
    short_description: str
    category: Optional[str] = None
    origin: Optional[str] = None
    examples: Optional[List[str]] = None
    pronunciation: Optional[str] = None
    smile_count: int = 0
    created_at: datetime
    updated_at: datetime


class WordCreateRequest(CamelModel):
    word: str = Field(..., min_length=1, max_length=WORD_MAX_LENGTH)
    definition: str = Field(..., min_length=1)
    short_description: str = Field(..., min_length=1)
    category: Optional[str] = None
    origin: Optional[str] = None
    examples: Optional[List[str]] = None
    pronunciation: Optional[str] = None


class WordUpdateRequest(CamelModel):
    word: Optional[str] = Field(None, min_length=1, max_length=WORD_MAX_LENGTH)
    definition: Optional[str] = Field(None, min_length=1)
    short_description: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = None
    origin: Optional[str] = None
    examples: Optional[List[str]] = None
    pronunciation: Optional[str] = None


class DictionaryResponse(CamelModel):
    words: List[WordResponse]
    total: int
    page: int
    limit: int


class WordListResponse(CamelModel):
    words: List[WordResponse]


# =============================================================================
# Search
# =============================================================================

class WordSearchResult(CamelModel):
    word: WordResponse
    relevance_score: int


class SearchResponse(CamelModel):
    results: List[WordSearchResult]
    total: int
    query: str


# =============================================================================
# Smiles
# =============================================================================

class SmileRequest(CamelModel):
    word_id: str = Field(..., min_length=1)


class SmileResponse(CamelModel):
    success: bool
    smile_count: int
    message: str


class UserSmilesResponse(CamelModel):
    smiled_word_ids: List[str]
    count: int


# =============================================================================
# Misc
# =============================================================================

class ErrorResponse(BaseModel):
    message: str
    status: int
    timestamp: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    database: bool
    version: str
