"""
Database Models Module

Defines SQLAlchemy ORM models for the application.
All models inherit from Base defined in database.py.

Models:
    - User: Contributor or admin account
    - Word: Dictionary entry
    - UserSmile: One authenticated user's smile at one word
"""

import json
import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.types import TypeDecorator

from config.constants import ROLE_CONTRIBUTOR
from .database import Base


def generate_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class JSONEncodedList(TypeDecorator):
    """Stores a list of strings as a JSON document in a TEXT column."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return json.dumps(list(value), ensure_ascii=False)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return json.loads(value)


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime stored as UTC.

    SQLite drops the offset on the way in, so values read back without
    tzinfo are UTC and get it reattached.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class User(Base):
    """
    User model representing a dictionary contributor or admin.

    Attributes:
        id: Opaque UUID primary key
        username: Unique login name
        email: Unique email address
        password_hash: Bcrypt hashed password
        role: "admin" or "contributor"
        email_verified: True once the verification token was consumed
        email_verification_token: Pending verification token, NULL once verified
        created_at: Account creation timestamp
        updated_at: Last modification timestamp
        smiles: Words this user smiled at
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)

    # Authentication
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=ROLE_CONTRIBUTOR)

    # Email verification
    email_verified = Column(Boolean, nullable=False, default=False)
    email_verification_token = Column(String(128), nullable=True, index=True)

    # Timestamps
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    smiles = relationship(
        "UserSmile",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<User(id={self.id}, username='{self.username}', role='{self.role}')>"


class Word(Base):
    """
    Dictionary entry.

    Attributes:
        id: Opaque UUID primary key
        word: Headword
        definition: Full definition
        short_description: One-line summary shown in listings
        category: Optional thematic category
        origin: Optional etymology
        examples: Optional ordered list of usage examples (JSON in a TEXT column)
        pronunciation: Optional syllabified pronunciation
        smile_count: Number of smiles, never negative
    """

    __tablename__ = "words"

    id = Column(String(36), primary_key=True, default=generate_id)

    word = Column(String(100), nullable=False, index=True)
    definition = Column(Text, nullable=False)
    short_description = Column(Text, nullable=False)
    category = Column(String(100), nullable=True, index=True)
    origin = Column(String(100), nullable=True)
    examples = Column(JSONEncodedList, nullable=True)
    pronunciation = Column(String(100), nullable=True)

    smile_count = Column(Integer, nullable=False, default=0)

    created_at = Column(UTCDateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)

    smiles = relationship(
        "UserSmile",
        back_populates="word",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Word(id={self.id}, word='{self.word}', smiles={self.smile_count})>"


class UserSmile(Base):
    """
    Join record: user X smiled at word Y. At most one per (user, word) pair.
    """

    __tablename__ = "user_smiles"
    __table_args__ = (
        UniqueConstraint("user_id", "word_id", name="uq_user_smiles_user_word"),
    )

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    word_id = Column(
        String(36),
        ForeignKey("words.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    created_at = Column(UTCDateTime, default=utcnow, nullable=False, index=True)

    user = relationship("User", back_populates="smiles")
    word = relationship("Word", back_populates="smiles")

    def __repr__(self) -> str:
        return f"<UserSmile(user_id={self.user_id}, word_id={self.word_id})>"
