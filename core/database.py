"""
Database Module

Wraps the SQLAlchemy async engine and session factory in an explicitly
constructed Database handle. The application receives its handle in
create_app() and exposes it on app.state; request handlers obtain sessions
through the get_db dependency.

Usage:
    database = Database(settings.DATABASE_URL)
    await database.create_all()

    async with database.session() as session:
        ...
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from utils.exceptions import InternalError
from utils.logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


def normalize_database_url(url: str) -> str:
    """
    Ensure an async driver is used and fix SSL params for asyncpg.

    Plain postgresql:// URLs are rewritten to postgresql+asyncpg:// and
    plain sqlite:// URLs to sqlite+aiosqlite://.
    """
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    elif url.startswith("sqlite://"):
        url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)

    # asyncpg expects 'ssl' not 'sslmode' in query
    if "sslmode=" in url:
        url = url.replace("sslmode=require", "ssl=require")
        url = url.replace("sslmode=verify-full", "ssl=verify-full")

    return url


def _ensure_sqlite_directory(url: str) -> None:
    """SQLite creates the file but not its parent directory."""
    path = make_url(url).database
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)


class Database:
    """
    Owns the engine and session factory for one store.

    Attributes:
        url: Normalized async connection string
        engine: SQLAlchemy AsyncEngine
        session_factory: Factory producing AsyncSession objects
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = normalize_database_url(url)

        engine_kwargs = {"echo": echo}
        if self.url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url:
                # One shared connection, otherwise each checkout sees an empty db
                engine_kwargs["poolclass"] = StaticPool
            else:
                _ensure_sqlite_directory(self.url)
        else:
            engine_kwargs["pool_pre_ping"] = True
            engine_kwargs["pool_recycle"] = 300

        self.engine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory = sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False
        )

    async def create_all(self) -> None:
        """Create all tables registered on Base."""
        # Model classes must be imported for their tables to be registered
        from core import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialized")

    async def drop_all(self) -> None:
        """Drop all tables registered on Base."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session outside of a request (startup seeding, scripts, tests)."""
        async with self.session_factory() as session:
            yield session

    async def check_health(self) -> bool:
        """Return True when a trivial query succeeds."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False


async def commit(session: AsyncSession) -> None:
    """
    Commit the session.

    Unique violations propagate as IntegrityError for the caller to map;
    any other driver failure is rolled back and raised as InternalError.
    """
    try:
        await session.commit()
    except IntegrityError:
        raise
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Commit failed: {e}")
        raise InternalError("Database operation failed", details={"error": str(e)})


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a session bound to the app's Database."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        yield session
