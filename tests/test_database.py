"""
Tests for the database handle and commit error mapping.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import commit
from core.models import User, Word
from utils.exceptions import InternalError


async def _failing_commit(self):
    raise OperationalError("COMMIT", {}, Exception("disk I/O error"))


class TestCommit:

    @pytest.mark.asyncio
    async def test_driver_failure_becomes_internal_error(self, database, monkeypatch):
        async with database.session() as db:
            db.add(Word(word="apă", definition="Lichid", short_description="apă"))
            monkeypatch.setattr(db, "commit", _failing_commit.__get__(db))

            with pytest.raises(InternalError) as exc_info:
                await commit(db)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Database operation failed"

        async with database.session() as db:
            assert (await db.execute(select(Word))).scalars().all() == []

    @pytest.mark.asyncio
    async def test_unique_violation_is_passed_through(self, database):
        async with database.session() as db:
            db.add(User(username="ion", email="ion@example.com", password_hash="x"))
            await commit(db)

        async with database.session() as db:
            db.add(User(username="ion", email="other@example.com", password_hash="x"))
            with pytest.raises(IntegrityError):
                await commit(db)

    @pytest.mark.asyncio
    async def test_failed_commit_returns_error_body(self, client, make_word, monkeypatch):
        word_id = await make_word("apă")
        monkeypatch.setattr(AsyncSession, "commit", _failing_commit)

        response = await client.post("/smiles", json={"wordId": word_id})

        assert response.status_code == 500
        body = response.json()
        assert body["status"] == 500
        assert body["message"] == "Database operation failed"


class TestTimestamps:

    @pytest.mark.asyncio
    async def test_naive_values_are_stored_as_utc(self, database, make_word):
        word_id = await make_word("zmeu")

        async with database.session() as db:
            word = await db.get(Word, word_id)
            word.created_at = datetime(2024, 5, 1, 12, 30)
            await commit(db)

        async with database.session() as db:
            word = await db.get(Word, word_id)

        assert word.created_at == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        assert word.updated_at.tzinfo is not None


@pytest.mark.asyncio
async def test_drop_all_removes_tables(database, make_word):
    await make_word("apă")

    await database.drop_all()

    async with database.session() as db:
        with pytest.raises(OperationalError):
            await db.execute(select(Word))
