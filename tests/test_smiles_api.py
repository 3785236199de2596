"""
Tests for anonymous and authenticated smiles.
"""

import pytest
from sqlalchemy import update

from core.models import Word


class TestAnonymousSmile:

    @pytest.mark.asyncio
    async def test_increments_counter(self, client, make_word):
        word_id = await make_word("apă")

        for expected in (1, 2, 3):
            response = await client.post("/smiles", json={"wordId": word_id})
            assert response.status_code == 200
            assert response.json() == {
                "success": True,
                "smileCount": expected,
                "message": "Smile recorded successfully! 😊",
            }

    @pytest.mark.asyncio
    async def test_unknown_word(self, client):
        response = await client.post("/smiles", json={"wordId": "missing"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_requires_word_id(self, client):
        response = await client.post("/smiles", json={})

        assert response.status_code == 400


class TestUserSmile:

    @pytest.mark.asyncio
    async def test_requires_authentication(self, client, make_word):
        word_id = await make_word("apă")

        response = await client.post("/smiles/user", json={"wordId": word_id})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_counts_combine_anonymous_and_user_smiles(self, client, register, make_word):
        word_id = await make_word("apă")
        for _ in range(3):
            await client.post("/smiles", json={"wordId": word_id})
        for name in ("ana", "ion"):
            body = await register(name)
            response = await client.post(
                "/smiles/user",
                json={"wordId": word_id},
                headers={"Authorization": f"Bearer {body['token']}"},
            )
            assert response.status_code == 200

        word = await client.get(f"/words/{word_id}")

        assert word.json()["smileCount"] == 5

    @pytest.mark.asyncio
    async def test_second_smile_is_rejected(self, client, register, make_word):
        headers = {"Authorization": f"Bearer {(await register())['token']}"}
        word_id = await make_word("apă")

        first = await client.post("/smiles/user", json={"wordId": word_id}, headers=headers)
        second = await client.post("/smiles/user", json={"wordId": word_id}, headers=headers)

        assert first.json()["smileCount"] == 1
        assert second.status_code == 400
        assert second.json()["message"] == "You have already smiled at this word! 😊"
        assert (await client.get(f"/words/{word_id}")).json()["smileCount"] == 1

    @pytest.mark.asyncio
    async def test_list_user_smiles(self, client, register, make_word):
        headers = {"Authorization": f"Bearer {(await register())['token']}"}
        first = await make_word("apă")
        second = await make_word("casă")
        await client.post("/smiles/user", json={"wordId": first}, headers=headers)
        await client.post("/smiles/user", json={"wordId": second}, headers=headers)

        response = await client.get("/smiles/user", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["count"] == 2
        assert set(body["smiledWordIds"]) == {first, second}

    @pytest.mark.asyncio
    async def test_remove_smile(self, client, register, make_word):
        headers = {"Authorization": f"Bearer {(await register())['token']}"}
        word_id = await make_word("apă")
        await client.post("/smiles", json={"wordId": word_id})
        await client.post("/smiles/user", json={"wordId": word_id}, headers=headers)

        response = await client.delete(f"/smiles/user/{word_id}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "smileCount": 1,
            "message": "Smile removed successfully",
        }
        listing = await client.get("/smiles/user", headers=headers)
        assert listing.json()["count"] == 0

    @pytest.mark.asyncio
    async def test_remove_without_smile(self, client, register, make_word):
        headers = {"Authorization": f"Bearer {(await register())['token']}"}
        word_id = await make_word("apă")

        response = await client.delete(f"/smiles/user/{word_id}", headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == "You haven't smiled at this word yet!"

    @pytest.mark.asyncio
    async def test_counter_never_goes_negative(self, client, register, make_word, database):
        headers = {"Authorization": f"Bearer {(await register())['token']}"}
        word_id = await make_word("apă")
        await client.post("/smiles/user", json={"wordId": word_id}, headers=headers)
        async with database.session() as db:
            await db.execute(update(Word).where(Word.id == word_id).values(smile_count=0))
            await db.commit()

        response = await client.delete(f"/smiles/user/{word_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["smileCount"] == 0
