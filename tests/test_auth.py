"""
Unit Tests for Authentication

Tests for auth utilities and authentication endpoints.
"""

from datetime import timedelta

import pytest
from auth import (
    create_access_token,
    decode_access_token,
    generate_verification_token,
    get_password_hash,
    verify_password,
)


class TestPasswordHashing:
    """Tests for password hashing utilities."""

    def test_password_hash_creates_different_hashes(self):
        """Same password should create different hashes each time."""
        password = "test_password_123"
        hash1 = get_password_hash(password)
        hash2 = get_password_hash(password)

        assert hash1 != hash2
        assert hash1 != password

    def test_verify_password_correct(self):
        """Correct password should verify successfully."""
        password = "my_secret_password"
        hashed = get_password_hash(password)

        assert verify_password(password, hashed) is True

    def test_verify_password_incorrect(self):
        """Incorrect password should fail verification."""
        hashed = get_password_hash("correct_password")

        assert verify_password("wrong_password", hashed) is False

    def test_verify_password_malformed_hash(self):
        """A stored value that is not a bcrypt hash never verifies."""
        assert verify_password("anything", "not-a-hash") is False


class TestJWTTokens:
    """Tests for JWT token utilities."""

    def test_create_and_decode_token(self):
        """Token should encode and decode correctly."""
        token = create_access_token({"sub": "user-id-1"})

        decoded = decode_access_token(token)

        assert decoded is not None
        assert decoded["sub"] == "user-id-1"
        assert "exp" in decoded

    def test_invalid_token_returns_none(self):
        assert decode_access_token("invalid.token.here") is None

    def test_empty_token_returns_none(self):
        assert decode_access_token("") is None

    def test_expired_token_returns_none(self):
        token = create_access_token({"sub": "user-id-1"}, expires_delta=timedelta(seconds=-1))

        assert decode_access_token(token) is None


class TestVerificationTokens:

    def test_tokens_are_hex_and_unique(self):
        tokens = {generate_verification_token() for _ in range(20)}

        assert len(tokens) == 20
        for token in tokens:
            assert len(token) == 64
            int(token, 16)


# =============================================================================
# Endpoints
# =============================================================================

class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_token_and_unverified_user(self, client, email_service):
        response = await client.post(
            "/auth/register",
            json={"username": "maria", "email": "maria@example.com", "password": "secret123"},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["username"] == "maria"
        assert body["user"]["role"] == "contributor"
        assert body["user"]["emailVerified"] is False
        assert "passwordHash" not in body["user"]
        assert "emailVerificationToken" not in body["user"]

        assert email_service.sent[-1]["kind"] == "verification"
        assert email_service.sent[-1]["email"] == "maria@example.com"

    @pytest.mark.asyncio
    async def test_register_short_password(self, client):
        response = await client.post(
            "/auth/register",
            json={"username": "maria", "email": "maria@example.com", "password": "12345"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == 400
        assert "password" in body["message"]
        assert "timestamp" in body

    @pytest.mark.asyncio
    async def test_register_missing_field(self, client):
        response = await client.post(
            "/auth/register", json={"username": "maria", "password": "secret123"}
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_duplicate_username(self, client, register):
        await register("maria")

        response = await client.post(
            "/auth/register",
            json={"username": "maria", "email": "other@example.com", "password": "secret123"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Username or email already exists"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client, register):
        await register("maria", email="shared@example.com")

        response = await client.post(
            "/auth/register",
            json={"username": "ana", "email": "shared@example.com", "password": "secret123"},
        )

        assert response.status_code == 409


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_success(self, client, register):
        await register("maria", password="secret123")

        response = await client.post(
            "/auth/login", json={"username": "maria", "password": "secret123"}
        )

        assert response.status_code == 200
        body = response.json()
        assert decode_access_token(body["token"])["sub"] == body["user"]["id"]

    @pytest.mark.parametrize("username,password", [
        ("maria", "wrong-password"),
        ("nobody", "secret123"),
    ])
    @pytest.mark.asyncio
    async def test_login_invalid_credentials(self, client, register, username, password):
        await register("maria", password="secret123")

        response = await client.post(
            "/auth/login", json={"username": username, "password": password}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"


class TestCurrentUser:

    @pytest.mark.asyncio
    async def test_me_requires_token(self, client):
        response = await client.get("/auth/me")

        assert response.status_code == 401
        assert response.json()["message"] == "Access token required"

    @pytest.mark.asyncio
    async def test_me_rejects_bad_token(self, client):
        response = await client.get("/auth/me", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 403
        assert response.json()["message"] == "Invalid or expired token"

    @pytest.mark.asyncio
    async def test_me_rejects_token_of_unknown_user(self, client):
        token = create_access_token({"sub": "no-such-user"})

        response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_me_returns_profile(self, client, register):
        body = await register("maria")

        response = await client.get(
            "/auth/me", headers={"Authorization": f"Bearer {body['token']}"}
        )

        assert response.status_code == 200
        assert response.json()["id"] == body["user"]["id"]

    @pytest.mark.asyncio
    async def test_logout_acknowledges(self, client):
        response = await client.post("/auth/logout")

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out successfully"}
