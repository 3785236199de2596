"""
Test Configuration

Pytest configuration and shared fixtures for all tests.
Every test gets its own SQLite file and a fresh application wired to it.
"""

import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

from config.constants import ROLE_ADMIN
from config.settings import get_settings
from core.database import Database
from services.email import EmailService
from services.users import get_user_service
from services.words import get_word_service


class RecordingEmailService(EmailService):
    """Email service that keeps messages in memory instead of sending them."""

    def __init__(self):
        super().__init__(frontend_url="http://frontend.test", sender="noreply@test")
        self.sent = []

    async def send_verification_email(self, email: str, username: str, token: str) -> bool:
        self.sent.append({"kind": "verification", "email": email, "username": username, "token": token})
        return True

    async def send_welcome_email(self, email: str, username: str) -> bool:
        self.sent.append({"kind": "welcome", "email": email, "username": username})
        return True

    def last_token(self, email: str) -> str:
        for message in reversed(self.sent):
            if message["kind"] == "verification" and message["email"] == email:
                return message["token"]
        raise AssertionError(f"No verification email sent to {email}")


@pytest.fixture
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """Database on a throwaway SQLite file with all tables created."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
def app(database, email_service):
    from main import create_app

    return create_app(settings=get_settings(), database=database, email_service=email_service)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Get async test client for API testing."""
    transport = ASGITransport(app=app)

    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# =============================================================================
# Account helpers
# =============================================================================

def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    """Register an account through the API and return the response body."""
    async def _register(username: str = "ion", email: str = None, password: str = "secret123"):
        response = await client.post(
            "/auth/register",
            json={
                "username": username,
                "email": email or f"{username}@example.com",
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register


@pytest.fixture
def verified_contributor(client, register, email_service):
    """Register and verify a contributor; returns its auth header."""
    async def _create(username: str = "ion") -> dict:
        body = await register(username)
        token = email_service.last_token(body["user"]["email"])
        response = await client.post("/auth/verify-email", json={"token": token})
        assert response.status_code == 200, response.text
        return auth_header(body["token"])

    return _create


@pytest.fixture
def admin_headers(client, database):
    """Create a verified admin directly in the store and log in."""
    async def _create(username: str = "boss", password: str = "admin123") -> dict:
        async with database.session() as db:
            await get_user_service().create(
                db,
                username=username,
                email=f"{username}@example.com",
                password=password,
                role=ROLE_ADMIN,
                email_verified=True,
            )
        response = await client.post(
            "/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        return auth_header(response.json()["token"])

    return _create


@pytest.fixture
def make_word(database):
    """Insert a word directly and return its id."""
    async def _make(word: str, definition: str = "definiție", short_description: str = "scurt", **extra) -> str:
        async with database.session() as db:
            entry = await get_word_service().create(
                db,
                {
                    "word": word,
                    "definition": definition,
                    "short_description": short_description,
                    **extra,
                },
            )
            return entry.id

    return _make


@pytest.fixture
def sample_word_data():
    """Sample word payload for tests."""
    return {
        "word": "cocie",
        "definition": "Trăsură trasă de cai.",
        "shortDescription": "Trăsură",
        "category": "Transport",
        "origin": "Maghiară",
        "examples": ["Am mers cu cocia la târg."],
        "pronunciation": "co-ci-e",
    }

