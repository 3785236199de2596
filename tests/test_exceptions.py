"""
Tests for the exception hierarchy and the uniform error body.
"""

from datetime import datetime

import pytest
from httpx import AsyncClient, ASGITransport

from utils.exceptions import (
    ConflictError,
    DictionaryError,
    ErrorKind,
    ForbiddenError,
    InvalidTokenError,
    NotFoundError,
    NotFoundOrAlreadyVerifiedError,
    UnauthorizedError,
    ValidationError,
    error_body,
)


@pytest.mark.parametrize("exc,status,kind", [
    (ValidationError("bad"), 400, ErrorKind.VALIDATION),
    (InvalidTokenError(), 400, ErrorKind.INVALID_TOKEN),
    (NotFoundOrAlreadyVerifiedError(), 400, ErrorKind.NOT_FOUND_OR_ALREADY_VERIFIED),
    (UnauthorizedError(), 401, ErrorKind.UNAUTHORIZED),
    (ForbiddenError(), 403, ErrorKind.FORBIDDEN),
    (NotFoundError(), 404, ErrorKind.NOT_FOUND),
    (ConflictError(), 409, ErrorKind.CONFLICT),
])
def test_status_codes(exc, status, kind):
    assert isinstance(exc, DictionaryError)
    assert exc.status_code == status
    assert exc.kind is kind


def test_to_dict_hides_details():
    exc = NotFoundError("Word not found", resource="word", resource_id="42")

    body = exc.to_dict()

    assert set(body) == {"message", "status", "timestamp"}
    assert body["message"] == "Word not found"
    assert body["status"] == 404
    assert exc.details["id"] == "42"


def test_error_body_timestamp_is_iso():
    body = error_body("boom", 500)

    assert datetime.fromisoformat(body["timestamp"]).tzinfo is not None


@pytest.mark.asyncio
async def test_unhandled_error_returns_generic_500(app):
    @app.get("/explode")
    async def explode():
        raise RuntimeError("kaboom")

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        response = await ac.get("/explode")

    assert response.status_code == 500
    assert response.json()["message"] == "Something went wrong!"
    assert response.json()["status"] == 500
