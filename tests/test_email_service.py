"""
Tests for best-effort email delivery.
"""

import smtplib

import pytest

from services.email import EmailService


def _service(**overrides) -> EmailService:
    options = {"frontend_url": "http://frontend.test/", "sender": "noreply@test"}
    options.update(overrides)
    return EmailService(**options)


def test_verification_url_strips_trailing_slash():
    assert _service().verification_url("t0k") == "http://frontend.test/verify-email?token=t0k"


@pytest.mark.asyncio
async def test_without_smtp_host_messages_are_only_logged(monkeypatch):
    service = _service()

    def fail(*args, **kwargs):
        raise AssertionError("SMTP must not be used")

    monkeypatch.setattr(service, "_send_smtp", fail)

    assert await service.send_verification_email("a@example.com", "ana", "t0k") is True
    assert await service.send_welcome_email("a@example.com", "ana") is True


@pytest.mark.asyncio
async def test_smtp_failure_is_swallowed(monkeypatch):
    service = _service(smtp_host="smtp.invalid")

    def refuse(message):
        raise smtplib.SMTPServerDisconnected("connection closed")

    monkeypatch.setattr(service, "_send_smtp", refuse)

    assert await service.send_verification_email("a@example.com", "ana", "t0k") is False


@pytest.mark.asyncio
async def test_smtp_message_contents(monkeypatch):
    service = _service(smtp_host="smtp.example.com")
    sent = []
    monkeypatch.setattr(service, "_send_smtp", sent.append)

    assert await service.send_verification_email("a@example.com", "ana", "t0k") is True

    message = sent[0]
    assert message["To"] == "a@example.com"
    assert message["From"] == "noreply@test"
    assert "http://frontend.test/verify-email?token=t0k" in message.get_content()
