"""
Email Service

Sends transactional emails (verification link, welcome message).

Delivery is best-effort: every failure is logged and swallowed so that the
operation that triggered the email (registration, verification) never fails
because of it. When SMTP_HOST is not configured the message is logged
instead of sent, which is enough for local development.

Usage:
    email_service = EmailService.from_settings(settings)
    background_tasks.add_task(email_service.send_verification_email, email, username, token)
"""

import asyncio
import smtplib
from email.message import EmailMessage
from typing import Optional

from config.settings import Settings
from utils.logging import get_logger, log_email_dispatch

logger = get_logger(__name__)

VERIFICATION_SUBJECT = "Verifică-ți adresa de email - Cuvinte Banatene"
WELCOME_SUBJECT = "Bine ai venit la Cuvinte Banatene!"


class EmailService:
    """SMTP sender with a log-only fallback."""

    def __init__(
        self,
        frontend_url: str,
        sender: str,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
        use_tls: bool = True,
    ):
        self.frontend_url = frontend_url.rstrip("/")
        self.sender = sender
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.use_tls = use_tls

        if not smtp_host:
            logger.warning("SMTP_HOST not configured - emails will be logged instead of sent")

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailService":
        return cls(
            frontend_url=settings.FRONTEND_URL,
            sender=settings.MAIL_FROM,
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            smtp_username=settings.SMTP_USERNAME,
            smtp_password=settings.SMTP_PASSWORD,
            use_tls=settings.SMTP_USE_TLS,
        )

    def verification_url(self, token: str) -> str:
        return f"{self.frontend_url}/verify-email?token={token}"

    async def send_verification_email(self, email: str, username: str, token: str) -> bool:
        url = self.verification_url(token)
        body = (
            f"Bună ziua, {username}!\n\n"
            "Mulțumim că te-ai înregistrat pe Cuvinte Banatene.\n"
            "Pentru a-ți activa contul și a putea adăuga cuvinte în dicționar, "
            "deschide linkul de mai jos:\n\n"
            f"{url}\n\n"
            "Dacă nu ai creat acest cont, te rugăm să ignori acest email.\n"
        )
        if not self.smtp_host:
            logger.info(f"Verification link for {email}: {url}")
        return await self._deliver("verification", email, VERIFICATION_SUBJECT, body)

    async def send_welcome_email(self, email: str, username: str) -> bool:
        body = (
            f"Bună ziua, {username}!\n\n"
            "Contul tău a fost verificat cu succes. Acum poți adăuga și edita "
            "cuvinte în dicționar:\n\n"
            f"{self.frontend_url}/admin\n\n"
            "Mulțumim că contribui la păstrarea limbii române din Banat!\n"
        )
        return await self._deliver("welcome", email, WELCOME_SUBJECT, body)

    async def _deliver(self, kind: str, recipient: str, subject: str, body: str) -> bool:
        """Send one message. Returns False on any failure."""
        if not self.smtp_host:
            log_email_dispatch(kind, recipient, success=True)
            return True

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = recipient
        message["Subject"] = subject
        message.set_content(body)

        try:
            await asyncio.to_thread(self._send_smtp, message)
        except (smtplib.SMTPException, OSError) as e:
            log_email_dispatch(kind, recipient, success=False, error=str(e))
            return False

        log_email_dispatch(kind, recipient, success=True)
        return True

    def _send_smtp(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as smtp:
            if self.use_tls:
                smtp.starttls()
            if self.smtp_username:
                smtp.login(self.smtp_username, self.smtp_password or "")
            smtp.send_message(message)
