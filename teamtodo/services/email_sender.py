"""Email sender interface + selection helpers.

Senders report delivery problems through ``EmailSendResult`` instead of
raising, so batch callers (the reminder scan) can keep going.
"""

from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol

import httpx

from teamtodo.core.config import settings
from teamtodo.core.structured_logging import mask_email
from teamtodo.services.http_service import DEFAULT_RETRY_STATUSES, request_with_retries

logger = logging.getLogger(__name__)

RESEND_SEND_URL = "https://api.resend.com/emails"
RESEND_MAX_ATTEMPTS = 3
RESEND_RETRY_BASE_DELAY = 0.5
RESEND_RETRY_MAX_DELAY = 4.0
RESEND_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class EmailSendResult:
    success: bool
    message_id: str | None = None
    error: str | None = None


class EmailSender(Protocol):
    key: str

    def send(
        self,
        *,
        to_email: str,
        subject: str,
        html: str,
        idempotency_key: str | None = None,
    ) -> EmailSendResult:
        """Send one email. Must not raise for delivery failures."""


class SmtpEmailSender:
    """Plain SMTP delivery (Mailhog in local development)."""

    key = "smtp"

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        from_email: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.from_email = from_email or settings.EMAIL_FROM
        self.timeout = timeout or settings.SMTP_TIMEOUT_SECONDS

    def send(
        self,
        *,
        to_email: str,
        subject: str,
        html: str,
        idempotency_key: str | None = None,
    ) -> EmailSendResult:
        message = EmailMessage()
        message["From"] = self.from_email
        message["To"] = to_email
        message["Subject"] = subject
        message.set_content("This message requires an HTML-capable email client.")
        message.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                smtp.send_message(message)
        except (OSError, smtplib.SMTPException) as exc:
            logger.warning(
                "SMTP send to %s failed: %s", mask_email(to_email), type(exc).__name__
            )
            return EmailSendResult(success=False, error=str(exc) or type(exc).__name__)

        return EmailSendResult(success=True)


class ResendEmailSender:
    """Delivery through the Resend HTTP API."""

    key = "resend"

    def __init__(
        self,
        api_key: str | None = None,
        from_email: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.RESEND_API_KEY
        self.from_email = from_email or settings.EMAIL_FROM
        self._client = client

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def send(
        self,
        *,
        to_email: str,
        subject: str,
        html: str,
        idempotency_key: str | None = None,
    ) -> EmailSendResult:
        if not self.api_key:
            return EmailSendResult(success=False, error="Resend sender not configured (missing RESEND_API_KEY)")

        payload = {
            "from": self.from_email,
            "to": [to_email],
            "subject": subject,
            "html": html,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        client = self._client if self._client is not None else httpx.Client(timeout=RESEND_TIMEOUT_SECONDS)
        try:
            response = request_with_retries(
                lambda: client.post(RESEND_SEND_URL, headers=headers, json=payload),
                max_attempts=RESEND_MAX_ATTEMPTS,
                base_delay=RESEND_RETRY_BASE_DELAY,
                max_delay=RESEND_RETRY_MAX_DELAY,
                retry_statuses=DEFAULT_RETRY_STATUSES,
            )
        except httpx.RequestError as exc:
            logger.warning("Resend request to %s failed: %s", mask_email(to_email), type(exc).__name__)
            return EmailSendResult(success=False, error=str(exc) or type(exc).__name__)
        finally:
            if self._client is None:
                client.close()

        if 200 <= response.status_code < 300:
            data = response.json()
            message_id = data.get("id") if isinstance(data, dict) else None
            return EmailSendResult(success=True, message_id=message_id)

        logger.warning(
            "Resend rejected email to %s (status %s)", mask_email(to_email), response.status_code
        )
        return EmailSendResult(success=False, error=f"Resend API error {response.status_code}")


def select_sender(provider: str | None = None) -> EmailSender:
    """
    Select the sender to use based on configuration.

    Resend is used only when requested and configured; otherwise SMTP.
    """
    provider = (provider or settings.EMAIL_PROVIDER or "smtp").lower()
    if provider == "resend":
        resend_sender = ResendEmailSender()
        if resend_sender.is_configured():
            return resend_sender
        logger.warning("EMAIL_PROVIDER=resend but RESEND_API_KEY is empty; falling back to SMTP")

    return SmtpEmailSender()


def get_default_sender() -> EmailSender:
    return select_sender()
