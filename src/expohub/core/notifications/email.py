"""Email delivery via Amazon SES."""

import asyncio
from functools import lru_cache
from typing import Any

import boto3
import structlog

from expohub.config import settings
from expohub.core.notifications.messages import DeliveryResult, EmailMessage


logger = structlog.get_logger()


class EmailSender:
    """Async wrapper around the SES ``send_email`` call.

    With no SES client the sender runs in mock mode: the message is logged
    and reported as sent. Provider failures never raise; they come back
    as ``DeliveryResult(sent=False, error=...)``.
    """

    def __init__(self, client: Any | None, from_email: str) -> None:
        """Initialize the sender.

        Args:
            client: boto3 SES client, or None for mock mode
            from_email: Verified SES source address
        """
        self.client = client
        self.from_email = from_email

    @classmethod
    def from_settings(cls) -> "EmailSender":
        """Build a sender from application settings."""
        client = None
        if settings.aws_configured or settings.is_production:
            client = boto3.client(
                "ses",
                region_name=settings.aws_region,
                aws_access_key_id=settings.aws_access_key_id,
                aws_secret_access_key=settings.aws_secret_access_key,
            )
        return cls(client=client, from_email=settings.ses_from_email)

    async def send(self, message: EmailMessage) -> DeliveryResult:
        """Send an email.

        Args:
            message: The email to deliver

        Returns:
            DeliveryResult describing the outcome
        """
        if self.client is None:
            logger.info("email_mocked", to=message.to, subject=message.subject)
            return DeliveryResult(sent=True, channel="email", recipient=message.to, mocked=True)

        body: dict[str, Any] = {"Text": {"Data": message.text, "Charset": "UTF-8"}}
        if message.html:
            body["Html"] = {"Data": message.html, "Charset": "UTF-8"}

        try:
            response = await asyncio.to_thread(
                self.client.send_email,
                Source=self.from_email,
                Destination={"ToAddresses": [message.to]},
                Message={
                    "Subject": {"Data": message.subject, "Charset": "UTF-8"},
                    "Body": body,
                },
            )
        except Exception as exc:  # boto3 raises ClientError, BotoCoreError and network errors
            logger.warning("email_failed", to=message.to, error=str(exc))
            return DeliveryResult(sent=False, channel="email", recipient=message.to, error=str(exc))

        message_id = response.get("MessageId")
        logger.info("email_sent", to=message.to, message_id=message_id)
        return DeliveryResult(sent=True, channel="email", recipient=message.to, message_id=message_id)


@lru_cache
def get_email_sender() -> EmailSender:
    """Process-wide email sender (FastAPI dependency)."""
    return EmailSender.from_settings()
