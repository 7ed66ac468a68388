"""SMS delivery via Amazon SNS."""

import asyncio
from functools import lru_cache
from typing import Any

import boto3
import structlog

from expohub.config import settings
from expohub.core.notifications.messages import DeliveryResult, SmsMessage


logger = structlog.get_logger()


def normalize_phone_number(number: str, country_code: str) -> str:
    """Return an E.164-style number, prefixing ``country_code`` when missing.

    Examples:
        >>> normalize_phone_number("09848022338", "+91")
        '+919848022338'
        >>> normalize_phone_number("+14155550100", "+91")
        '+14155550100'
    """
    number = number.strip()
    if number.startswith("+"):
        return number
    return f"{country_code}{number.lstrip('0')}"


class SmsSender:
    """Async wrapper around the SNS ``publish`` call.

    Mirrors :class:`~expohub.core.notifications.email.EmailSender`: mock mode
    without a client, and failures reported in the result, never raised.
    """

    def __init__(
        self,
        client: Any | None,
        sender_id: str | None = None,
        country_code: str = "+91",
    ) -> None:
        """Initialize the sender.

        Args:
            client: boto3 SNS client, or None for mock mode
            sender_id: Alphanumeric sender ID shown to recipients
            country_code: Prefix for numbers given without one
        """
        self.client = client
        self.sender_id = sender_id
        self.country_code = country_code

    @classmethod
    def from_settings(cls) -> "SmsSender":
        """Build a sender from application settings."""
        client = None
        if settings.aws_configured or settings.is_production:
            client = boto3.client(
                "sns",
                region_name=settings.aws_region,
                aws_access_key_id=settings.aws_access_key_id,
                aws_secret_access_key=settings.aws_secret_access_key,
            )
        return cls(
            client=client,
            sender_id=settings.sns_sender_id,
            country_code=settings.default_sms_country_code,
        )

    async def send(self, message: SmsMessage) -> DeliveryResult:
        """Send a transactional SMS.

        Args:
            message: The SMS to deliver

        Returns:
            DeliveryResult describing the outcome
        """
        phone_number = normalize_phone_number(message.to, self.country_code)

        if self.client is None:
            logger.info("sms_mocked", to=phone_number)
            return DeliveryResult(sent=True, channel="sms", recipient=phone_number, mocked=True)

        attributes: dict[str, Any] = {
            "AWS.SNS.SMS.SMSType": {"DataType": "String", "StringValue": "Transactional"},
        }
        if self.sender_id:
            attributes["AWS.SNS.SMS.SenderID"] = {
                "DataType": "String",
                "StringValue": self.sender_id,
            }

        try:
            response = await asyncio.to_thread(
                self.client.publish,
                PhoneNumber=phone_number,
                Message=message.body,
                MessageAttributes=attributes,
            )
        except Exception as exc:  # boto3 raises ClientError, BotoCoreError and network errors
            logger.warning("sms_failed", to=phone_number, error=str(exc))
            return DeliveryResult(sent=False, channel="sms", recipient=phone_number, error=str(exc))

        message_id = response.get("MessageId")
        logger.info("sms_sent", to=phone_number, message_id=message_id)
        return DeliveryResult(sent=True, channel="sms", recipient=phone_number, message_id=message_id)


@lru_cache
def get_sms_sender() -> SmsSender:
    """Process-wide SMS sender (FastAPI dependency)."""
    return SmsSender.from_settings()
