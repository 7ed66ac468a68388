"""Message and delivery result types for outbound notifications."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmailMessage:
    """A single email with a plain-text body and optional HTML alternative."""

    to: str
    subject: str
    text: str
    html: str | None = None


@dataclass(frozen=True)
class SmsMessage:
    """A single text message."""

    to: str
    body: str


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome of a best-effort delivery attempt.

    Attributes:
        sent: Whether the provider accepted the message (or it was logged in mock mode)
        channel: "email" or "sms"
        recipient: Address or number the message was sent to
        message_id: Provider message ID, when one was returned
        mocked: True when no provider is configured and the message was only logged
        error: Provider error message when ``sent`` is False
    """

    sent: bool
    channel: str
    recipient: str | None = None
    message_id: str | None = None
    mocked: bool = False
    error: str | None = None

    @classmethod
    def skipped(cls, channel: str) -> "DeliveryResult":
        """Result for a message that was never attempted (no recipient)."""
        return cls(sent=False, channel=channel)
