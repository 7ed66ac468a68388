"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from expohub.core.notifications import (
    DeliveryResult,
    EmailMessage,
    EmailSender,
    SmsMessage,
    SmsSender,
)
from expohub.core.storage import QrStorage


class RecordingMailer(EmailSender):
    """Email sender that keeps messages instead of calling SES."""

    def __init__(self) -> None:
        super().__init__(client=None, from_email="noreply@expohub.test")
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> DeliveryResult:
        self.sent.append(message)
        return DeliveryResult(sent=True, channel="email", recipient=message.to, mocked=True)


class RecordingTexter(SmsSender):
    """SMS sender that keeps messages instead of calling SNS."""

    def __init__(self) -> None:
        super().__init__(client=None, country_code="+91")
        self.sent: list[SmsMessage] = []

    async def send(self, message: SmsMessage) -> DeliveryResult:
        self.sent.append(message)
        return DeliveryResult(sent=True, channel="sms", recipient=message.to, mocked=True)


@pytest.fixture
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture
def texter() -> RecordingTexter:
    return RecordingTexter()


@pytest.fixture
def qr_storage(tmp_path: Path) -> QrStorage:
    """Local QR storage rooted in a temporary directory."""
    return QrStorage(
        backend="local",
        upload_dir=tmp_path / "uploads",
        public_base_url="http://testserver",
    )
