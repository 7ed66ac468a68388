"""Best-effort email and SMS notifications."""

from typing import Annotated

from fastapi import Depends

from expohub.core.notifications.email import EmailSender, get_email_sender
from expohub.core.notifications.messages import DeliveryResult, EmailMessage, SmsMessage
from expohub.core.notifications.sms import SmsSender, get_sms_sender, normalize_phone_number


Mailer = Annotated[EmailSender, Depends(get_email_sender)]
Texter = Annotated[SmsSender, Depends(get_sms_sender)]


__all__ = [
    "DeliveryResult",
    "EmailMessage",
    "EmailSender",
    "Mailer",
    "SmsMessage",
    "SmsSender",
    "Texter",
    "get_email_sender",
    "get_sms_sender",
    "normalize_phone_number",
]
