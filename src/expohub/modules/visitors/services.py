"""Visitor business logic."""

from typing import Annotated

import structlog
from fastapi import Depends

from expohub.config import settings
from expohub.core.auth import (
    INVALID_CREDENTIALS,
    IssuedCredential,
    LoginResult,
    issue_credential,
    one_time_credentials,
    phone_matches,
    verify_password,
)
from expohub.core.constants import (
    VISITOR_CODE_ALPHABET,
    VISITOR_CODE_LENGTH,
    VISITOR_CODE_MAX_ATTEMPTS,
    VISITOR_CODE_PREFIX,
)
from expohub.core.errors import AppException, ForbiddenError, NotFoundError, UnauthorizedError
from expohub.core.notifications import EmailMessage, Mailer, SmsMessage, Texter
from expohub.core.utils.text import random_code
from expohub.modules.visitors.models import Visitor
from expohub.modules.visitors.repos import VisitorRepo
from expohub.modules.visitors.schemas import (
    CheckInVisitor,
    VisitorCreate,
    VisitorCreateResponse,
    VisitorListItem,
    VisitorLookupResponse,
    VisitorResponse,
)


logger = structlog.get_logger()

INVALID_VISITOR_CREDENTIALS = "Invalid email or password/phone number"


def generate_visitor_code() -> str:
    """``VIS-`` followed by 8 characters without look-alikes (no I, O, 0 or 1)."""
    return VISITOR_CODE_PREFIX + random_code(VISITOR_CODE_ALPHABET, VISITOR_CODE_LENGTH)


class VisitorService:
    """Service for visitor registration, sign-in and check-in lookups."""

    def __init__(self, repo: VisitorRepo, mailer: Mailer, texter: Texter) -> None:
        self.repo = repo
        self.mailer = mailer
        self.texter = texter

    async def list_visitors(self) -> list[VisitorListItem]:
        return [
            VisitorListItem(**VisitorResponse.model_validate(visitor).model_dump(), event_name=event_name)
            for visitor, event_name in await self.repo.list_with_event()
        ]

    async def _allocate_code(self) -> str:
        for _ in range(VISITOR_CODE_MAX_ATTEMPTS):
            code = generate_visitor_code()
            if not await self.repo.code_exists(code):
                return code
        raise AppException(
            "Failed to generate unique code after multiple attempts",
            error_code="unique_code_exhausted",
        )

    async def create_visitor(self, data: VisitorCreate) -> VisitorCreateResponse:
        """Register a visitor and send the check-in code.

        Raises:
            AppException: If no free check-in code was found
        """
        credential = issue_credential(data.password, data.email)
        code = await self._allocate_code()
        visitor = await self.repo.create(
            Visitor(
                event_id=data.event_id,
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                mobile=data.mobile,
                gender=data.gender,
                age_group=data.age_group,
                organization=data.organization,
                designation=data.designation,
                password_hash=credential.password_hash,
                unique_code=code,
                visitor_category=data.visitor_category,
                valid_dates=data.valid_dates,
                communication=data.communication or {},
            )
        )
        logger.info("visitor_created", visitor_id=visitor.id, event_id=visitor.event_id)
        await self.repo.commit()

        email_sent, sms_sent = await self._send_confirmation(data, code, credential)
        return VisitorCreateResponse(
            visitor=VisitorResponse.model_validate(visitor),
            unique_code=code,
            credentials=one_time_credentials(credential, data.email),
            email_sent=email_sent,
            sms_sent=sms_sent,
        )

    async def _send_confirmation(
        self, data: VisitorCreate, code: str, credential: IssuedCredential
    ) -> tuple[bool, bool]:
        email_sent = sms_sent = False
        greeting = data.first_name or "Visitor"

        if data.email:
            login_text = login_html = ""
            if credential.is_default:
                login_text = (
                    f"Your login credentials:\nEmail: {data.email}\nPassword: {credential.plaintext}\n\n"
                )
                login_html = (
                    f"<p><strong>Login Credentials:</strong><br>Email: {data.email}<br>"
                    f"Password: {credential.plaintext}</p>"
                )
            result = await self.mailer.send(
                EmailMessage(
                    to=data.email,
                    subject="Welcome! Your Visitor Registration is Confirmed",
                    text=(
                        f"Dear {greeting},\n\nYour registration has been confirmed!\n\n"
                        f"Your Unique Code: {code}\n\n"
                        "Please keep this code safe - you will need it for event check-in.\n\n"
                        f"{login_text}Thank you for registering!\n\nBest regards,\nEvent Team"
                    ),
                    html=(
                        "<h2>Welcome! Your Visitor Registration is Confirmed</h2>"
                        f"<p>Dear {greeting},</p><p>Your registration has been confirmed!</p>"
                        f"<p><strong>Your Unique Code: {code}</strong></p>"
                        "<p>Please keep this code safe - you will need it for event check-in.</p>"
                        f"{login_html}<p>Thank you for registering!</p>"
                        "<p>Best regards,<br>Event Team</p>"
                    ),
                )
            )
            email_sent = result.sent

        if data.mobile and (data.communication or {}).get("sms"):
            result = await self.texter.send(
                SmsMessage(
                    to=data.mobile,
                    body=(
                        f"Your visitor registration is confirmed! Unique Code: {code}. "
                        "Use this code for event check-in."
                    ),
                )
            )
            sms_sent = result.sent

        return email_sent, sms_sent

    async def authenticate(self, email: str, secret: str) -> LoginResult:
        """Check a visitor's password, or their mobile number when enabled.

        The mobile fallback accepts the stored number with or without
        country code and formatting. It is weaker than a password and is
        controlled by ``visitor_phone_login_enabled``.

        Raises:
            UnauthorizedError: If no visitor matches or neither check passes
        """
        visitor = await self.repo.get_by_email(email)
        if visitor is None:
            raise UnauthorizedError(INVALID_CREDENTIALS)

        method = None
        if verify_password(secret, visitor.password_hash):
            method = "password"
        elif settings.visitor_phone_login_enabled and phone_matches(secret, visitor.mobile):
            method = "phone"
        if method is None:
            raise UnauthorizedError(INVALID_VISITOR_CREDENTIALS)

        logger.info("visitor_login", visitor_id=visitor.id, method=method)
        return LoginResult(
            user_type="visitor",
            user={
                "id": visitor.id,
                "name": f"{visitor.first_name or ''} {visitor.last_name or ''}".strip(),
                "email": visitor.email,
                "mobile": visitor.mobile,
                "event_id": visitor.event_id,
                "unique_code": visitor.unique_code,
            },
        )

    async def get_by_code(self, code: str, event_id: int | None = None) -> VisitorLookupResponse:
        """Resolve a scanned check-in code.

        When ``event_id`` is given, the visitor must be registered for
        that event.

        Raises:
            NotFoundError: If no visitor has this code
            ForbiddenError: If the visitor belongs to a different event
        """
        found = await self.repo.get_by_code(code)
        if found is None:
            raise NotFoundError(
                "Invalid QR code. No visitor found with this code.",
                resource="visitor",
            )
        visitor, event_name, organization_id = found

        if event_id is not None and visitor.event_id is not None and visitor.event_id != event_id:
            raise ForbiddenError(
                f'Invalid QR code for this event. This visitor is registered for "{event_name}".',
                error_code="EVENT_MISMATCH",
                details={
                    "visitor_event_id": visitor.event_id,
                    "visitor_event_name": event_name,
                    "scanned_event_id": event_id,
                },
            )
        if event_id is None and visitor.event_id is not None:
            logger.warning("visitor_scan_without_event", unique_code=code, event_id=visitor.event_id)

        return VisitorLookupResponse(
            visitor=CheckInVisitor(
                **VisitorResponse.model_validate(visitor).model_dump(),
                event_name=event_name,
                organization_id=organization_id,
            )
        )


# Type alias for dependency injection
VisitorSvc = Annotated[VisitorService, Depends(VisitorService)]
