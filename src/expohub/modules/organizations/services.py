"""Organization and invite business logic."""

from datetime import UTC, datetime, timedelta
from typing import Annotated, Any

import structlog
from fastapi import Depends

from expohub.config import settings
from expohub.core.auth import (
    INVALID_CREDENTIALS,
    IssuedCredential,
    LoginResult,
    generate_invite_token,
    issue_credential,
    one_time_credentials,
    verify_password,
)
from expohub.core.errors import BadRequestError, ConflictError, NotFoundError, UnauthorizedError
from expohub.core.notifications import EmailMessage, Mailer, SmsMessage, Texter
from expohub.modules.organizations.models import ORGANIZATION_RECORD, OrganizationInvite
from expohub.modules.organizations.repos import InviteRepo, OrganizationRepo
from expohub.modules.organizations.schemas import (
    InviteAccept,
    InviteAcceptResponse,
    InviteCreate,
    InviteCreateResponse,
    InviteResponse,
    InviteValidation,
    OrganizationCreate,
    OrganizationCreateResponse,
)


logger = structlog.get_logger()


def is_test_identity(email: str | None, mobile: str | None) -> bool:
    """Test sign-ups use an email containing ``test@`` or a mobile starting ``0000``."""
    return bool((email and "test@" in email) or (mobile and mobile.startswith("0000")))


def is_bypass_identity(email: str | None, mobile: str | None) -> bool:
    """Configured identities that may be re-invited while an invite is pending."""
    return bool(
        (email and email in settings.invite_bypass_emails)
        or (mobile and mobile in settings.invite_bypass_mobiles)
    )


class OrganizationService:
    """Service for organization creation, listing and sign-in."""

    def __init__(self, repo: OrganizationRepo, mailer: Mailer, texter: Texter) -> None:
        self.repo = repo
        self.mailer = mailer
        self.texter = texter

    async def create_organization(self, data: OrganizationCreate) -> OrganizationCreateResponse:
        """Create an organization from the admin form.

        Args:
            data: Organization details

        Returns:
            The stored row (without the hash), one-time credentials when a
            default password was generated, and delivery flags

        Raises:
            ConflictError: If an organization already uses this email
        """
        live = await self.repo.columns()
        if data.email and await self.repo.email_exists(data.email, live):
            raise ConflictError(
                "An organization with this email already exists",
                error_code="organization_exists",
            )

        credential = IssuedCredential()
        extra: dict[str, Any] = {}
        if "password_hash" in live:
            credential = issue_credential(data.password, data.email, fallback_name=data.org_name)
            extra["password_hash"] = credential.password_hash

        plan = ORGANIZATION_RECORD.build(data.record_payload(), live, extra=extra)
        row = await self.repo.insert(plan)
        row.pop("password_hash", None)
        logger.info("organization_created", organization_id=row.get("id"), columns=plan.columns)
        await self.repo.commit()

        email_sent, sms_sent = await self._send_welcome(data, credential)

        return OrganizationCreateResponse(
            organization=row,
            credentials=one_time_credentials(credential, data.email or data.contact_email),
            email_sent=email_sent,
            sms_sent=sms_sent,
        )

    async def _send_welcome(
        self, data: OrganizationCreate, credential: IssuedCredential
    ) -> tuple[bool, bool]:
        if is_test_identity(data.email, data.mobile):
            logger.info("organization_welcome_mocked", email=data.email, mobile=data.mobile)
            return True, True

        login_email = data.email or data.contact_email
        password_line = credential.plaintext or data.password or ""
        login_link = f"{settings.app_login_url}?type=organization"

        email_sent = False
        if login_email:
            result = await self.mailer.send(
                EmailMessage(
                    to=login_email,
                    subject="Welcome to Expo Event Management Platform",
                    text=(
                        f'Your organization "{data.org_name}" has been successfully created.\n\n'
                        f"Login Credentials:\nEmail: {login_email}\nPassword: {password_line}\n\n"
                        f"Login Link: {login_link}\n\n"
                        "Please login and change your password after first login for security."
                    ),
                    html=(
                        "<h2>Welcome to Expo Event Management Platform</h2>"
                        f"<p>Your organization <strong>{data.org_name}</strong> has been successfully created.</p>"
                        f"<p><strong>Email:</strong> {login_email}<br>"
                        f"<strong>Password:</strong> {password_line}</p>"
                        f'<p><a href="{login_link}">Login to your dashboard</a></p>'
                        "<p>Please change your password after first login.</p>"
                    ),
                )
            )
            email_sent = result.sent

        sms_sent = False
        recipient_mobile = data.mobile or data.contact_phone
        if recipient_mobile:
            result = await self.texter.send(
                SmsMessage(
                    to=recipient_mobile,
                    body=(
                        f'Welcome to Expo! Your organization "{data.org_name}" is created. '
                        f"Login: {login_email} | Password: {password_line}\n"
                        f"Access: {login_link}\nChange password after first login."
                    ),
                )
            )
            sms_sent = result.sent

        return email_sent, sms_sent

    async def list_organizations(self) -> list[dict[str, Any]]:
        return await self.repo.list_public()

    async def authenticate(self, email: str, password: str) -> LoginResult:
        """Check an organization's primary email and password.

        Raises:
            UnauthorizedError: If no Active organization matches or the password is wrong
        """
        org = await self.repo.find_for_login(email)
        if org is None:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not org["password_hash"]:
            raise UnauthorizedError(
                "No password set for this organization. Please contact administrator.",
                error_code="password_not_set",
            )
        if not verify_password(password, org["password_hash"]):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info("organization_login", organization_id=org["id"])
        return LoginResult(
            user_type="organization",
            user={
                "id": org["id"],
                "name": org["org_name"],
                "email": org["primary_email"] or org.get("contact_email"),
            },
        )


class InviteService:
    """Service for issuing and redeeming organization invites."""

    def __init__(
        self,
        repo: InviteRepo,
        organizations: OrganizationRepo,
        mailer: Mailer,
        texter: Texter,
    ) -> None:
        self.repo = repo
        self.organizations = organizations
        self.mailer = mailer
        self.texter = texter

    def invite_link(self, token: str) -> str:
        return f"{settings.invite_link_base}?token={token}"

    async def create_invite(self, data: InviteCreate) -> InviteCreateResponse:
        """Issue an invite valid for ``invite_expiry_hours``.

        Delivery is best effort: the invite is kept even if neither the
        email nor the SMS goes out.

        Raises:
            BadRequestError: If neither email nor mobile is given
            ConflictError: If a pending invite already exists for this contact
        """
        email, mobile = data.email, data.mobile
        if not email and not mobile:
            raise BadRequestError("Email or mobile is required", error_code="contact_required")

        test_identity = is_test_identity(email, mobile)
        if test_identity or is_bypass_identity(email, mobile):
            removed = await self.repo.delete_pending(email, mobile)
            if removed:
                logger.info("pending_invites_cleared", email=email, mobile=mobile, count=removed)
        elif await self.repo.find_active(email, mobile):
            raise ConflictError(
                "An active invite already exists for this email or mobile",
                error_code="invite_pending",
            )

        invite = await self.repo.create(
            OrganizationInvite(
                email=email,
                mobile=mobile,
                invite_token=generate_invite_token(),
                status="PENDING",
                expires_at=datetime.now(UTC) + timedelta(hours=settings.invite_expiry_hours),
            )
        )
        link = self.invite_link(invite.invite_token)
        logger.info("invite_created", invite_id=invite.id, email=email, mobile=mobile)
        await self.repo.commit()

        if test_identity:
            logger.info("invite_delivery_mocked", invite_id=invite.id)
            email_sent = sms_sent = True
        else:
            email_sent, sms_sent = await self._deliver(email, mobile, link)

        return InviteCreateResponse(
            invite=InviteResponse.model_validate(invite),
            invite_link=link if test_identity else None,
            email_sent=email_sent,
            sms_sent=sms_sent,
        )

    async def _deliver(self, email: str | None, mobile: str | None, link: str) -> tuple[bool, bool]:
        hours = settings.invite_expiry_hours
        email_sent = sms_sent = False
        if email:
            result = await self.mailer.send(
                EmailMessage(
                    to=email,
                    subject="You're Invited to Create an Organization",
                    text=(
                        "You have been invited to create an organization. "
                        f"Click the link to get started: {link}"
                    ),
                    html=(
                        "<h2>Organization Invitation</h2>"
                        "<p>You have been invited to create an organization on our platform.</p>"
                        f'<p><a href="{link}">Click here to accept the invitation</a></p>'
                        f"<p>This link will expire in {hours} hours.</p>"
                    ),
                )
            )
            email_sent = result.sent
        if mobile:
            result = await self.texter.send(
                SmsMessage(
                    to=mobile,
                    body=f"You're invited to create an organization: {link} (Expires in {hours}h)",
                )
            )
            sms_sent = result.sent
        return email_sent, sms_sent

    async def validate_invite(self, token: str) -> InviteValidation:
        """Check that a token belongs to a PENDING, unexpired invite.

        Raises:
            NotFoundError: If the token is unknown, used or expired
        """
        invite = await self.repo.get_pending(token)
        if invite is None:
            raise NotFoundError("Invalid or expired invite token", resource="invite")
        return InviteValidation(email=invite.email, mobile=invite.mobile, expires_at=invite.expires_at)

    async def accept_invite(self, token: str, data: InviteAccept) -> InviteAcceptResponse:
        """Redeem an invite and create its organization in one transaction.

        The invite row stays locked from lookup to commit. Any failure in
        between rolls everything back and leaves the invite PENDING.

        Raises:
            ConflictError: If the invite is unknown, expired or already
                accepted, or an organization already uses the invite email
        """
        invite = await self.repo.get_pending(token, lock=True)
        if invite is None:
            raise ConflictError(
                "Invalid, expired, or already used invite token",
                error_code="invalid_invite_token",
            )

        live = await self.organizations.columns()
        if invite.email and await self.organizations.email_exists(invite.email, live):
            raise ConflictError(
                "An organization with this email already exists",
                error_code="organization_exists",
            )

        credential = IssuedCredential()
        extra: dict[str, Any] = {}
        if "password_hash" in live:
            credential = issue_credential(None, invite.email, fallback_name=data.name)
            extra["password_hash"] = credential.password_hash

        payload = {"orgName": data.name, "email": invite.email, "mobile": invite.mobile}
        row = await self.organizations.insert(ORGANIZATION_RECORD.build(payload, live, extra=extra))
        row.pop("password_hash", None)
        await self.repo.mark_accepted(invite)
        await self.repo.commit()
        logger.info("invite_accepted", invite_id=invite.id, organization_id=row.get("id"))

        email_sent = False
        if invite.email:
            result = await self.mailer.send(
                EmailMessage(
                    to=invite.email,
                    subject="Your Organization Has Been Created",
                    text=f'Your organization "{data.name}" has been successfully created.',
                    html=(
                        "<h2>Welcome to Our Platform</h2>"
                        f"<p>Your organization <strong>{data.name}</strong> has been successfully created.</p>"
                        "<p>You can now log in and start using our services.</p>"
                    ),
                )
            )
            email_sent = result.sent

        return InviteAcceptResponse(
            organization=row,
            credentials=one_time_credentials(credential, invite.email),
            email_sent=email_sent,
        )


# Type aliases for dependency injection
OrganizationSvc = Annotated[OrganizationService, Depends(OrganizationService)]
InviteSvc = Annotated[InviteService, Depends(InviteService)]
