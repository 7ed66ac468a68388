"""Exhibitor business logic."""

from typing import Annotated, Any

import structlog
from fastapi import Depends

from expohub.core.auth import (
    INVALID_CREDENTIALS,
    LoginResult,
    issue_credential,
    one_time_credentials,
    verify_password,
)
from expohub.core.errors import ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from expohub.modules.events.repos import EventRepo
from expohub.modules.exhibitors.models import EXHIBITOR_UPDATE, Exhibitor
from expohub.modules.exhibitors.repos import ExhibitorRepo
from expohub.modules.exhibitors.schemas import (
    EventRegistration,
    EventRegistrationResponse,
    ExhibitorCreate,
    ExhibitorCreateResponse,
    ExhibitorListItem,
    ExhibitorResponse,
    ExhibitorUpdate,
    ExhibitorUpdateResponse,
)


logger = structlog.get_logger()


class ExhibitorService:
    """Service for exhibitor management, sign-in and event registration."""

    def __init__(self, repo: ExhibitorRepo, events: EventRepo) -> None:
        self.repo = repo
        self.events = events

    async def list_exhibitors(self) -> list[ExhibitorListItem]:
        return [
            ExhibitorListItem(
                **ExhibitorResponse.model_validate(exhibitor).model_dump(),
                event_name=event_name,
                organization_name=organization_name,
            )
            for exhibitor, event_name, organization_name in await self.repo.list_with_context()
        ]

    async def create_exhibitor(self, data: ExhibitorCreate) -> ExhibitorCreateResponse:
        """Create an exhibitor, deriving a default password from the email if none is given."""
        credential = issue_credential(data.password, data.email)
        exhibitor = await self.repo.create(
            Exhibitor(
                organization_id=data.organization_id,
                event_id=data.event_id,
                company_name=data.company_name,
                gst_number=data.gst_number,
                address=data.address,
                industry=data.industry,
                logo_url=data.logo_url,
                contact_person=data.contact_person,
                email=data.email,
                mobile=data.mobile,
                password_hash=credential.password_hash,
                stall_number=data.stall_number,
                stall_category=data.stall_category,
                access_status=data.access_status or "Active",
                lead_capture=data.lead_capture or {},
                communication=data.communication or {},
            )
        )
        logger.info("exhibitor_created", exhibitor_id=exhibitor.id, event_id=exhibitor.event_id)
        return ExhibitorCreateResponse(
            exhibitor=ExhibitorResponse.model_validate(exhibitor),
            credentials=one_time_credentials(credential, data.email),
        )

    async def update_exhibitor(self, exhibitor_id: int, data: ExhibitorUpdate) -> ExhibitorUpdateResponse:
        """Apply a partial profile update.

        Raises:
            NotFoundError: If the exhibitor does not exist
        """
        live = await self.repo.columns()
        plan = EXHIBITOR_UPDATE.build(data.record_payload(), live, partial=True)
        row = await self.repo.update(exhibitor_id, plan)
        if row is None:
            raise NotFoundError("Exhibitor not found", resource="exhibitor", resource_id=str(exhibitor_id))
        logger.info("exhibitor_updated", exhibitor_id=exhibitor_id, columns=plan.columns)
        return ExhibitorUpdateResponse(exhibitor=ExhibitorResponse.model_validate(row))

    async def authenticate(self, email: str, password: str) -> LoginResult:
        """Check an exhibitor's email and password.

        Suspended and Inactive exhibitors cannot sign in.

        Raises:
            UnauthorizedError: If no usable exhibitor matches or the password is wrong
        """
        found = await self.repo.find_for_login(email)
        if found is None:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        exhibitor, event_name = found
        if not exhibitor.password_hash:
            raise UnauthorizedError(
                "No password set for this exhibitor. Please contact administrator.",
                error_code="password_not_set",
            )
        if not verify_password(password, exhibitor.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)

        logger.info(
            "exhibitor_login",
            exhibitor_id=exhibitor.id,
            organization_id=exhibitor.organization_id,
            event_id=exhibitor.event_id,
        )
        return LoginResult(
            user_type="exhibitor",
            user={
                "id": exhibitor.id,
                "name": exhibitor.company_name,
                "email": exhibitor.email,
                "event_id": exhibitor.event_id,
                "event_name": event_name,
                "organization_id": exhibitor.organization_id,
            },
        )

    async def upcoming_events(self, organization_id: int) -> list[dict[str, Any]]:
        return await self.events.list_upcoming(organization_id)

    async def register_for_event(self, data: EventRegistration) -> EventRegistrationResponse:
        """Copy an exhibitor's profile into a registration for another event.

        The new row reuses the existing password hash, so the same
        credentials work for every event.

        Raises:
            NotFoundError: If the exhibitor or the event does not exist
            ConflictError: If the exhibitor is already registered for the event
            ForbiddenError: If the event belongs to another organization
        """
        exhibitor = await self.repo.get(data.exhibitor_id)
        if exhibitor is None:
            raise NotFoundError("Exhibitor not found", resource="exhibitor", resource_id=str(data.exhibitor_id))

        if await self.repo.registration_exists(exhibitor.organization_id, data.event_id, exhibitor.email):
            raise ConflictError(
                "You are already registered for this event",
                error_code="already_registered",
            )

        event = await self.events.get(data.event_id)
        if event is None:
            raise NotFoundError("Event not found", resource="event", resource_id=str(data.event_id))
        if event.get("organization_id") != exhibitor.organization_id:
            raise ForbiddenError(
                "Cannot register for events from different organizations",
                error_code="organization_mismatch",
            )

        registration = await self.repo.create(
            Exhibitor(
                organization_id=exhibitor.organization_id,
                event_id=data.event_id,
                company_name=exhibitor.company_name,
                gst_number=exhibitor.gst_number,
                address=exhibitor.address,
                industry=exhibitor.industry,
                contact_person=exhibitor.contact_person,
                email=exhibitor.email,
                mobile=exhibitor.mobile,
                password_hash=exhibitor.password_hash,
                access_status="Active",
                lead_capture=exhibitor.lead_capture or {},
                communication=exhibitor.communication or {},
            )
        )
        logger.info(
            "exhibitor_registered_for_event",
            exhibitor_id=exhibitor.id,
            registration_id=registration.id,
            event_id=data.event_id,
        )
        return EventRegistrationResponse(
            registration=ExhibitorResponse.model_validate(registration),
            event_name=event.get("event_name"),
        )


# Type alias for dependency injection
ExhibitorSvc = Annotated[ExhibitorService, Depends(ExhibitorService)]
