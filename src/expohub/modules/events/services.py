"""Event business logic: creation, QR back-fill and organizer notice."""

import uuid
from typing import Annotated, Any
from urllib.parse import quote, urlencode

import structlog
from fastapi import Depends

from expohub.config import settings
from expohub.core.errors import BadRequestError, NotFoundError
from expohub.core.notifications import EmailMessage, Mailer
from expohub.core.storage import QrStorageDep, render_qr_png
from expohub.modules.events.models import EVENT_RECORD
from expohub.modules.events.repos import EventRepo
from expohub.modules.events.schemas import (
    EventCreate,
    EventCreateResponse,
    GroundLayoutResponse,
    GroundLayoutUpdate,
)
from expohub.modules.organizations.repos import OrganizationRepo


logger = structlog.get_logger()

DEFAULT_EVENT_NAME = "Untitled Event"


def registration_link(
    token: str,
    event_name: str | None,
    start_date: str | None,
    base: str | None = None,
) -> str:
    """Public registration URL carried by the event QR code."""
    params = {
        "action": "register",
        "eventId": event_name or "event",
        "eventName": event_name or "Event",
        "eventDate": start_date or "",
        "token": token,
    }
    root = (base or settings.event_registration_base).rstrip("/")
    return f"{root}?{urlencode(params, quote_via=quote)}"


class EventService:
    """Service for event management."""

    def __init__(
        self,
        repo: EventRepo,
        organizations: OrganizationRepo,
        storage: QrStorageDep,
        mailer: Mailer,
    ) -> None:
        self.repo = repo
        self.organizations = organizations
        self.storage = storage
        self.mailer = mailer

    async def list_events(self) -> list[dict[str, Any]]:
        return await self.repo.list_all()

    async def create_event(self, data: EventCreate) -> EventCreateResponse:
        """Create an event, then attach its QR image and notify the organizer.

        The QR image and the email are best effort. Their outcome is
        reported through ``qr_generated`` and ``email_sent``. The event is
        committed before the organizer is emailed.

        Raises:
            BadRequestError: If no organization is given
            NotFoundError: If the organization does not exist
        """
        if data.organization_id is None:
            raise BadRequestError(
                "Events must be associated with an organization. "
                "Please provide organizationId in the request.",
                error_code="organization_required",
            )
        if not await self.organizations.exists(data.organization_id):
            raise NotFoundError(
                "Organization not found",
                resource="organization",
                resource_id=str(data.organization_id),
            )

        token = str(uuid.uuid4())
        link = registration_link(token, data.event_name, data.start_date)
        payload = data.record_payload()
        payload["eventName"] = data.event_name or DEFAULT_EVENT_NAME

        live = await self.repo.columns()
        plan = EVENT_RECORD.build(
            payload, live, extra={"qr_token": token, "registration_link": link}
        )
        event = await self.repo.insert(plan)
        logger.info("event_created", event_id=event["id"], organization_id=data.organization_id)

        qr_image_url = None
        qr_generated = False
        try:
            stored = await self.storage.store(event["id"], render_qr_png(link))
        except Exception:
            logger.exception("qr_generation_failed", event_id=event["id"])
        else:
            await self.repo.set_qr_image_path(event["id"], stored.path)
            event["qr_image_path"] = stored.path
            qr_image_url = stored.url
            qr_generated = True
        await self.repo.commit()

        email_sent = False
        if data.organizer_email:
            email_sent = await self._notify_organizer(data, payload["eventName"], link, qr_image_url)

        return EventCreateResponse(
            event=event,
            qr_image_url=qr_image_url,
            qr_generated=qr_generated,
            email_sent=email_sent,
        )

    async def _notify_organizer(
        self,
        data: EventCreate,
        event_name: str,
        link: str,
        qr_image_url: str | None,
    ) -> bool:
        start = data.start_date or "TBD"
        end = data.end_date or "TBD"
        venue = ", ".join(part for part in (data.venue or "TBD", data.city, data.state) if part)

        text = (
            "Event Created Successfully!\n\n"
            f'Your event "{event_name}" has been successfully created and is ready to accept registrations.\n\n'
            f"Event Details:\n- Event Name: {event_name}\n- Start Date: {start}\n"
            f"- End Date: {end}\n- Venue: {venue}\n\n"
            f"Registration Link:\n{link}\n"
        )
        html = (
            "<h1>Event Created Successfully!</h1>"
            f"<p>Your event <strong>{event_name}</strong> has been successfully created "
            "and is ready to accept registrations.</p>"
            f"<p><strong>Start Date:</strong> {start}<br><strong>End Date:</strong> {end}<br>"
            f"<strong>Venue:</strong> {venue}</p>"
            f'<p><a href="{link}">Open Registration Page</a></p>'
        )
        if qr_image_url:
            text += f"\nQR Code Image: {qr_image_url}\n"
            html += f'<p><img src="{qr_image_url}" alt="Event Registration QR Code" width="200"></p>'

        result = await self.mailer.send(
            EmailMessage(
                to=data.organizer_email or "",
                subject=f"Event Created: {event_name} - Registration Link",
                text=text,
                html=html,
            )
        )
        return result.sent

    async def get_by_token(self, token: str) -> dict[str, Any]:
        """Resolve a registration token to the public event view.

        Raises:
            NotFoundError: If no event carries this token
        """
        event = await self.repo.get_by_token(token)
        if event is None:
            raise NotFoundError("Event not found", resource="event")
        event["qr_image_url"] = self.storage.url_for(event.get("qr_image_path"))
        return event

    async def update_ground_layout(self, event_id: int, data: GroundLayoutUpdate) -> GroundLayoutResponse:
        """Replace the event's ground layout image URL.

        Raises:
            NotFoundError: If the event does not exist
        """
        event = await self.repo.set_ground_layout(event_id, data.ground_layout_url)
        if event is None:
            raise NotFoundError("Event not found", resource="event", resource_id=str(event_id))
        logger.info("ground_layout_updated", event_id=event_id)
        return GroundLayoutResponse(event=event)


# Type alias for dependency injection
EventSvc = Annotated[EventService, Depends(EventService)]
