"""Event API routes — delegates to event_service for lifecycle rules."""
import logging
from urllib.parse import quote
from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from flourish.clock import Clock, get_clock
from flourish.database import get_db
from flourish.schemas.event import (
    CalendarLinksOut, EventCreate, EventOut, EventStatusUpdate, EventUpdate,
)
from flourish.services import calendar_export, event_service
from flourish.services.visibility import local_date

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    """Create a draft event."""
    return event_service.create_event(
        db=db,
        organizer_id=payload.organizer_id,
        fields=payload.model_dump(exclude={"organizer_id"}),
    )


@router.get("/join", response_model=list[EventOut])
def list_join_tab_events(db: Session = Depends(get_db), clock: Clock = Depends(get_clock)):
    """Public discovery listing. Events drop out an hour after they start."""
    return event_service.list_published_events(db, clock)


@router.get("/mine", response_model=list[EventOut])
def list_my_events(organizer_id: str = Query(...), db: Session = Depends(get_db)):
    """The organizer's own listing, excluding events they removed."""
    return event_service.list_user_events(db, organizer_id)


@router.get("/upcoming", response_model=list[EventOut])
def list_upcoming_events(
    limit: int = Query(3, ge=1, le=50),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return event_service.list_upcoming_events(db, today=local_date(clock()), limit=limit)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_service.get_event(db, event_id)


@router.patch("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    actor_id: str = Query(..., description="ID of the user performing the update"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Partial update (organizer only)."""
    return event_service.update_event(
        db=db,
        event_id=event_id,
        actor_id=actor_id,
        updates=payload.model_dump(exclude_unset=True),
        clock=clock,
    )


@router.post("/{event_id}/publish", response_model=EventOut)
def publish_event(
    event_id: str,
    actor_id: str = Query(...),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return event_service.publish_event(db, event_id, actor_id, clock)


@router.post("/{event_id}/hide-from-join", response_model=EventOut)
def hide_from_join_tab(
    event_id: str,
    actor_id: str = Query(...),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return event_service.hide_from_join_tab(db, event_id, actor_id, clock)


@router.post("/{event_id}/remove-from-my-events", response_model=EventOut)
def remove_from_my_events(
    event_id: str,
    actor_id: str = Query(...),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return event_service.remove_from_my_events(db, event_id, actor_id, clock)


@router.post("/{event_id}/restore-to-my-events", response_model=EventOut)
def restore_to_my_events(
    event_id: str,
    actor_id: str = Query(...),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return event_service.restore_to_my_events(db, event_id, actor_id, clock)


@router.post("/{event_id}/status", response_model=EventOut)
def set_event_status(
    event_id: str,
    payload: EventStatusUpdate,
    actor_id: str = Query(...),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    return event_service.set_status(db, event_id, actor_id, payload.status, clock)


@router.get("/{event_id}/calendar.ics")
def download_ics(
    event_id: str,
    email: str = Query("", description="Organizer email for the ORGANIZER mailto"),
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """The event as an .ics attachment."""
    event = event_service.get_event(db, event_id)
    content = calendar_export.generate_ical_event(event, organizer_email=email, now=clock())

    filename = calendar_export.ics_filename(event)
    quoted = quote(filename)
    if quoted != filename:
        disposition = f"attachment; filename*=utf-8''{quoted}"
    else:
        disposition = f'attachment; filename="{filename}"'
    logger.info("Exported event %s as %s", event_id, filename)
    return Response(
        content=content,
        media_type=calendar_export.ICS_MIME_TYPE,
        headers={"Content-Disposition": disposition},
    )


@router.get("/{event_id}/calendar-links", response_model=CalendarLinksOut)
def calendar_links(event_id: str, db: Session = Depends(get_db)):
    event = event_service.get_event(db, event_id)
    return {
        "event_id": event.id,
        "google_url": calendar_export.google_calendar_url(event),
        "apple_url": calendar_export.apple_calendar_url(event),
        "options": calendar_export.calendar_sync_options(event),
    }


@router.get("/{event_id}/summary", response_class=PlainTextResponse)
def event_summary(event_id: str, db: Session = Depends(get_db)):
    """Plain-text details for the client to place on its clipboard."""
    event = event_service.get_event(db, event_id)
    return calendar_export.clipboard_summary(event)
