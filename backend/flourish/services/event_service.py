"""Core event service — lifecycle transitions and listings.

Responsibilities:
- Authorization hook: only the organizer may edit or transition an event
- Lifecycle flags: publish, hide from join tab, remove from / restore to My Events
- Audit markers: each *_at timestamp is written only by its own transition
- Listings: join tab (flags in SQL, grace window in Python), My Events, upcoming
"""
import logging
from datetime import date
from typing import Any, Optional

from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from flourish.clock import Clock, utc_now
from flourish.models.event import Event, EventStatus
from flourish.models.user import User
from flourish.services.visibility import filter_join_tab_events, local_date

logger = logging.getLogger(__name__)

# Fields the organizer may edit through update_event
EDITABLE_FIELDS = {
    "title", "description", "category", "event_date", "event_time", "location",
    "organizer_specification", "capacity", "price", "attractions", "features",
    "is_livestream", "livestream_url", "image_url", "thumbnail_url",
}


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return event


def _check_authorization(event: Event, actor_id: str) -> None:
    """Only the organizer may modify an event."""
    if event.organizer_id != actor_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the organizer may modify this event.",
        )


def _get_owned_event(db: Session, event_id: str, actor_id: str) -> Event:
    event = get_event(db, event_id)
    _check_authorization(event, actor_id)
    return event


def _save(db: Session, event: Event, clock: Clock) -> Event:
    event.updated_at = clock()
    db.commit()
    db.refresh(event)
    return event


def create_event(db: Session, organizer_id: str, fields: dict[str, Any]) -> Event:
    """Create a draft event. It stays out of the join tab until published."""
    organizer = db.query(User).filter(User.user_id == organizer_id).first()
    if not organizer:
        raise HTTPException(status_code=404, detail="Organizer not found")

    fields = dict(fields)
    if not fields.get("organizer_name"):
        fields["organizer_name"] = organizer.display_name

    event = Event(
        organizer_id=organizer_id,
        status=EventStatus.upcoming,
        is_published=False,
        **fields,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by organizer %s", event.title, event.id, organizer_id)
    return event


def update_event(
    db: Session,
    event_id: str,
    actor_id: str,
    updates: dict[str, Any],
    clock: Clock = utc_now,
) -> Event:
    """Apply an organizer's edits. Lifecycle flags cannot be changed here."""
    event = _get_owned_event(db, event_id, actor_id)
    for field, value in updates.items():
        if field in EDITABLE_FIELDS:
            setattr(event, field, value)
    _save(db, event, clock)
    logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(updates)))
    return event


def publish_event(db: Session, event_id: str, actor_id: str, clock: Clock = utc_now) -> Event:
    """Make the event public in the join tab and keep it in My Events.

    published_at records the first publish only.
    """
    event = _get_owned_event(db, event_id, actor_id)
    event.is_published = True
    event.is_visible_in_join_tab = True
    event.is_visible_in_my_events = True
    if event.published_at is None:
        event.published_at = clock()
    _save(db, event, clock)
    logger.info("Published event %s", event_id)
    return event


def hide_from_join_tab(db: Session, event_id: str, actor_id: str, clock: Clock = utc_now) -> Event:
    """Unpublish: the event leaves the join tab but stays in My Events."""
    event = _get_owned_event(db, event_id, actor_id)
    event.is_visible_in_join_tab = False
    event.is_published = False
    event.deleted_from_join_tab_at = clock()
    _save(db, event, clock)
    logger.info("Hid event %s from join tab", event_id)
    return event


def remove_from_my_events(db: Session, event_id: str, actor_id: str, clock: Clock = utc_now) -> Event:
    """Soft delete from the organizer's listing. Join-tab visibility is untouched."""
    event = _get_owned_event(db, event_id, actor_id)
    event.is_visible_in_my_events = False
    event.deleted_from_my_events_at = clock()
    _save(db, event, clock)
    logger.info("Removed event %s from My Events", event_id)
    return event


def restore_to_my_events(db: Session, event_id: str, actor_id: str, clock: Clock = utc_now) -> Event:
    event = _get_owned_event(db, event_id, actor_id)
    event.is_visible_in_my_events = True
    event.deleted_from_my_events_at = None
    _save(db, event, clock)
    logger.info("Restored event %s to My Events", event_id)
    return event


def set_status(
    db: Session,
    event_id: str,
    actor_id: str,
    new_status: EventStatus,
    clock: Clock = utc_now,
) -> Event:
    event = _get_owned_event(db, event_id, actor_id)
    event.status = new_status
    _save(db, event, clock)
    logger.info("Event %s status set to %s", event_id, new_status.value)
    return event


def list_published_events(db: Session, clock: Clock = utc_now) -> list[Event]:
    """Join tab listing, soonest first."""
    candidates = (
        db.query(Event)
        .filter(Event.is_visible_in_join_tab.is_(True), Event.is_published.is_(True))
        .order_by(Event.event_date, Event.event_time)
        .all()
    )
    return filter_join_tab_events(candidates, clock)


def list_user_events(db: Session, organizer_id: str) -> list[Event]:
    """My Events listing, newest first."""
    return (
        db.query(Event)
        .filter(Event.organizer_id == organizer_id, Event.is_visible_in_my_events.is_(True))
        .order_by(Event.created_at.desc())
        .all()
    )


def list_upcoming_events(db: Session, today: Optional[date] = None, limit: int = 3) -> list[Event]:
    """Events whose status is still upcoming and whose date has not passed."""
    today = today or local_date(utc_now())
    return (
        db.query(Event)
        .filter(Event.status == EventStatus.upcoming, Event.event_date >= today)
        .order_by(Event.event_date)
        .limit(limit)
        .all()
    )
