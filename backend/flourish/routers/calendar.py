"""Personal calendar routes — events a member saved, with reminders."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from flourish.database import get_db
from flourish.models.calendar_entry import UserCalendarEvent
from flourish.models.user import User
from flourish.schemas.calendar_entry import (
    CalendarAdd, CalendarEntryOut, CalendarMembershipOut, ReminderSettings,
)
from flourish.schemas.event import EventOut
from flourish.services.event_service import get_event

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_entry(db: Session, user_id: str, event_id: str) -> UserCalendarEvent:
    entry = (
        db.query(UserCalendarEvent)
        .filter(UserCalendarEvent.user_id == user_id, UserCalendarEvent.event_id == event_id)
        .first()
    )
    if not entry:
        raise HTTPException(status_code=404, detail="Event is not in this calendar")
    return entry


@router.post("/", response_model=CalendarEntryOut, status_code=status.HTTP_201_CREATED)
def add_to_calendar(payload: CalendarAdd, db: Session = Depends(get_db)):
    if not db.query(User).filter(User.user_id == payload.user_id).first():
        raise HTTPException(status_code=404, detail="User not found")
    get_event(db, payload.event_id)

    existing = (
        db.query(UserCalendarEvent)
        .filter(UserCalendarEvent.user_id == payload.user_id, UserCalendarEvent.event_id == payload.event_id)
        .first()
    )
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Event is already in your calendar")

    entry = UserCalendarEvent(**payload.model_dump())
    db.add(entry)
    db.commit()
    db.refresh(entry)
    logger.info("User %s added event %s to their calendar", payload.user_id, payload.event_id)
    return entry


@router.get("/{user_id}", response_model=list[EventOut])
def list_calendar_events(user_id: str, db: Session = Depends(get_db)):
    """The member's saved events, most recently added first."""
    entries = (
        db.query(UserCalendarEvent)
        .filter(UserCalendarEvent.user_id == user_id)
        .order_by(UserCalendarEvent.added_at.desc())
        .all()
    )
    return [entry.event for entry in entries if entry.event is not None]


@router.get("/{user_id}/{event_id}", response_model=CalendarMembershipOut)
def is_in_calendar(user_id: str, event_id: str, db: Session = Depends(get_db)):
    found = (
        db.query(UserCalendarEvent.id)
        .filter(UserCalendarEvent.user_id == user_id, UserCalendarEvent.event_id == event_id)
        .first()
    )
    return {"user_id": user_id, "event_id": event_id, "in_calendar": found is not None}


@router.delete("/{user_id}/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_calendar(user_id: str, event_id: str, db: Session = Depends(get_db)):
    entry = _get_entry(db, user_id, event_id)
    db.delete(entry)
    db.commit()
    logger.info("User %s removed event %s from their calendar", user_id, event_id)


@router.post("/{user_id}/{event_id}/reminder", response_model=CalendarEntryOut)
def enable_reminder(user_id: str, event_id: str, payload: ReminderSettings, db: Session = Depends(get_db)):
    entry = _get_entry(db, user_id, event_id)
    entry.reminder_enabled = True
    entry.reminder_type = payload.reminder_type
    entry.reminder_time_before = payload.reminder_time_before
    db.commit()
    db.refresh(entry)
    logger.info("Reminder (%s, %s before) enabled for user %s on event %s",
                payload.reminder_type.value, payload.reminder_time_before.value, user_id, event_id)
    return entry


@router.delete("/{user_id}/{event_id}/reminder", response_model=CalendarEntryOut)
def disable_reminder(user_id: str, event_id: str, db: Session = Depends(get_db)):
    entry = _get_entry(db, user_id, event_id)
    entry.reminder_enabled = False
    db.commit()
    db.refresh(entry)
    return entry
