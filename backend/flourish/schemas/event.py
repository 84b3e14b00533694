"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import date, datetime, time
from typing import Optional, Union
from pydantic import BaseModel, Field, field_validator

from flourish.models.event import EventCategory, EventStatus


def _split_attractions(value):
    """The create form sends attractions as one comma-separated string."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class EventCreate(BaseModel):
    organizer_id: str
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    category: EventCategory = EventCategory.business
    event_date: date
    event_time: Optional[time] = None
    location: str = ""
    organizer_name: Optional[str] = None
    organizer_specification: Optional[str] = None
    capacity: int = Field(default=0, ge=0)
    price: float = Field(default=0, ge=0)
    attractions: Union[list[str], str] = []
    features: list[str] = []
    is_livestream: bool = False
    livestream_url: Optional[str] = None
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    split_attractions = field_validator("attractions", mode="before")(_split_attractions)


class EventUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[EventCategory] = None
    event_date: Optional[date] = None
    event_time: Optional[time] = None
    location: Optional[str] = None
    organizer_specification: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    price: Optional[float] = Field(default=None, ge=0)
    attractions: Optional[Union[list[str], str]] = None
    features: Optional[list[str]] = None
    is_livestream: Optional[bool] = None
    livestream_url: Optional[str] = None
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    split_attractions = field_validator("attractions", mode="before")(_split_attractions)

    @field_validator(
        "title", "description", "category", "event_date", "location", "capacity",
        "price", "attractions", "features", "is_livestream",
    )
    @classmethod
    def reject_null(cls, value):
        """Omit a field to leave it unchanged; these columns cannot be cleared."""
        if value is None:
            raise ValueError("may not be null")
        return value


class EventStatusUpdate(BaseModel):
    status: EventStatus


class EventOut(BaseModel):
    id: str
    organizer_id: str
    organizer_name: Optional[str] = None
    organizer_specification: Optional[str] = None
    title: str
    description: str
    category: EventCategory
    event_date: date
    event_time: Optional[time] = None
    location: str
    capacity: int
    price: float
    attendees_count: int
    attractions: list[str] = []
    features: list[str] = []
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    is_livestream: bool
    livestream_url: Optional[str] = None
    status: EventStatus
    is_published: bool
    is_visible_in_join_tab: bool
    is_visible_in_my_events: bool
    published_at: Optional[datetime] = None
    deleted_from_join_tab_at: Optional[datetime] = None
    deleted_from_my_events_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CalendarSyncOption(BaseModel):
    id: str
    label: str
    url: str


class CalendarLinksOut(BaseModel):
    event_id: str
    google_url: str
    apple_url: str
    options: list[CalendarSyncOption]
