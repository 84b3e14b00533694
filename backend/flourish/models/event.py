"""Event ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, Text, Date, Time, DateTime, Integer, Numeric, Boolean, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from flourish.database import Base


class EventCategory(str, enum.Enum):
    social = "social"
    networking = "networking"
    business = "business"
    workshop = "workshop"
    conference = "conference"
    entertainment = "entertainment"


class EventStatus(str, enum.Enum):
    upcoming = "upcoming"
    ongoing = "ongoing"
    completed = "completed"
    cancelled = "cancelled"


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    organizer_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    organizer_name = Column(String(150), nullable=True)
    organizer_specification = Column(String(255), nullable=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    category = Column(SAEnum(EventCategory), nullable=False, default=EventCategory.business)
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=True)  # NULL means all-day
    location = Column(String(500), nullable=False, default="")
    capacity = Column(Integer, nullable=False, default=0)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    attendees_count = Column(Integer, nullable=False, default=0)
    attractions = Column(JSON, nullable=False, default=list)
    features = Column(JSON, nullable=False, default=list)
    image_url = Column(String(1000), nullable=True)
    thumbnail_url = Column(String(1000), nullable=True)

    is_livestream = Column(Boolean, nullable=False, default=False)
    livestream_url = Column(String(1000), nullable=True)

    # Lifecycle flags are independent axes; see flourish.services.visibility
    status = Column(SAEnum(EventStatus), nullable=False, default=EventStatus.upcoming)
    is_published = Column(Boolean, nullable=False, default=False)
    is_visible_in_join_tab = Column(Boolean, nullable=False, default=True)
    is_visible_in_my_events = Column(Boolean, nullable=False, default=True)

    published_at = Column(DateTime(timezone=True), nullable=True)
    deleted_from_join_tab_at = Column(DateTime(timezone=True), nullable=True)
    deleted_from_my_events_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
