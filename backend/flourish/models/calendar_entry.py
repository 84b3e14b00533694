"""UserCalendarEvent ORM model — a member's personal calendar with reminders."""
import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from flourish.database import Base


class ReminderType(str, enum.Enum):
    in_app = "in_app"
    email = "email"
    push = "push"
    all = "all"


class ReminderLead(str, enum.Enum):
    fifteen_minutes = "15m"
    one_hour = "1h"
    one_day = "24h"
    one_week = "week"


class UserCalendarEvent(Base):
    __tablename__ = "user_calendar_events"
    __table_args__ = (UniqueConstraint("user_id", "event_id", name="uq_user_calendar_event"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False)
    reminder_enabled = Column(Boolean, nullable=False, default=False)
    reminder_type = Column(SAEnum(ReminderType), nullable=True)
    reminder_time_before = Column(SAEnum(ReminderLead), nullable=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event")
