"""Pydantic schemas for a member's personal event calendar."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from flourish.models.calendar_entry import ReminderLead, ReminderType


class CalendarAdd(BaseModel):
    user_id: str
    event_id: str
    reminder_enabled: bool = False


class ReminderSettings(BaseModel):
    reminder_type: ReminderType = ReminderType.in_app
    reminder_time_before: ReminderLead = ReminderLead.one_day


class CalendarEntryOut(BaseModel):
    id: str
    user_id: str
    event_id: str
    reminder_enabled: bool
    reminder_type: Optional[ReminderType] = None
    reminder_time_before: Optional[ReminderLead] = None
    added_at: datetime

    model_config = {"from_attributes": True}


class CalendarMembershipOut(BaseModel):
    user_id: str
    event_id: str
    in_calendar: bool
