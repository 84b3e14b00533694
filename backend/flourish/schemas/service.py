"""Pydantic schemas for service providers and event service bookings."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from flourish.models.service import BookingStatus, ProviderCategory


class ProviderCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    category: ProviderCategory
    description: str = ""
    expertise: str = ""
    base_price: float = Field(default=0, ge=0)
    contact_email: str = ""
    contact_phone: str = ""
    portfolio_images: list[str] = []
    available: bool = True


class ProviderOut(BaseModel):
    id: str
    name: str
    category: ProviderCategory
    description: str
    expertise: str
    base_price: float
    rating: float
    reviews_count: int
    contact_email: str
    contact_phone: str
    portfolio_images: list[str] = []
    available: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingLine(BaseModel):
    provider_id: str
    quantity: int = Field(default=1, ge=1)
    special_notes: Optional[str] = None


class BookingCreate(BaseModel):
    user_id: str
    services: list[BookingLine] = Field(min_length=1)


class BookingStatusUpdate(BaseModel):
    booking_status: BookingStatus


class BookingOut(BaseModel):
    id: str
    event_id: str
    user_id: str
    provider_id: str
    provider_name: str
    provider_category: str
    quantity: int
    base_price: float
    total_price: float
    booking_status: BookingStatus
    special_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class BookingTotalOut(BaseModel):
    event_id: str
    total_cost: float
