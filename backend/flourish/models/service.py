"""ServiceProvider and EventServiceBooking ORM models."""
import uuid
import enum
from sqlalchemy import Column, String, Text, DateTime, Integer, Numeric, Boolean, JSON, ForeignKey, Enum as SAEnum
from sqlalchemy.sql import func
from flourish.database import Base


class ProviderCategory(str, enum.Enum):
    venue = "venue"
    catering = "catering"
    decor = "decor"
    audio = "audio"
    photography = "photography"
    entertainment = "entertainment"
    security = "security"
    transport = "transport"
    ushering = "ushering"


class BookingStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class ServiceProvider(Base):
    __tablename__ = "service_providers"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(150), nullable=False)
    category = Column(SAEnum(ProviderCategory), nullable=False)
    description = Column(Text, nullable=False, default="")
    expertise = Column(String(255), nullable=False, default="")
    base_price = Column(Numeric(10, 2), nullable=False, default=0)
    rating = Column(Numeric(3, 2), nullable=False, default=0)
    reviews_count = Column(Integer, nullable=False, default=0)
    contact_email = Column(String(255), nullable=False, default="")
    contact_phone = Column(String(50), nullable=False, default="")
    portfolio_images = Column(JSON, nullable=False, default=list)
    available = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class EventServiceBooking(Base):
    __tablename__ = "event_service_bookings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id"), nullable=False)
    user_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)
    provider_id = Column(String(36), ForeignKey("service_providers.id"), nullable=False)
    provider_name = Column(String(150), nullable=False)
    provider_category = Column(String(50), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    base_price = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)
    booking_status = Column(SAEnum(BookingStatus), nullable=False, default=BookingStatus.pending)
    special_notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
