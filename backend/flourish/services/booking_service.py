"""Service bookings for events."""
import logging
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from flourish.models.service import BookingStatus, EventServiceBooking, ServiceProvider
from flourish.models.user import User
from flourish.schemas.service import BookingLine
from flourish.services.event_service import get_event

logger = logging.getLogger(__name__)


def book_event_services(
    db: Session,
    event_id: str,
    user_id: str,
    lines: list[BookingLine],
) -> list[EventServiceBooking]:
    """Create one pending booking per requested provider, priced at booking time."""
    get_event(db, event_id)
    if not db.query(User).filter(User.user_id == user_id).first():
        raise HTTPException(status_code=404, detail="User not found")

    bookings = []
    for line in lines:
        provider = db.query(ServiceProvider).filter(ServiceProvider.id == line.provider_id).first()
        if not provider:
            raise HTTPException(status_code=404, detail=f"Service provider {line.provider_id} not found")
        if not provider.available:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Service provider '{provider.name}' is not available",
            )
        base_price = Decimal(provider.base_price)
        bookings.append(EventServiceBooking(
            event_id=event_id,
            user_id=user_id,
            provider_id=provider.id,
            provider_name=provider.name,
            provider_category=provider.category.value,
            quantity=line.quantity,
            base_price=base_price,
            total_price=base_price * line.quantity,
            booking_status=BookingStatus.pending,
            special_notes=line.special_notes,
        ))

    db.add_all(bookings)
    db.commit()
    for booking in bookings:
        db.refresh(booking)
    logger.info("Booked %d service(s) for event %s by user %s", len(bookings), event_id, user_id)
    return bookings


def list_pending_bookings(db: Session, event_id: str) -> list[EventServiceBooking]:
    return (
        db.query(EventServiceBooking)
        .filter(
            EventServiceBooking.event_id == event_id,
            EventServiceBooking.booking_status == BookingStatus.pending,
        )
        .order_by(EventServiceBooking.created_at.desc())
        .all()
    )


def update_booking_status(
    db: Session,
    booking_id: str,
    user_id: str,
    new_status: BookingStatus,
) -> EventServiceBooking:
    """Only the user who made a booking may change its status."""
    booking = db.query(EventServiceBooking).filter(EventServiceBooking.id == booking_id).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    if booking.user_id != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the booking owner may change it")

    booking.booking_status = new_status
    db.commit()
    db.refresh(booking)
    logger.info("Booking %s is now %s", booking_id, new_status.value)
    return booking


def cancel_booking(db: Session, booking_id: str, user_id: str) -> EventServiceBooking:
    return update_booking_status(db, booking_id, user_id, BookingStatus.cancelled)


def event_booking_total(db: Session, event_id: str) -> Decimal:
    """Sum of every booking on the event that has not been cancelled."""
    total = (
        db.query(func.coalesce(func.sum(EventServiceBooking.total_price), 0))
        .filter(
            EventServiceBooking.event_id == event_id,
            EventServiceBooking.booking_status != BookingStatus.cancelled,
        )
        .scalar()
    )
    return Decimal(str(total))
