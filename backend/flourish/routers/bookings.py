"""Event service booking routes."""
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from flourish.database import get_db
from flourish.schemas.service import BookingCreate, BookingOut, BookingStatusUpdate, BookingTotalOut
from flourish.services import booking_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/events/{event_id}/bookings", response_model=list[BookingOut], status_code=status.HTTP_201_CREATED)
def book_services(event_id: str, payload: BookingCreate, db: Session = Depends(get_db)):
    """Book one or more service providers for an event."""
    return booking_service.book_event_services(db, event_id, payload.user_id, payload.services)


@router.get("/events/{event_id}/bookings", response_model=list[BookingOut])
def list_pending_bookings(event_id: str, db: Session = Depends(get_db)):
    return booking_service.list_pending_bookings(db, event_id)


@router.get("/events/{event_id}/bookings/total", response_model=BookingTotalOut)
def booking_total(event_id: str, db: Session = Depends(get_db)):
    return {"event_id": event_id, "total_cost": booking_service.event_booking_total(db, event_id)}


@router.patch("/bookings/{booking_id}", response_model=BookingOut)
def update_booking(
    booking_id: str,
    payload: BookingStatusUpdate,
    user_id: str = Query(...),
    db: Session = Depends(get_db),
):
    return booking_service.update_booking_status(db, booking_id, user_id, payload.booking_status)


@router.post("/bookings/{booking_id}/cancel", response_model=BookingOut)
def cancel_booking(booking_id: str, user_id: str = Query(...), db: Session = Depends(get_db)):
    return booking_service.cancel_booking(db, booking_id, user_id)
