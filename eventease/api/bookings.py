from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from eventease.core.database import get_db
from eventease.schemas.booking import (
    BookingCreate,
    BookingCreateResponse,
    BookingDetailResponse,
    BookingResponse,
    BookingsListResponse,
    BookingUpdate,
)
from eventease.services.booking_service import BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=BookingsListResponse)
def list_bookings(
    search: Optional[str] = Query(None, description="Match against venue name, event name or reference"),
    eventTypeId: Optional[str] = Query(None),
    venueId: Optional[str] = Query(None),
    eventId: Optional[str] = Query(None),
    startDate: Optional[date] = Query(None, description="Bookings starting on or after this day"),
    endDate: Optional[date] = Query(None, description="Bookings starting on or before this day"),
    db: Session = Depends(get_db)
):
    bookings = BookingService(db).list_bookings(
        search=search,
        event_type_id=eventTypeId,
        venue_id=venueId,
        event_id=eventId,
        start_date=startDate,
        end_date=endDate
    )
    return BookingsListResponse(
        bookings=[BookingResponse(**booking.to_dict(include_relations=True)) for booking in bookings]
    )


@router.post("", response_model=BookingCreateResponse, status_code=status.HTTP_201_CREATED)
def create_booking(booking_data: BookingCreate, db: Session = Depends(get_db)):
    booking = BookingService(db).create_booking(
        venue_id=booking_data.venueId,
        event_id=booking_data.eventId,
        start_time=booking_data.startTime,
        end_time=booking_data.endTime
    )
    return BookingCreateResponse(booking=BookingResponse(**booking.to_dict(include_relations=True)))


@router.get("/{booking_id}", response_model=BookingDetailResponse)
def get_booking(booking_id: str, db: Session = Depends(get_db)):
    booking = BookingService(db).get_booking(booking_id)
    return BookingDetailResponse(booking=BookingResponse(**booking.to_dict(include_relations=True)))


@router.put("/{booking_id}", response_model=BookingDetailResponse)
def update_booking(booking_id: str, booking_data: BookingUpdate, db: Session = Depends(get_db)):
    booking = BookingService(db).update_booking(
        booking_id,
        venue_id=booking_data.venueId,
        event_id=booking_data.eventId,
        start_time=booking_data.startTime,
        end_time=booking_data.endTime,
        expected_version=booking_data.version
    )
    return BookingDetailResponse(booking=BookingResponse(**booking.to_dict(include_relations=True)))


@router.delete("/{booking_id}")
def delete_booking(booking_id: str, db: Session = Depends(get_db)):
    BookingService(db).delete_booking(booking_id)
    return {"success": True, "message": "Booking deleted"}
