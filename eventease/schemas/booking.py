from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class BookingCreate(BaseModel):
    # Presence and ordering are checked by BookingValidator so that every
    # failing rule is reported together
    venueId: Optional[str] = None
    eventId: Optional[str] = None
    startTime: Optional[datetime] = None
    endTime: Optional[datetime] = None


class BookingUpdate(BookingCreate):
    version: Optional[int] = Field(
        None,
        ge=1,
        description="Version the client last read; a mismatch is rejected as a concurrent update"
    )


class BookingVenueInfo(BaseModel):
    id: str
    name: str
    location: str


class BookingEventInfo(BaseModel):
    id: str
    name: str
    title: str
    date: Optional[str] = None


class BookingResponse(BaseModel):
    id: str
    reference: str
    startTime: str
    endTime: str
    venueId: str
    eventId: str
    version: int
    bookingDate: Optional[str] = None
    updatedAt: Optional[str] = None
    venue: Optional[BookingVenueInfo] = None
    event: Optional[BookingEventInfo] = None
    
    class Config:
        from_attributes = True


class BookingCreateResponse(BaseModel):
    success: bool = True
    message: str = "Booking successfully created."
    booking: BookingResponse


class BookingDetailResponse(BaseModel):
    success: bool = True
    booking: BookingResponse


class BookingsListResponse(BaseModel):
    success: bool = True
    bookings: List[BookingResponse]
