from pydantic import BaseModel, Field
from typing import Optional, List
import datetime as dt


class EventBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=150)
    date: dt.date
    description: str = Field(..., min_length=1)
    venueId: str
    eventTypeId: str


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    title: Optional[str] = Field(None, min_length=1, max_length=150)
    date: Optional[dt.date] = None
    description: Optional[str] = Field(None, min_length=1)
    venueId: Optional[str] = None
    eventTypeId: Optional[str] = None


class VenueInfo(BaseModel):
    id: str
    name: str
    location: str


class EventTypeInfo(BaseModel):
    id: str
    name: str


class EventResponse(BaseModel):
    id: str
    name: str
    title: str
    date: str
    description: str
    imageUrl: Optional[str] = None
    venueId: str
    eventTypeId: str
    venue: Optional[VenueInfo] = None
    eventType: Optional[EventTypeInfo] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    
    class Config:
        from_attributes = True


class EventDetailResponse(BaseModel):
    success: bool = True
    event: EventResponse


class EventsResponse(BaseModel):
    success: bool = True
    events: List[EventResponse]
