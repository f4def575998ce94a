from pydantic import BaseModel
from typing import List, Optional


class RecentBooking(BaseModel):
    id: str
    reference: str
    eventName: Optional[str] = None
    venueName: Optional[str] = None
    startTime: str
    endTime: str


class UpcomingEvent(BaseModel):
    id: str
    name: str
    date: str
    imageUrl: Optional[str] = None
    venueName: Optional[str] = None


class PopularVenue(BaseModel):
    id: str
    name: str
    location: str
    imageUrl: Optional[str] = None
    bookingCount: int


class DashboardStatistics(BaseModel):
    venueCount: int
    eventCount: int
    bookingCount: int
    upcomingBookingCount: int
    pastBookingCount: int


class DashboardResponse(BaseModel):
    success: bool = True
    statistics: DashboardStatistics
    recentBookings: List[RecentBooking]
    upcomingEvents: List[UpcomingEvent]
    popularVenues: List[PopularVenue]
    databaseConnected: bool
    version: str
    lastUpdate: str
