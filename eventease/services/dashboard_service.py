import logging
from typing import Optional
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventease.core.config import settings
from eventease.repositories.booking_repository import BookingRepository
from eventease.repositories.event_repository import EventRepository
from eventease.repositories.venue_repository import VenueRepository
from eventease.utils.intervals import utc_now

logger = logging.getLogger(__name__)


class DashboardService:
    
    def __init__(self, db: Session):
        self.db = db
        self.booking_repo = BookingRepository(db)
        self.event_repo = EventRepository(db)
        self.venue_repo = VenueRepository(db)
    
    def get_summary(self, now: Optional[datetime] = None) -> dict:
        now = now or utc_now()
        
        recent_bookings = [
            {
                "id": booking.id,
                "reference": booking.reference,
                "eventName": booking.event.name if booking.event else None,
                "venueName": booking.venue.name if booking.venue else None,
                "startTime": booking.start_time.isoformat(),
                "endTime": booking.end_time.isoformat(),
            }
            for booking in self.booking_repo.get_recent(limit=5)
        ]
        
        upcoming_events = [
            {
                "id": event.id,
                "name": event.name,
                "date": event.date.isoformat(),
                "imageUrl": event.image_url,
                "venueName": event.venue.name if event.venue else None,
            }
            for event in self.event_repo.get_upcoming(from_date=now.date(), limit=3)
        ]
        
        popular_venues = [
            {
                "id": venue.id,
                "name": venue.name,
                "location": venue.location,
                "imageUrl": venue.image_url,
                "bookingCount": booking_count,
            }
            for venue, booking_count in self.venue_repo.get_most_booked(limit=3)
        ]
        
        return {
            "statistics": {
                "venueCount": self.venue_repo.count(),
                "eventCount": self.event_repo.count(),
                "bookingCount": self.booking_repo.count(),
                "upcomingBookingCount": self.booking_repo.count_starting_after(now),
                "pastBookingCount": self.booking_repo.count_starting_until(now),
            },
            "recentBookings": recent_bookings,
            "upcomingEvents": upcoming_events,
            "popularVenues": popular_venues,
            "databaseConnected": self.is_database_connected(),
            "version": settings.APP_VERSION,
            "lastUpdate": now.strftime("%B %d, %Y"),
        }
    
    def is_database_connected(self) -> bool:
        try:
            self.db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connectivity check failed: {str(e)}")
            return False
