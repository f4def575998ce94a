import logging
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy.orm import Session

from eventease.repositories.booking_repository import BookingRepository
from eventease.repositories.event_repository import EventRepository
from eventease.repositories.event_type_repository import EventTypeRepository
from eventease.repositories.venue_repository import VenueRepository
from eventease.utils.intervals import utc_now

logger = logging.getLogger(__name__)

DEFAULT_EVENT_TYPES = ["Conference", "Wedding", "Concert", "Workshop", "Exhibition"]


def get_seed_venues():
    return [
        {
            "name": "Grand Ballroom",
            "location": "123 Main Street, Downtown",
            "capacity": 500,
            "description": "Elegant ballroom with crystal chandeliers",
        },
        {
            "name": "Tech Conference Center",
            "location": "456 Innovation Drive",
            "capacity": 300,
            "description": "Modern conference space with AV equipment",
        },
        {
            "name": "Garden Pavilion",
            "location": "789 Park Avenue",
            "capacity": 150,
            "description": "Outdoor venue with beautiful gardens",
        },
    ]


def get_seed_events():
    return [
        {
            "name": "Annual Tech Summit",
            "title": "Annual Tech Summit",
            "description": "The biggest technology conference of the year",
            "event_type": "Conference",
            "days_ahead": 7,
        },
        {
            "name": "Wedding Expo",
            "title": "Wedding Expo",
            "description": "Showcase of wedding vendors and services",
            "event_type": "Exhibition",
            "days_ahead": 14,
        },
        {
            "name": "Music Festival",
            "title": "Music Festival",
            "description": "Three days of live music performances",
            "event_type": "Concert",
            "days_ahead": 21,
        },
    ]


def seed_database(db: Session, now: Optional[datetime] = None) -> bool:
    """
    Insert demo venues, event types, events and bookings.
    Does nothing unless the database has no venues. Returns True if it seeded.
    """
    venue_repo = VenueRepository(db)
    if venue_repo.count() > 0:
        return False

    today = (now or utc_now()).replace(hour=0, minute=0, second=0, microsecond=0)

    event_type_repo = EventTypeRepository(db)
    event_types = {}
    for name in DEFAULT_EVENT_TYPES:
        event_types[name] = event_type_repo.get_by_name(name) or event_type_repo.create(name=name)

    venues = [venue_repo.create(**venue_data) for venue_data in get_seed_venues()]

    event_repo = EventRepository(db)
    events = []
    for venue, event_data in zip(venues, get_seed_events()):
        events.append(event_repo.create(
            name=event_data["name"],
            title=event_data["title"],
            event_date=(today + timedelta(days=event_data["days_ahead"])).date(),
            description=event_data["description"],
            venue_id=venue.id,
            event_type_id=event_types[event_data["event_type"]].id
        ))

    booking_repo = BookingRepository(db)
    slots = [
        (today + timedelta(days=7, hours=9), today + timedelta(days=7, hours=17)),
        (today + timedelta(days=14, hours=10), today + timedelta(days=14, hours=16)),
        (today + timedelta(days=21, hours=12), today + timedelta(days=23, hours=22)),
    ]
    for venue, event, (start, end) in zip(venues, events, slots):
        booking_repo.create(venue_id=venue.id, event_id=event.id, start_time=start, end_time=end)

    logger.info(f"Seeded {len(venues)} venues, {len(events)} events and {len(slots)} bookings")
    return True
