from typing import Optional, List, Tuple
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from eventease.models.venue import Venue
from eventease.models.booking import Booking
import uuid


class VenueRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_id(self, venue_id: str) -> Optional[Venue]:
        return self.db.query(Venue).filter(Venue.id == venue_id).first()
    
    def get_by_id_for_update(self, venue_id: str) -> Optional[Venue]:
        """Load the venue and lock its row until the transaction ends."""
        return self.db.query(Venue).filter(Venue.id == venue_id).with_for_update().first()
    
    def get_all(self, search: Optional[str] = None) -> List[Venue]:
        query = self.db.query(Venue)
        if search:
            search_pattern = f"%{search}%"
            query = query.filter(
                Venue.name.ilike(search_pattern) | Venue.location.ilike(search_pattern)
            )
        return query.order_by(Venue.name).all()
    
    def exists_by_id(self, venue_id: str) -> bool:
        return self.db.query(Venue.id).filter(Venue.id == venue_id).first() is not None
    
    def create(
        self,
        name: str,
        location: str,
        capacity: int,
        description: Optional[str] = None,
        image_url: Optional[str] = None
    ) -> Venue:
        venue_id = str(uuid.uuid4())
        
        venue = Venue(
            id=venue_id,
            name=name,
            location=location,
            capacity=capacity,
            description=description,
            image_url=image_url
        )
        
        try:
            self.db.add(venue)
            self.db.commit()
            self.db.refresh(venue)
            return venue
        except IntegrityError:
            self.db.rollback()
            raise
    
    def update(self, venue: Venue, **kwargs) -> Venue:
        for key, value in kwargs.items():
            if hasattr(venue, key) and key != 'id':
                setattr(venue, key, value)
        
        self.db.commit()
        self.db.refresh(venue)
        return venue
    
    def delete(self, venue: Venue) -> None:
        try:
            self.db.delete(venue)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
    
    def count(self) -> int:
        return self.db.query(Venue).count()
    
    def count_bookings(self, venue_id: str) -> int:
        return self.db.query(Booking).filter(Booking.venue_id == venue_id).count()
    
    def count_events(self, venue_id: str) -> int:
        from eventease.models.event import Event
        return self.db.query(Event).filter(Event.venue_id == venue_id).count()
    
    def get_most_booked(self, limit: int = 3) -> List[Tuple[Venue, int]]:
        booking_count = func.count(Booking.id).label("booking_count")
        rows = self.db.query(Venue, booking_count).outerjoin(
            Booking, Booking.venue_id == Venue.id
        ).group_by(Venue.id).order_by(
            booking_count.desc(), Venue.name
        ).limit(limit).all()
        return [(venue, count) for venue, count in rows]
