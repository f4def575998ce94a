from typing import Optional, List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_
from datetime import date, datetime, time, timedelta
from eventease.core.exceptions import ConcurrencyError
from eventease.models.booking import Booking
from eventease.models.event import Event
from eventease.models.venue import Venue
import uuid


class BookingRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_id(self, booking_id: str, include_relations: bool = True) -> Optional[Booking]:
        query = self.db.query(Booking).filter(Booking.id == booking_id)
        if include_relations:
            query = query.options(
                joinedload(Booking.venue),
                joinedload(Booking.event)
            )
        return query.first()
    
    def exists_by_id(self, booking_id: str) -> bool:
        return self.db.query(Booking.id).filter(Booking.id == booking_id).first() is not None
    
    def find_by_venue(self, venue_id: str) -> List[Booking]:
        return self.db.query(Booking).filter(
            Booking.venue_id == venue_id
        ).order_by(Booking.start_time).all()
    
    def find_by_venue_between(self, venue_id: str, start: datetime, end: datetime) -> List[Booking]:
        """Bookings at the venue whose interval overlaps [start, end)."""
        return self.db.query(Booking).filter(
            Booking.venue_id == venue_id,
            Booking.start_time < end,
            Booking.end_time > start
        ).order_by(Booking.start_time).all()
    
    def search(
        self,
        search: Optional[str] = None,
        event_type_id: Optional[str] = None,
        venue_id: Optional[str] = None,
        event_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Booking]:
        query = self.db.query(Booking).join(Venue, Booking.venue_id == Venue.id).join(
            Event, Booking.event_id == Event.id
        )
        
        if search:
            search_pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Venue.name.ilike(search_pattern),
                    Event.name.ilike(search_pattern),
                    Booking.reference.ilike(search_pattern)
                )
            )
        
        if event_type_id:
            query = query.filter(Event.event_type_id == event_type_id)
        
        if venue_id:
            query = query.filter(Booking.venue_id == venue_id)
        
        if event_id:
            query = query.filter(Booking.event_id == event_id)
        
        if start_date:
            query = query.filter(Booking.start_time >= datetime.combine(start_date, time.min))
        
        if end_date:
            # end_date is inclusive
            query = query.filter(
                Booking.start_time < datetime.combine(end_date + timedelta(days=1), time.min)
            )
        
        return query.options(
            joinedload(Booking.venue),
            joinedload(Booking.event)
        ).order_by(Booking.start_time).all()
    
    def create(
        self,
        venue_id: str,
        event_id: str,
        start_time: datetime,
        end_time: datetime,
        reference: Optional[str] = None
    ) -> Booking:
        booking = Booking(
            id=str(uuid.uuid4()),
            reference=reference or str(uuid.uuid4()),
            venue_id=venue_id,
            event_id=event_id,
            start_time=start_time,
            end_time=end_time
        )
        
        try:
            self.db.add(booking)
            self.db.commit()
            self.db.refresh(booking)
            return booking
        except IntegrityError:
            self.db.rollback()
            raise
    
    def update(self, booking: Booking, **kwargs) -> Booking:
        for key, value in kwargs.items():
            if hasattr(booking, key) and key not in ['id', 'reference', 'version']:
                setattr(booking, key, value)
        
        try:
            self.db.commit()
        except StaleDataError:
            # Row was changed or deleted by another session since it was read
            self.db.rollback()
            raise ConcurrencyError()
        except IntegrityError:
            self.db.rollback()
            raise
        
        self.db.refresh(booking)
        return booking
    
    def delete(self, booking: Booking) -> None:
        try:
            self.db.delete(booking)
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            raise ConcurrencyError("The booking was already modified or removed by another request.")
    
    def count(self) -> int:
        return self.db.query(Booking).count()
    
    def count_starting_after(self, moment: datetime) -> int:
        return self.db.query(Booking).filter(Booking.start_time > moment).count()
    
    def count_starting_until(self, moment: datetime) -> int:
        return self.db.query(Booking).filter(Booking.start_time <= moment).count()
    
    def get_recent(self, limit: int = 5) -> List[Booking]:
        return self.db.query(Booking).options(
            joinedload(Booking.venue),
            joinedload(Booking.event)
        ).order_by(Booking.start_time.desc()).limit(limit).all()
