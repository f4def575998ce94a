from typing import Optional, List
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import IntegrityError
from sqlalchemy import or_
from datetime import date
from eventease.models.event import Event, DEFAULT_EVENT_IMAGE
from eventease.models.booking import Booking
import uuid


class EventRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_id(self, event_id: str, include_relations: bool = True) -> Optional[Event]:
        query = self.db.query(Event).filter(Event.id == event_id)
        if include_relations:
            query = query.options(
                joinedload(Event.venue),
                joinedload(Event.event_type)
            )
        return query.first()
    
    def get_all(
        self,
        search: Optional[str] = None,
        event_type_id: Optional[str] = None,
        venue_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Event]:
        query = self.db.query(Event)
        
        if search:
            search_pattern = f"%{search}%"
            query = query.filter(
                or_(
                    Event.name.ilike(search_pattern),
                    Event.title.ilike(search_pattern),
                    Event.description.ilike(search_pattern)
                )
            )
        
        if event_type_id:
            query = query.filter(Event.event_type_id == event_type_id)
        
        if venue_id:
            query = query.filter(Event.venue_id == venue_id)
        
        if start_date:
            query = query.filter(Event.date >= start_date)
        
        if end_date:
            query = query.filter(Event.date <= end_date)
        
        return query.options(
            joinedload(Event.venue),
            joinedload(Event.event_type)
        ).order_by(Event.date, Event.name).all()
    
    def exists_by_id(self, event_id: str) -> bool:
        return self.db.query(Event.id).filter(Event.id == event_id).first() is not None
    
    def create(
        self,
        name: str,
        title: str,
        event_date: date,
        description: str,
        venue_id: str,
        event_type_id: str,
        image_url: Optional[str] = None
    ) -> Event:
        event_id = str(uuid.uuid4())
        
        event = Event(
            id=event_id,
            name=name,
            title=title,
            date=event_date,
            description=description,
            venue_id=venue_id,
            event_type_id=event_type_id,
            image_url=image_url or DEFAULT_EVENT_IMAGE
        )
        
        try:
            self.db.add(event)
            self.db.commit()
            self.db.refresh(event)
            return event
        except IntegrityError:
            self.db.rollback()
            raise
    
    def update(self, event: Event, **kwargs) -> Event:
        for key, value in kwargs.items():
            if hasattr(event, key) and key != 'id':
                setattr(event, key, value)
        
        self.db.commit()
        self.db.refresh(event)
        return event
    
    def delete(self, event: Event) -> None:
        try:
            self.db.delete(event)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
    
    def count(self) -> int:
        return self.db.query(Event).count()
    
    def count_bookings(self, event_id: str) -> int:
        return self.db.query(Booking).filter(Booking.event_id == event_id).count()
    
    def get_upcoming(self, from_date: date, limit: int = 3) -> List[Event]:
        return self.db.query(Event).filter(
            Event.date >= from_date
        ).options(
            joinedload(Event.venue)
        ).order_by(Event.date, Event.name).limit(limit).all()
