from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from eventease.models.event_type import EventType
import uuid


class EventTypeRepository:
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_id(self, event_type_id: str) -> Optional[EventType]:
        return self.db.query(EventType).filter(EventType.id == event_type_id).first()
    
    def get_by_name(self, name: str) -> Optional[EventType]:
        return self.db.query(EventType).filter(EventType.name == name).first()
    
    def get_all(self) -> List[EventType]:
        return self.db.query(EventType).order_by(EventType.name).all()
    
    def create(self, name: str) -> EventType:
        event_type = EventType(id=str(uuid.uuid4()), name=name)
        
        try:
            self.db.add(event_type)
            self.db.commit()
            self.db.refresh(event_type)
            return event_type
        except IntegrityError:
            self.db.rollback()
            raise
    
    def update(self, event_type: EventType, **kwargs) -> EventType:
        for key, value in kwargs.items():
            if hasattr(event_type, key) and key != 'id':
                setattr(event_type, key, value)
        
        try:
            self.db.commit()
            self.db.refresh(event_type)
            return event_type
        except IntegrityError:
            self.db.rollback()
            raise
    
    def delete(self, event_type: EventType) -> None:
        self.db.delete(event_type)
        self.db.commit()
    
    def count_events_using_type(self, event_type_id: str) -> int:
        from eventease.models.event import Event
        return self.db.query(Event).filter(Event.event_type_id == event_type_id).count()
