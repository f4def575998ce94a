import logging
from typing import List
from sqlalchemy.orm import Session

from eventease.core.exceptions import AlreadyExistsError, NotFoundError, ReferenceInUseError
from eventease.models.event_type import EventType
from eventease.repositories.event_type_repository import EventTypeRepository
from eventease.schemas.event_type import EventTypeCreate, EventTypeUpdate

logger = logging.getLogger(__name__)


class EventTypeService:
    
    def __init__(self, db: Session):
        self.db = db
        self.event_type_repo = EventTypeRepository(db)
    
    def list_event_types(self) -> List[EventType]:
        return self.event_type_repo.get_all()
    
    def get_event_type(self, event_type_id: str) -> EventType:
        event_type = self.event_type_repo.get_by_id(event_type_id)
        if not event_type:
            raise NotFoundError("Event type", event_type_id)
        return event_type
    
    def create_event_type(self, event_type_data: EventTypeCreate) -> EventType:
        name = event_type_data.name.strip()
        if self.event_type_repo.get_by_name(name):
            raise AlreadyExistsError(f"Event type '{name}' already exists")
        
        event_type = self.event_type_repo.create(name=name)
        logger.info(f"Event type {event_type.id} ({event_type.name}) created")
        return event_type
    
    def update_event_type(self, event_type_id: str, event_type_data: EventTypeUpdate) -> EventType:
        event_type = self.get_event_type(event_type_id)
        name = event_type_data.name.strip()
        
        existing = self.event_type_repo.get_by_name(name)
        if existing and existing.id != event_type.id:
            raise AlreadyExistsError(f"Event type '{name}' already exists")
        
        return self.event_type_repo.update(event_type, name=name)
    
    def delete_event_type(self, event_type_id: str) -> None:
        event_type = self.get_event_type(event_type_id)
        
        events_count = self.event_type_repo.count_events_using_type(event_type.id)
        if events_count > 0:
            raise ReferenceInUseError(
                f"Cannot delete event type '{event_type.name}': {events_count} event(s) still use it."
            )
        
        self.event_type_repo.delete(event_type)
        logger.info(f"Event type {event_type_id} deleted")
