import logging
from typing import Optional, List, BinaryIO
from datetime import date
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventease.core.exceptions import NotFoundError, ReferenceInUseError, StorageError, ValidationError
from eventease.models.event import Event, DEFAULT_EVENT_IMAGE
from eventease.repositories.event_repository import EventRepository
from eventease.repositories.event_type_repository import EventTypeRepository
from eventease.repositories.venue_repository import VenueRepository
from eventease.schemas.event import EventCreate, EventUpdate
from eventease.utils.blob_storage import BlobStorage, discard_image

logger = logging.getLogger(__name__)

EVENT_IMAGE_PREFIX = "events"

# Request field name -> model column
UPDATABLE_FIELDS = {
    "name": "name",
    "title": "title",
    "date": "date",
    "description": "description",
    "venueId": "venue_id",
    "eventTypeId": "event_type_id",
}


class EventService:
    
    def __init__(self, db: Session, storage: Optional[BlobStorage] = None):
        self.db = db
        self.event_repo = EventRepository(db)
        self.event_type_repo = EventTypeRepository(db)
        self.venue_repo = VenueRepository(db)
        self.storage = storage
    
    def list_events(
        self,
        search: Optional[str] = None,
        event_type_id: Optional[str] = None,
        venue_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Event]:
        if start_date and end_date and end_date < start_date:
            raise ValidationError(["end_date must not be before start_date"])
        
        return self.event_repo.get_all(
            search=search,
            event_type_id=event_type_id,
            venue_id=venue_id,
            start_date=start_date,
            end_date=end_date
        )
    
    def get_event(self, event_id: str) -> Event:
        event = self.event_repo.get_by_id(event_id, include_relations=True)
        if not event:
            raise NotFoundError("Event", event_id)
        return event
    
    def create_event(self, event_data: EventCreate) -> Event:
        self._check_references(event_data.venueId, event_data.eventTypeId)
        
        event = self.event_repo.create(
            name=event_data.name,
            title=event_data.title,
            event_date=event_data.date,
            description=event_data.description,
            venue_id=event_data.venueId,
            event_type_id=event_data.eventTypeId
        )
        logger.info(f"Event {event.id} ({event.name}) created at venue {event.venue_id}")
        return event
    
    def update_event(self, event_id: str, event_data: EventUpdate) -> Event:
        event = self.get_event(event_id)
        
        provided = event_data.model_dump(exclude_unset=True, exclude_none=True)
        changes = {UPDATABLE_FIELDS[key]: value for key, value in provided.items()}
        if not changes:
            return event
        
        self._check_references(changes.get("venue_id"), changes.get("event_type_id"))
        
        event = self.event_repo.update(event, **changes)
        logger.info(f"Event {event.id} updated: {', '.join(sorted(changes))}")
        return event
    
    def delete_event(self, event_id: str) -> None:
        event = self.get_event(event_id)
        
        if self.event_repo.count_bookings(event.id) > 0:
            raise ReferenceInUseError("Cannot delete this event as it has associated bookings.")
        
        image_url = event.image_url if event.has_custom_image else None
        self.event_repo.delete(event)
        discard_image(self.storage, image_url)
        logger.info(f"Event {event_id} deleted")
    
    def upload_image(
        self,
        event_id: str,
        fileobj: BinaryIO,
        filename: str,
        content_type: str
    ) -> Event:
        event = self.get_event(event_id)
        storage = self._require_storage()
        
        old_url = event.image_url if event.has_custom_image else None
        new_url = storage.upload(fileobj, filename, content_type, prefix=EVENT_IMAGE_PREFIX)
        try:
            event = self.event_repo.update(event, image_url=new_url)
        except SQLAlchemyError:
            self.db.rollback()
            discard_image(storage, new_url)
            raise
        discard_image(storage, old_url)
        return event
    
    def remove_image(self, event_id: str) -> Event:
        event = self.get_event(event_id)
        if not event.has_custom_image:
            return event
        
        self._require_storage().delete(event.image_url)
        return self.event_repo.update(event, image_url=DEFAULT_EVENT_IMAGE)
    
    def _check_references(self, venue_id: Optional[str], event_type_id: Optional[str]) -> None:
        if venue_id is not None and not self.venue_repo.exists_by_id(venue_id):
            raise NotFoundError("Venue", venue_id)
        
        if event_type_id is not None and not self.event_type_repo.get_by_id(event_type_id):
            raise NotFoundError("Event type", event_type_id)
    
    def _require_storage(self) -> BlobStorage:
        if self.storage is None:
            raise StorageError("Image storage is not configured")
        return self.storage
