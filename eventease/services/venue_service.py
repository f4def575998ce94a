import logging
from typing import Optional, List, BinaryIO
from datetime import date, datetime, time, timedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eventease.core.exceptions import NotFoundError, ReferenceInUseError, StorageError
from eventease.models.booking import Booking
from eventease.models.venue import Venue
from eventease.repositories.booking_repository import BookingRepository
from eventease.repositories.venue_repository import VenueRepository
from eventease.schemas.venue import VenueCreate, VenueUpdate
from eventease.utils.blob_storage import BlobStorage, discard_image

logger = logging.getLogger(__name__)

VENUE_IMAGE_PREFIX = "venues"

# Optional columns a client may clear by sending null
CLEARABLE_FIELDS = {"description"}


class VenueService:
    
    def __init__(self, db: Session, storage: Optional[BlobStorage] = None):
        self.db = db
        self.venue_repo = VenueRepository(db)
        self.booking_repo = BookingRepository(db)
        self.storage = storage
    
    def list_venues(self, search: Optional[str] = None) -> List[Venue]:
        return self.venue_repo.get_all(search=search)
    
    def get_venue(self, venue_id: str) -> Venue:
        venue = self.venue_repo.get_by_id(venue_id)
        if not venue:
            raise NotFoundError("Venue", venue_id)
        return venue
    
    def create_venue(self, venue_data: VenueCreate) -> Venue:
        venue = self.venue_repo.create(
            name=venue_data.name,
            location=venue_data.location,
            capacity=venue_data.capacity,
            description=venue_data.description
        )
        logger.info(f"Venue {venue.id} ({venue.name}) created")
        return venue
    
    def update_venue(self, venue_id: str, venue_data: VenueUpdate) -> Venue:
        venue = self.get_venue(venue_id)
        
        changes = {
            key: value
            for key, value in venue_data.model_dump(exclude_unset=True).items()
            if value is not None or key in CLEARABLE_FIELDS
        }
        if not changes:
            return venue
        
        venue = self.venue_repo.update(venue, **changes)
        logger.info(f"Venue {venue.id} updated: {', '.join(sorted(changes))}")
        return venue
    
    def delete_venue(self, venue_id: str) -> None:
        venue = self.get_venue(venue_id)
        
        if self.venue_repo.count_bookings(venue.id) > 0:
            raise ReferenceInUseError("Cannot delete this venue as it has associated bookings.")
        
        if self.venue_repo.count_events(venue.id) > 0:
            raise ReferenceInUseError("Cannot delete this venue as events are still held there.")
        
        image_url = venue.image_url
        self.venue_repo.delete(venue)
        discard_image(self.storage, image_url)
        logger.info(f"Venue {venue_id} deleted")
    
    def get_bookings_on(self, venue_id: str, day: date) -> List[Booking]:
        """Bookings at the venue that take up any part of the given day."""
        venue = self.get_venue(venue_id)
        day_start = datetime.combine(day, time.min)
        day_end = day_start + timedelta(days=1)
        return self.booking_repo.find_by_venue_between(venue.id, day_start, day_end)
    
    def is_available(self, venue_id: str, day: date) -> bool:
        return not self.get_bookings_on(venue_id, day)
    
    def upload_image(
        self,
        venue_id: str,
        fileobj: BinaryIO,
        filename: str,
        content_type: str
    ) -> Venue:
        venue = self.get_venue(venue_id)
        storage = self._require_storage()
        
        old_url = venue.image_url
        new_url = storage.upload(fileobj, filename, content_type, prefix=VENUE_IMAGE_PREFIX)
        try:
            venue = self.venue_repo.update(venue, image_url=new_url)
        except SQLAlchemyError:
            self.db.rollback()
            discard_image(storage, new_url)
            raise
        discard_image(storage, old_url)
        return venue
    
    def remove_image(self, venue_id: str) -> Venue:
        venue = self.get_venue(venue_id)
        if not venue.image_url:
            return venue
        
        self._require_storage().delete(venue.image_url)
        return self.venue_repo.update(venue, image_url=None)
    
    def _require_storage(self) -> BlobStorage:
        if self.storage is None:
            raise StorageError("Image storage is not configured")
        return self.storage
