import logging
from typing import Optional, List
from datetime import date, datetime
from sqlalchemy.orm import Session

from eventease.core.exceptions import (
    ConcurrencyError,
    ConflictError,
    EventEaseError,
    NotFoundError,
    ValidationError,
)
from eventease.models.booking import Booking
from eventease.repositories.booking_repository import BookingRepository
from eventease.repositories.event_repository import EventRepository
from eventease.repositories.venue_repository import VenueRepository
from eventease.services.booking_validator import BookingCandidate, BookingValidator, ValidationResult
from eventease.utils.intervals import to_naive_utc

logger = logging.getLogger(__name__)


class BookingService:
    """
    Create, update and delete venue bookings.

    Create and update lock the venue row before reading its bookings and
    commit in the same transaction, so two writers for one venue cannot both
    pass the overlap check. SQLite ignores the lock.
    """

    def __init__(self, db: Session, validator: Optional[BookingValidator] = None):
        self.db = db
        self.booking_repo = BookingRepository(db)
        self.venue_repo = VenueRepository(db)
        self.event_repo = EventRepository(db)
        self.validator = validator or BookingValidator()

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get_by_id(booking_id, include_relations=True)
        if not booking:
            raise NotFoundError("Booking", booking_id)
        return booking

    def list_bookings(
        self,
        search: Optional[str] = None,
        event_type_id: Optional[str] = None,
        venue_id: Optional[str] = None,
        event_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> List[Booking]:
        if start_date and end_date and end_date < start_date:
            raise ValidationError(["end_date must not be before start_date"])

        return self.booking_repo.search(
            search=search,
            event_type_id=event_type_id,
            venue_id=venue_id,
            event_id=event_id,
            start_date=start_date,
            end_date=end_date
        )

    def create_booking(
        self,
        venue_id: Optional[str],
        event_id: Optional[str],
        start_time: Optional[datetime],
        end_time: Optional[datetime]
    ) -> Booking:
        candidate = self._build_candidate(venue_id, event_id, start_time, end_time)
        self._raise_for(self.validator.validate(candidate, []), candidate)

        try:
            self._lock_venue_and_check_event(candidate.venue_id, candidate.event_id)
            existing = self.booking_repo.find_by_venue(candidate.venue_id)
            self._raise_for(self.validator.validate(candidate, existing), candidate)
        except EventEaseError:
            # Release the venue lock before reporting
            self.db.rollback()
            raise

        booking = self.booking_repo.create(
            venue_id=candidate.venue_id,
            event_id=candidate.event_id,
            start_time=candidate.start_time,
            end_time=candidate.end_time
        )

        logger.info(
            f"Booking {booking.reference} created for venue {booking.venue_id} "
            f"from {booking.start_time.isoformat()} to {booking.end_time.isoformat()}"
        )
        return booking

    def update_booking(
        self,
        booking_id: str,
        venue_id: Optional[str],
        event_id: Optional[str],
        start_time: Optional[datetime],
        end_time: Optional[datetime],
        expected_version: Optional[int] = None
    ) -> Booking:
        booking = self.booking_repo.get_by_id(booking_id, include_relations=False)
        if not booking:
            raise NotFoundError("Booking", booking_id)

        if expected_version is not None and expected_version != booking.version:
            logger.info(
                f"Rejected update of booking {booking.reference}: "
                f"client version {expected_version}, stored version {booking.version}"
            )
            raise ConcurrencyError()

        candidate = self._build_candidate(venue_id, event_id, start_time, end_time, booking_id=booking.id)
        self._raise_for(self.validator.validate(candidate, []), candidate)

        try:
            self._lock_venue_and_check_event(candidate.venue_id, candidate.event_id)
            existing = self.booking_repo.find_by_venue(candidate.venue_id)
            self._raise_for(self.validator.validate(candidate, existing), candidate)
        except EventEaseError:
            self.db.rollback()
            raise

        booking = self.booking_repo.update(
            booking,
            venue_id=candidate.venue_id,
            event_id=candidate.event_id,
            start_time=candidate.start_time,
            end_time=candidate.end_time
        )

        logger.info(f"Booking {booking.reference} updated (version {booking.version})")
        return booking

    def delete_booking(self, booking_id: str) -> None:
        booking = self.booking_repo.get_by_id(booking_id, include_relations=False)
        if not booking:
            raise NotFoundError("Booking", booking_id)

        reference = booking.reference
        self.booking_repo.delete(booking)
        logger.info(f"Booking {reference} deleted")

    def _build_candidate(
        self,
        venue_id: Optional[str],
        event_id: Optional[str],
        start_time: Optional[datetime],
        end_time: Optional[datetime],
        booking_id: Optional[str] = None
    ) -> BookingCandidate:
        return BookingCandidate(
            venue_id=venue_id,
            event_id=event_id,
            start_time=to_naive_utc(start_time) if start_time else None,
            end_time=to_naive_utc(end_time) if end_time else None,
            booking_id=booking_id
        )

    def _lock_venue_and_check_event(self, venue_id: str, event_id: str) -> None:
        if not self.venue_repo.get_by_id_for_update(venue_id):
            raise NotFoundError("Venue", venue_id)

        if not self.event_repo.exists_by_id(event_id):
            raise NotFoundError("Event", event_id)

    def _raise_for(self, result: ValidationResult, candidate: BookingCandidate) -> None:
        if result.errors:
            raise ValidationError(result.errors)

        if result.has_conflict:
            references = [conflict.reference for conflict in result.conflicts]
            logger.info(
                f"Rejected booking for venue {candidate.venue_id} "
                f"({candidate.start_time} - {candidate.end_time}): overlaps {', '.join(references)}"
            )
            raise ConflictError(result.conflict_message, conflicting_references=references)
