"""
Booking validation rules.

Each rule is a plain function taking the candidate (and, for the overlap
rule, the existing bookings) and returning a list of error messages. The
validator runs them in a fixed order and collects every failure before
reporting. Existing bookings are always passed in by the caller; nothing
here reads from the database.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from eventease.models.booking import Booking
from eventease.utils.intervals import find_overlapping


CONFLICT_MESSAGE = "time slot conflicts with an existing booking for this venue"


@dataclass
class BookingCandidate:
    venue_id: Optional[str]
    event_id: Optional[str]
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    booking_id: Optional[str] = None  # None for a booking that is not saved yet


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    conflicts: List[Booking] = field(default_factory=list)

    @property
    def has_conflict(self) -> bool:
        return bool(self.conflicts)

    @property
    def is_valid(self) -> bool:
        return not self.errors and not self.conflicts

    @property
    def conflict_message(self) -> Optional[str]:
        return CONFLICT_MESSAGE if self.conflicts else None


def check_required_fields(candidate: BookingCandidate) -> List[str]:
    errors = []
    if not candidate.venue_id:
        errors.append("Venue is required")
    if not candidate.event_id:
        errors.append("Event is required")
    if candidate.start_time is None:
        errors.append("Start time is required")
    if candidate.end_time is None:
        errors.append("End time is required")
    return errors


def check_time_range(candidate: BookingCandidate) -> List[str]:
    if candidate.start_time is None or candidate.end_time is None:
        return []
    if candidate.end_time <= candidate.start_time:
        return ["End time must be after start time"]
    return []


def find_conflicts(candidate: BookingCandidate, existing: Sequence[Booking]) -> List[Booking]:
    others = [
        booking for booking in existing
        if booking.venue_id == candidate.venue_id and booking.id != candidate.booking_id
    ]
    return find_overlapping(candidate.start_time, candidate.end_time, others)


FIELD_RULES: List[Callable[[BookingCandidate], List[str]]] = [
    check_required_fields,
    check_time_range,
]


class BookingValidator:
    
    def __init__(self, rules: Optional[List[Callable[[BookingCandidate], List[str]]]] = None):
        self.rules = rules if rules is not None else FIELD_RULES
    
    def validate(self, candidate: BookingCandidate, existing: Sequence[Booking]) -> ValidationResult:
        result = ValidationResult()
        
        for rule in self.rules:
            result.errors.extend(rule(candidate))
        
        # An interval that failed the field rules has no meaningful overlap
        if result.errors:
            return result
        
        result.conflicts = find_conflicts(candidate, existing)
        return result
