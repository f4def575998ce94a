"""Half-open time interval helpers used by booking conflict checks."""
from datetime import datetime, timezone
from typing import Iterable, List, TypeVar

T = TypeVar("T")


def intervals_overlap(
    a_start: datetime,
    a_end: datetime,
    b_start: datetime,
    b_end: datetime
) -> bool:
    """
    Return True if [a_start, a_end) and [b_start, b_end) share an instant.

    Touching intervals (a_end == b_start) do not overlap.
    """
    return a_start < b_end and a_end > b_start


def find_overlapping(start: datetime, end: datetime, items: Iterable[T]) -> List[T]:
    """Return the items whose [start_time, end_time) overlaps [start, end)."""
    return [
        item for item in items
        if intervals_overlap(start, end, item.start_time, item.end_time)
    ]


def to_naive_utc(value: datetime) -> datetime:
    """Bookings are stored as naive UTC; convert aware datetimes to match."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def utc_now() -> datetime:
    """Current time as naive UTC, matching stored booking times."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
