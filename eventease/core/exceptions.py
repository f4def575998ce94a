"""Typed errors raised by services and mapped to HTTP responses in main.py."""

from enum import Enum
from typing import List, Optional


class ErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    BOOKING_CONFLICT = "BOOKING_CONFLICT"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"
    REFERENCE_IN_USE = "REFERENCE_IN_USE"
    STORAGE_ERROR = "STORAGE_ERROR"
    ALREADY_EXISTS = "ALREADY_EXISTS"


class EventEaseError(Exception):
    """Base error with a code and a user-safe message."""

    code: ErrorCode = ErrorCode.VALIDATION_ERROR
    status_code: int = 400

    def __init__(self, message: str, details: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or []

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(EventEaseError):
    """Missing or invalid fields. The caller can fix them and resubmit."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 422

    def __init__(self, errors: List[str]) -> None:
        message = errors[0] if len(errors) == 1 else "Booking failed validation"
        super().__init__(message, details=errors)
        self.errors = errors


class NotFoundError(EventEaseError):
    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[str] = None) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(EventEaseError):
    """The requested time slot overlaps an existing booking for the venue."""

    code = ErrorCode.BOOKING_CONFLICT
    status_code = 409

    def __init__(self, message: str, conflicting_references: Optional[List[str]] = None) -> None:
        super().__init__(message, details=conflicting_references)
        self.conflicting_references = conflicting_references or []


class ConcurrencyError(EventEaseError):
    """The record changed or disappeared since it was read. Re-fetch and retry."""

    code = ErrorCode.CONCURRENCY_CONFLICT
    status_code = 409

    def __init__(self, message: str = "The booking was modified by another request. Reload it and try again.") -> None:
        super().__init__(message)


class ReferenceInUseError(EventEaseError):
    """Delete refused because other records still reference the target."""

    code = ErrorCode.REFERENCE_IN_USE
    status_code = 409


class StorageError(EventEaseError):
    code = ErrorCode.STORAGE_ERROR
    status_code = 502


class AlreadyExistsError(EventEaseError):
    code = ErrorCode.ALREADY_EXISTS
    status_code = 409
