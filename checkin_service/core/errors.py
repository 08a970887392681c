"""Domain errors for the event directory.

Each error carries a stable code, a user-safe message and the HTTP status
it is reported with. Errors are raised by the store and rendered by the
exception handler registered in ``checkin_service.main``.
"""

from datetime import datetime
from enum import Enum

from pydantic import TypeAdapter

_timestamp = TypeAdapter(datetime)


class ErrorCode(Enum):
    """Domain error codes."""

    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    MISSING_FIELD = "MISSING_FIELD"
    ATTENDEE_NOT_IN_EVENT = "ATTENDEE_NOT_IN_EVENT"
    ALREADY_CHECKED_IN = "ALREADY_CHECKED_IN"
    INVALID_REQUEST = "INVALID_REQUEST"


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    status_code: int = 400

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"

    def to_content(self) -> dict:
        """JSON body for the error response."""
        return {"detail": self.message, "code": self.code.value}


class EventNotFoundError(DomainError):
    """Raised when an event is not found."""

    status_code = 404

    def __init__(self, event_id: str) -> None:
        super().__init__(ErrorCode.EVENT_NOT_FOUND, "Event not found")
        self.event_id = event_id


class MissingFieldError(DomainError):
    """Raised when a required request field is absent or empty."""

    status_code = 400

    def __init__(self, field: str) -> None:
        super().__init__(ErrorCode.MISSING_FIELD, f"{field} is required")
        self.field = field


class AttendeeNotInEventError(DomainError):
    """Raised when an attendee id does not belong to the event."""

    status_code = 422

    def __init__(self, event_id: str, attendee_id: str) -> None:
        super().__init__(ErrorCode.ATTENDEE_NOT_IN_EVENT, "Attendee not in this event")
        self.event_id = event_id
        self.attendee_id = attendee_id


class AlreadyCheckedInError(DomainError):
    """Raised on a repeated check-in. Carries the original timestamp."""

    status_code = 409

    def __init__(self, attendee_id: str, checked_in_at: datetime) -> None:
        super().__init__(ErrorCode.ALREADY_CHECKED_IN, "Attendee already checked in")
        self.attendee_id = attendee_id
        self.checked_in_at = checked_in_at

    def to_content(self) -> dict:
        content = super().to_content()
        content["attendeeId"] = self.attendee_id
        content["checkedInAt"] = _timestamp.dump_python(self.checked_in_at, mode="json")
        return content
