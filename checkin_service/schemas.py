"""Request and response schemas.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime

from pydantic import AwareDatetime, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class APIModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Stats(APIModel):
    """Check-in counters for an event, computed on read."""
    total: int
    checked_in: int
    absent: int


class EventRead(APIModel):
    """Event summary with its check-in stats."""
    id: str
    title: str
    starts_at: datetime
    ends_at: datetime
    location: str
    stats: Stats


class AttendeeRead(APIModel):
    id: str
    name: str
    email: str
    document: str
    checked_in_at: datetime | None = None


class AttendeePage(APIModel):
    """One page of attendee search results.

    ``total`` counts every match before pagination.
    """
    data: list[AttendeeRead]
    page: int
    limit: int
    total: int


class CheckInRequest(APIModel):
    # Optional so that a missing id is reported as 400, not a validation error
    attendee_id: str | None = None


class CheckInResponse(APIModel):
    attendee_id: str
    checked_in_at: datetime


class HealthResponse(APIModel):
    status: str
    time: datetime


class AttendeeSeed(APIModel):
    id: str
    name: str
    email: str
    document: str
    checked_in_at: AwareDatetime | None = None


class EventSeed(APIModel):
    """Shape of one event in seed data. Timestamps must carry an offset."""
    id: str
    title: str
    starts_at: AwareDatetime
    ends_at: AwareDatetime
    location: str
    attendees: list[AttendeeSeed] = []
