"""Event model for the event directory.

This module defines the Event model, the central entity of the service.
Events are loaded from seed data when the application starts and are
never created or deleted afterwards. The only state that changes at
runtime is the check-in timestamp of their attendees.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlmodel import Field, Relationship, SQLModel

from checkin_service.core.database import UTCDateTime

if TYPE_CHECKING:
    from checkin_service.models.attendee import Attendee


class Event(SQLModel, table=True):
    """An event with a fixed list of attendees.

    Attributes:
        row_id: Surrogate key. Follows seed insertion order, which is the
            order events are listed in.
        id: Public event identifier (e.g. "evt_123"), unique across the store.
        title: Event title.
        starts_at: When the event starts (timezone-aware).
        ends_at: When the event ends (timezone-aware).
        location: Where the event takes place.
        attendees: People registered for this event, in seed order.
    """
    row_id: int | None = Field(default=None, primary_key=True)
    id: str = Field(index=True, unique=True)
    title: str
    starts_at: datetime = Field(sa_type=UTCDateTime)
    ends_at: datetime = Field(sa_type=UTCDateTime)
    location: str

    # Relationships
    attendees: list["Attendee"] = Relationship(
        back_populates="event",
        sa_relationship_kwargs={"order_by": "Attendee.row_id"},
    )
