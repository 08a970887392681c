"""Attendee model for tracking event check-ins.

This module defines the Attendee model which represents a person
registered for an event. An attendee starts out not checked in and moves
to checked in exactly once, when the check-in timestamp is set.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from checkin_service.core.database import UTCDateTime

if TYPE_CHECKING:
    from checkin_service.models.event import Event


class Attendee(SQLModel, table=True):
    """A person registered for an event.

    Attributes:
        row_id: Surrogate key. Follows seed insertion order.
        id: Public attendee identifier (e.g. "att_001"), unique within
            its event only.
        event_id: Public identifier of the owning Event.
        name: Full name, used for searching and sorting.
        email: Email address.
        document: Identity document number.
        checked_in_at: When the attendee checked in, or None if they have
            not. Once set it never changes.
        event: Reference to the parent Event object.
    """
    __table_args__ = (UniqueConstraint("event_id", "id"),)

    row_id: int | None = Field(default=None, primary_key=True)
    id: str = Field(index=True)
    event_id: str = Field(foreign_key="event.id", index=True)
    name: str
    email: str
    document: str
    checked_in_at: datetime | None = Field(default=None, sa_type=UTCDateTime)

    # Relationship
    event: Optional["Event"] = Relationship(back_populates="attendees")

    @property
    def is_checked_in(self) -> bool:
        return self.checked_in_at is not None
