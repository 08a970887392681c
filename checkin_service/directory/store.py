"""Event directory store.

The store owns the in-memory database for the lifetime of the process and
is handed to request handlers through the ``get_store`` dependency. It is
the only place that reads or changes event data.

Every operation runs under one re-entrant lock. SQLite sessions share a
single in-memory connection, and the check-in read and write must happen
as one step so that two concurrent check-ins for the same attendee cannot
both succeed.
"""
import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import UTC, datetime

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from checkin_service.core.errors import (
    AlreadyCheckedInError,
    AttendeeNotInEventError,
    EventNotFoundError,
    MissingFieldError,
)
from checkin_service.directory.search import search_attendees
from checkin_service.models import Attendee, Event
from checkin_service.schemas import (
    AttendeePage,
    AttendeeRead,
    CheckInResponse,
    EventRead,
    EventSeed,
    Stats,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


def build_stats(event: Event) -> Stats:
    """Count checked-in and absent attendees for an event."""
    total = len(event.attendees)
    checked_in = sum(1 for a in event.attendees if a.is_checked_in)
    return Stats(total=total, checked_in=checked_in, absent=total - checked_in)


def to_event_read(event: Event) -> EventRead:
    return EventRead(
        id=event.id,
        title=event.title,
        starts_at=event.starts_at,
        ends_at=event.ends_at,
        location=event.location,
        stats=build_stats(event),
    )


def to_attendee_read(attendee: Attendee) -> AttendeeRead:
    return AttendeeRead(
        id=attendee.id,
        name=attendee.name,
        email=attendee.email,
        document=attendee.document,
        checked_in_at=attendee.checked_in_at,
    )


class EventStore:
    """Events and attendees held in an in-memory database.

    Args:
        engine: Engine bound to an in-memory database with the tables created.
        clock: Returns the current time for check-ins. Must be timezone-aware.
    """

    def __init__(self, engine: Engine, clock: Callable[[], datetime] = utc_now):
        self.engine = engine
        self.clock = clock
        self._lock = threading.RLock()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Open a session while holding the store lock."""
        with self._lock, Session(self.engine) as session:
            yield session

    def seed(self, events: Iterable[dict]) -> int:
        """
        Load events and their attendees.

        Events are stored in the order given, as are the attendees of each
        event. Duplicate event ids, or duplicate attendee ids within one
        event, raise an integrity error and nothing is stored.

        Returns the number of events loaded.
        """
        count = 0
        with self.session() as session:
            for raw in events:
                data = EventSeed.model_validate(raw)
                session.add(
                    Event(
                        id=data.id,
                        title=data.title,
                        starts_at=data.starts_at,
                        ends_at=data.ends_at,
                        location=data.location,
                    )
                )
                session.flush()
                for attendee in data.attendees:
                    session.add(
                        Attendee(
                            id=attendee.id,
                            event_id=data.id,
                            name=attendee.name,
                            email=attendee.email,
                            document=attendee.document,
                            checked_in_at=attendee.checked_in_at,
                        )
                    )
                session.flush()
                count += 1
            session.commit()

        logger.info(f"Seeded {count} events")
        return count

    def _get_event(self, session: Session, event_id: str) -> Event:
        event = session.exec(select(Event).where(Event.id == event_id)).first()
        if not event:
            raise EventNotFoundError(event_id)
        return event

    def list_events(self) -> list[EventRead]:
        """Return all events in storage order with their stats."""
        with self.session() as session:
            events = session.exec(select(Event).order_by(Event.row_id)).all()
            return [to_event_read(event) for event in events]

    def get_event(self, event_id: str) -> EventRead:
        """Return one event with its stats.

        Raises:
            EventNotFoundError: If no event has this id.
        """
        with self.session() as session:
            return to_event_read(self._get_event(session, event_id))

    def list_attendees(
        self, event_id: str, search: str | None = None, page: int = 1, limit: int = 20
    ) -> AttendeePage:
        """Search an event's attendees and return one page, sorted by name.

        ``page`` and ``limit`` are expected to be already clamped to at least 1.

        Raises:
            EventNotFoundError: If no event has this id.
        """
        with self.session() as session:
            event = self._get_event(session, event_id)
            data, total = search_attendees(event.attendees, search, page, limit)
            return AttendeePage(
                data=[to_attendee_read(a) for a in data],
                page=page,
                limit=limit,
                total=total,
            )

    def check_in(self, event_id: str, attendee_id: str | None) -> CheckInResponse:
        """Mark an attendee as present.

        The timestamp is set only once. Later calls leave it unchanged and
        raise ``AlreadyCheckedInError`` carrying the original value.

        Raises:
            EventNotFoundError: If no event has this id.
            MissingFieldError: If ``attendee_id`` is missing or empty.
            AttendeeNotInEventError: If the attendee does not belong to the event.
            AlreadyCheckedInError: If the attendee has already checked in.
        """
        with self.session() as session:
            self._get_event(session, event_id)

            if not attendee_id:
                raise MissingFieldError("attendeeId")

            attendee = session.exec(
                select(Attendee)
                .where(Attendee.event_id == event_id)
                .where(Attendee.id == attendee_id)
            ).first()
            if not attendee:
                raise AttendeeNotInEventError(event_id, attendee_id)

            if attendee.checked_in_at is not None:
                logger.warning(
                    f"Repeated check-in for {attendee_id} at {event_id}, "
                    f"already checked in at {attendee.checked_in_at.isoformat()}"
                )
                raise AlreadyCheckedInError(attendee_id, attendee.checked_in_at)

            checked_in_at = self.clock().astimezone(UTC)
            attendee.checked_in_at = checked_in_at
            session.add(attendee)
            session.commit()

        logger.info(f"Checked in {attendee_id} at {event_id}")
        return CheckInResponse(attendee_id=attendee_id, checked_in_at=checked_in_at)
