"""In-memory database engine and store access.

All event data lives in a SQLite database held in process memory. Nothing
is written to disk and the data set is rebuilt from the seed on every
start.

SQLite Configuration Choices:
    - **StaticPool**: An in-memory SQLite database exists only for the
      lifetime of the connection that created it. The static pool hands
      the same connection to every session, so all requests see one
      database.

    - **check_same_thread=False**: FastAPI may run request handlers on
      worker threads. Access to the shared connection is serialized by
      the ``EventStore`` lock instead.

    - **Foreign Keys**: Disabled by default in SQLite. Enabled so that an
      attendee row must reference an existing event.
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import Request
from sqlalchemy import DateTime, TypeDecorator
from sqlalchemy import event as sa_event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

if TYPE_CHECKING:
    from checkin_service.directory.store import EventStore


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime column.

    SQLite has no timezone support, so values are converted to UTC and
    stored naive, then marked as UTC again when loaded.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Naive datetime not allowed: {value!r}")
        return value.astimezone(UTC).replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect) -> datetime | None:
        if value is None:
            return None
        return value.replace(tzinfo=UTC)


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key enforcement on each new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_memory_engine(echo: bool = False) -> Engine:
    """Create an engine bound to a fresh in-memory database with all tables."""
    from checkin_service import models  # noqa: F401  (registers the tables)

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=echo,  # Log SQL statements when DEBUG=true
    )
    sa_event.listen(engine, "connect", set_sqlite_pragma)
    SQLModel.metadata.create_all(engine)
    return engine


def get_store(request: Request) -> "EventStore":
    """Dependency for getting the application's event store."""
    return request.app.state.store
