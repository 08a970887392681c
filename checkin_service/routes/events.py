"""Event routes for listing events and their check-in stats."""
from fastapi import APIRouter, Depends

from checkin_service.core.database import get_store
from checkin_service.directory.store import EventStore
from checkin_service.schemas import EventRead

router = APIRouter(prefix="/events", tags=["events"])


@router.get("", response_model=list[EventRead])
async def list_events(store: EventStore = Depends(get_store)):
    """
    List all events.

    Events are returned in the order they were loaded, each with its
    total, checked-in and absent attendee counts. No filtering or
    pagination is applied.
    """
    return store.list_events()


@router.get("/{event_id}", response_model=EventRead)
async def event_detail(event_id: str, store: EventStore = Depends(get_store)):
    """
    Get a single event with its check-in stats.

    Returns 404 if the event does not exist.
    """
    return store.get_event(event_id)
