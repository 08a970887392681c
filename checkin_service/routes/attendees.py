"""Attendee routes for searching attendees and checking them in."""
from fastapi import APIRouter, Depends, Request

from checkin_service.core.config import Settings
from checkin_service.core.database import get_store
from checkin_service.directory.search import clamp_page_params
from checkin_service.directory.store import EventStore
from checkin_service.schemas import AttendeePage, CheckInRequest, CheckInResponse

router = APIRouter(prefix="/events/{event_id}", tags=["attendees"])


def get_settings(request: Request) -> Settings:
    """Dependency for getting the application's settings."""
    return request.app.state.settings


@router.get("/attendees", response_model=AttendeePage)
async def list_attendees(
    event_id: str,
    search: str | None = None,
    page: int | None = None,
    limit: int | None = None,
    store: EventStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Search and paginate an event's attendees.

    ``search`` is matched case- and accent-insensitively against name,
    email and document. Results are sorted by name. ``page`` defaults to 1
    and ``limit`` to the configured page size; both are raised to 1 if
    lower. ``total`` is the number of matches before pagination. Returns
    404 if the event does not exist.
    """
    page, limit = clamp_page_params(
        page,
        limit,
        default_limit=settings.default_page_limit,
        max_limit=settings.max_page_limit,
    )
    return store.list_attendees(event_id, search=search, page=page, limit=limit)


async def read_attendee_id(request: Request) -> str | None:
    """
    Read ``attendeeId`` from the JSON body.

    Anything that does not yield a string id, such as an empty or non-JSON
    body, a JSON array or a non-string value, counts as missing.
    """
    try:
        body = CheckInRequest.model_validate(await request.json())
    except ValueError:  # JSON decode and pydantic validation errors
        return None
    return body.attendee_id


@router.post(
    "/checkin",
    response_model=CheckInResponse,
    status_code=201,
    openapi_extra={
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": CheckInRequest.model_json_schema(by_alias=True)
                }
            }
        }
    },
)
async def check_in(
    event_id: str,
    attendee_id: str | None = Depends(read_attendee_id),
    store: EventStore = Depends(get_store),
):
    """
    Check an attendee in.

    Sets the attendee's check-in time to now and returns it. Returns 404
    for an unknown event, 400 without an ``attendeeId``, 422 if the
    attendee is not part of the event and 409 with the original timestamp
    if the attendee has already checked in.
    """
    return store.check_in(event_id, attendee_id)
