from checkin_service.models.attendee import Attendee
from checkin_service.models.event import Event

__all__ = ["Event", "Attendee"]
