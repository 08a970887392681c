"""Seed data for the event directory.

Events use the same camelCase shape as the API, with an ``attendees`` list
per event. The built-in seed is used unless a JSON file with the same shape
is configured through ``SEED_PATH``.
"""
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SEED_EVENTS: list[dict] = [
    {
        "id": "evt_123",
        "title": "Conferência de Tecnologia 2025",
        "startsAt": "2025-09-15T09:00:00-03:00",
        "endsAt": "2025-09-15T18:00:00-03:00",
        "location": "Auditório AMF",
        "attendees": [
            {
                "id": "att_001",
                "name": "Ana Souza",
                "email": "ana@exemplo.com",
                "document": "123.456.789-00",
                "checkedInAt": None,
            },
            {
                "id": "att_002",
                "name": "José da Silva",
                "email": "jose@exemplo.com",
                "document": "987.654.321-00",
                "checkedInAt": None,
            },
            {
                "id": "att_003",
                "name": "Marcos Pereira",
                "email": "marcos@exemplo.com",
                "document": "111.222.333-44",
                "checkedInAt": "2025-09-15T09:32:12-03:00",
            },
        ],
    },
    {
        "id": "evt_456",
        "title": "Simpósio de IA Aplicada",
        "startsAt": "2025-10-10T14:00:00-03:00",
        "endsAt": "2025-10-10T19:00:00-03:00",
        "location": "Centro de Inovação",
        "attendees": [
            {
                "id": "att_101",
                "name": "Bianca Felix",
                "email": "bianca@exemplo.com",
                "document": "222.333.444-55",
                "checkedInAt": None,
            },
            {
                "id": "att_102",
                "name": "Felipe Nunes",
                "email": "felipe@exemplo.com",
                "document": "333.444.555-66",
                "checkedInAt": None,
            },
        ],
    },
]


def load_seed(path: Path | None = None) -> list[dict]:
    """Return seed events from ``path``, or the built-in seed if no path is given."""
    if path is None:
        return SEED_EVENTS

    with open(path, encoding="utf-8") as f:
        events = json.load(f)
    if not isinstance(events, list):
        raise ValueError(f"Seed file {path} must contain a JSON list of events")

    logger.info(f"Loaded {len(events)} events from {path}")
    return events
