"""Test data factories."""
from typing import Any, Dict

from schemas.event import EventCreate


def event_payload(**overrides: Any) -> Dict[str, Any]:
    """A valid create payload as the web client sends it."""
    payload = {
        "title": "Test Workshop",
        "description": "A test workshop description",
        "date": "2026-03-15T10:00:00.000Z",
        "location": "Room 3",
        "category": "workshop",
        "organizer": "John Doe",
    }
    payload.update(overrides)
    return payload


def event_create(**overrides: Any) -> EventCreate:
    return EventCreate.model_validate(event_payload(**overrides))


def register_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "email": "test@example.com",
        "password": "password123",
        "name": "Test User",
    }
    payload.update(overrides)
    return payload
