"""Event service - CRUD over the event store.

Services:
- Depend only on the EventStore interface
- Map missing and malformed IDs to EventNotFoundError
- Return ORM models; shaping for the wire happens in the routers
"""
from typing import List, Optional, Union
from uuid import UUID
import logging

from database.models.event import Event, EventStatus
from modules.events.exceptions import EventNotFoundError
from modules.events.query import build_event_query
from modules.events.store import EventStore
from schemas.event import EventCreate, EventFilter, EventUpdate

logger = logging.getLogger(__name__)


def parse_event_id(event_id: Union[str, UUID]) -> UUID:
    """Parse an event ID; anything that is not a UUID is reported as not found."""
    if isinstance(event_id, UUID):
        return event_id
    try:
        return UUID(str(event_id))
    except (TypeError, ValueError):
        logger.debug(f"Malformed event ID treated as not found: {event_id!r}")
        raise EventNotFoundError(event_id)


class EventService:
    """Service for event lifecycle operations."""

    def __init__(self, store: EventStore) -> None:
        self._store = store

    async def create(self, data: EventCreate) -> Event:
        """Persist a new event; status defaults to draft."""
        values = data.model_dump()
        if values.get("status") is None:
            values["status"] = EventStatus.DRAFT
        event = await self._store.add(values)
        logger.info(f"Event {event.id} created: {event.title!r} on {event.date}")
        return event

    async def list(self, filters: Optional[EventFilter] = None) -> List[Event]:
        """Return every event matching the filter, date ascending. May be empty."""
        statement = build_event_query(filters)
        events = await self._store.find(statement)
        logger.debug(f"Listed {len(events)} events for filter {filters}")
        return events

    async def get(self, event_id: Union[str, UUID]) -> Event:
        """Return an event by ID.

        Raises:
            EventNotFoundError: If the event does not exist or the ID is malformed.
        """
        event = await self._store.get(parse_event_id(event_id))
        if event is None:
            raise EventNotFoundError(event_id)
        return event

    async def update(self, event_id: Union[str, UUID], data: EventUpdate) -> Event:
        """Replace the provided fields and return the updated event.

        Raises:
            EventNotFoundError: If no event has this ID. Nothing is created.
        """
        uuid_ = parse_event_id(event_id)
        changes = data.changes()
        if not changes:
            return await self.get(uuid_)

        event = await self._store.update(uuid_, changes)
        if event is None:
            logger.warning(f"Update failed: event {event_id} not found")
            raise EventNotFoundError(event_id)
        logger.info(f"Event {event.id} updated: {sorted(changes)}")
        return event

    async def delete(self, event_id: Union[str, UUID]) -> Event:
        """Hard-delete an event and return the removed record.

        Raises:
            EventNotFoundError: If no event has this ID.
        """
        event = await self._store.delete(parse_event_id(event_id))
        if event is None:
            logger.warning(f"Delete failed: event {event_id} not found")
            raise EventNotFoundError(event_id)
        logger.info(f"Event {event.id} deleted")
        return event
