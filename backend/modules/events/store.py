"""Event persistence (repository pattern).

The service depends on the EventStore interface only; the SQLAlchemy
implementation owns the session and commits each write on its own.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from database.models.event import Event

logger = logging.getLogger(__name__)


class EventStore(ABC):
    """Interface for event persistence operations."""

    @abstractmethod
    async def add(self, values: Dict[str, Any]) -> Event:
        """Insert a new event and return it with store-assigned fields."""
        ...

    @abstractmethod
    async def find(self, statement: Select) -> List[Event]:
        """Run a SELECT built by the query builder."""
        ...

    @abstractmethod
    async def get(self, event_id: UUID) -> Optional[Event]:
        """Return an event by ID, or None if not found."""
        ...

    @abstractmethod
    async def update(self, event_id: UUID, values: Dict[str, Any]) -> Optional[Event]:
        """Apply a partial update in one statement; None if no row matched."""
        ...

    @abstractmethod
    async def delete(self, event_id: UUID) -> Optional[Event]:
        """Delete by ID and return the removed row; None if no row matched."""
        ...


class SqlAlchemyEventStore(EventStore):
    """Relational event store on an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def add(self, values: Dict[str, Any]) -> Event:
        event = Event(**values)
        self._db.add(event)
        await self._db.commit()
        # Load server-side defaults (timestamps)
        await self._db.refresh(event)
        return event

    async def find(self, statement: Select) -> List[Event]:
        result = await self._db.execute(statement.execution_options(populate_existing=True))
        return list(result.scalars().all())

    async def get(self, event_id: UUID) -> Optional[Event]:
        # Always round-trip; never answer from the identity map
        stmt = select(Event).where(Event.id == event_id).execution_options(populate_existing=True)
        result = await self._db.execute(stmt)
        return result.scalars().first()

    async def update(self, event_id: UUID, values: Dict[str, Any]) -> Optional[Event]:
        # Conditional single-row UPDATE; never inserts
        stmt = (
            update(Event)
            .where(Event.id == event_id)
            .values(**values)
            .returning(Event)
            .execution_options(populate_existing=True)
        )
        result = await self._db.execute(stmt)
        event = result.scalars().first()
        await self._db.commit()
        return event

    async def delete(self, event_id: UUID) -> Optional[Event]:
        stmt = delete(Event).where(Event.id == event_id).returning(Event)
        result = await self._db.execute(stmt)
        event = result.scalars().first()
        await self._db.commit()
        return event
