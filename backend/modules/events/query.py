"""
Translation of an event filter into SQLAlchemy statements.

Pure functions: no session, no I/O. Every constraint present in the
filter is AND-ed; an empty filter produces no WHERE clause at all.
"""
from typing import List, Optional

from sqlalchemy import Select, ColumnElement, and_, or_, select

from database.models.event import Event
from schemas.event import EventFilter

SEARCH_FIELDS = (Event.title, Event.description, Event.organizer)


def search_clause(term: str) -> ColumnElement[bool]:
    """Case-insensitive literal substring match on any of the searchable fields."""
    return or_(*(column.icontains(term, autoescape=True) for column in SEARCH_FIELDS))


def build_event_filter(filters: Optional[EventFilter]) -> List[ColumnElement[bool]]:
    """Return the list of conditions for the given filter, in a fixed order."""
    if filters is None:
        return []

    conditions: List[ColumnElement[bool]] = []

    if filters.category:
        conditions.append(Event.category == filters.category)

    if filters.status:
        conditions.append(Event.status == filters.status)

    # Both bounds are inclusive
    if filters.start_date is not None:
        conditions.append(Event.date >= filters.start_date)
    if filters.end_date is not None:
        conditions.append(Event.date <= filters.end_date)

    if filters.search:
        conditions.append(search_clause(filters.search))

    return conditions


def build_event_query(filters: Optional[EventFilter] = None) -> Select:
    """SELECT of the matching events, date ascending (id breaks ties)."""
    statement = select(Event)
    conditions = build_event_filter(filters)
    if conditions:
        statement = statement.where(and_(*conditions))
    return statement.order_by(Event.date.asc(), Event.id.asc())
