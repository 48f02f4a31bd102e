"""Tests for EventService against an in-memory database.

Run with: pytest backend/test/test_event_service.py -v
"""
from datetime import datetime, timezone
from uuid import uuid4

import pytest
from sqlalchemy import func, select, update

from database.models.event import Event, EventCategory, EventStatus
from factories import event_create
from modules.events.exceptions import EventNotFoundError
from schemas.event import EventFilter, EventUpdate, as_utc


async def count_events(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(Event))
    return result.scalar_one()


async def backdate(db_session, event_id, when: datetime) -> None:
    """Pin updated_at to a known earlier instant, independent of clock resolution."""
    await db_session.execute(update(Event).where(Event.id == event_id).values(updated_at=when))
    await db_session.commit()


@pytest.fixture
async def seeded(event_service):
    """Four events with distinct categories, statuses and dates, inserted out of order."""
    specs = [
        dict(title="Python Meetup", description="Monthly gathering", date="2026-06-15T18:00:00Z",
             category="meetup", organizer="PyGroup", status="confirmed"),
        dict(title="Year End Social", description="Drinks and snacks", date="2025-12-31T20:00:00Z",
             category="social", organizer="Office Team"),
        dict(title="Testing Talk", description="All about hands-on WORKSHOP habits", date="2026-02-01T09:00:00Z",
             category="talk", organizer="Jane Roe", status="cancelled"),
        dict(title="Intro Workshop", description="Beginner friendly", date="2026-09-10T10:00:00Z",
             category="workshop", organizer="John Doe", status="confirmed"),
    ]
    return [await event_service.create(event_create(**spec)) for spec in specs]


def assert_date_ascending(events):
    dates = [as_utc(event.date) for event in events]
    assert dates == sorted(dates)


class TestCreate:
    """Tests for EventService.create"""

    async def test_create_assigns_id_timestamps_and_default_status(self, event_service):
        event = await event_service.create(event_create())

        assert event.id is not None
        assert event.created_at is not None
        assert event.updated_at is not None
        assert event.status == EventStatus.DRAFT
        assert event.category == EventCategory.WORKSHOP
        assert as_utc(event.date) == datetime(2026, 3, 15, 10, 0, tzinfo=timezone.utc)

    async def test_create_keeps_explicit_status(self, event_service):
        event = await event_service.create(event_create(status="confirmed"))
        assert event.status == EventStatus.CONFIRMED

    async def test_create_stores_offset_dates_in_utc(self, event_service):
        created = await event_service.create(event_create(date="2026-06-15T10:00:00+02:00"))
        fetched = await event_service.get(created.id)
        assert as_utc(fetched.date) == datetime(2026, 6, 15, 8, 0, tzinfo=timezone.utc)

    async def test_create_takes_naive_dates_as_utc(self, event_service):
        created = await event_service.create(event_create(date="2026-06-15T10:00:00"))
        fetched = await event_service.get(created.id)
        assert as_utc(fetched.date) == datetime(2026, 6, 15, 10, 0, tzinfo=timezone.utc)

    async def test_create_allows_duplicates(self, event_service, db_session):
        first = await event_service.create(event_create())
        second = await event_service.create(event_create())
        assert first.id != second.id
        assert await count_events(db_session) == 2


class TestList:
    """Tests for EventService.list"""

    async def test_list_without_filter_returns_everything_by_date(self, event_service, seeded):
        events = await event_service.list(EventFilter())

        assert len(events) == len(seeded)
        assert [e.title for e in events] == ["Year End Social", "Testing Talk", "Python Meetup", "Intro Workshop"]
        assert_date_ascending(events)

    async def test_list_none_filter_matches_empty_filter(self, event_service, seeded):
        assert [e.id for e in await event_service.list(None)] == [e.id for e in await event_service.list(EventFilter())]

    async def test_list_on_empty_store_is_empty(self, event_service):
        assert await event_service.list(EventFilter()) == []

    async def test_list_by_category(self, event_service, seeded):
        events = await event_service.list(EventFilter(category="meetup"))
        assert [e.title for e in events] == ["Python Meetup"]

    async def test_list_by_status(self, event_service, seeded):
        events = await event_service.list(EventFilter(status="confirmed"))
        assert {e.title for e in events} == {"Python Meetup", "Intro Workshop"}
        assert all(e.status == EventStatus.CONFIRMED for e in events)
        assert_date_ascending(events)

    async def test_list_by_date_range_is_inclusive_of_range(self, event_service, seeded):
        events = await event_service.list(EventFilter(startDate="2026-01-01", endDate="2026-12-31"))
        titles = [e.title for e in events]

        assert "Year End Social" not in titles
        assert "Python Meetup" in titles
        assert_date_ascending(events)

    async def test_list_by_start_date_only(self, event_service, seeded):
        events = await event_service.list(EventFilter(startDate="2026-06-15T18:00:00Z"))
        # Inclusive lower bound
        assert [e.title for e in events] == ["Python Meetup", "Intro Workshop"]

    async def test_list_by_end_date_only(self, event_service, seeded):
        events = await event_service.list(EventFilter(endDate="2026-02-01T09:00:00Z"))
        assert [e.title for e in events] == ["Year End Social", "Testing Talk"]

    async def test_search_is_case_insensitive_across_three_fields(self, event_service, seeded):
        events = await event_service.list(EventFilter(search="workshop"))
        # Title match and description match; organizer-only match checked below
        assert [e.title for e in events] == ["Testing Talk", "Intro Workshop"]

    async def test_search_matches_organizer(self, event_service, seeded):
        events = await event_service.list(EventFilter(search="pygroup"))
        assert [e.title for e in events] == ["Python Meetup"]

    async def test_search_excludes_non_matching(self, event_service, seeded):
        assert await event_service.list(EventFilter(search="kubernetes")) == []

    async def test_search_treats_wildcards_literally(self, event_service, seeded):
        assert await event_service.list(EventFilter(search="%")) == []

    async def test_combined_filters_satisfy_every_constraint(self, event_service, seeded):
        filters = EventFilter(status="confirmed", startDate="2026-07-01", search="workshop")
        events = await event_service.list(filters)
        assert [e.title for e in events] == ["Intro Workshop"]

    async def test_offset_dates_sort_by_instant(self, event_service):
        await event_service.create(event_create(title="A 09Z", date="2026-06-15T09:00:00Z"))
        await event_service.create(event_create(title="B 08Z", date="2026-06-15T10:00:00+02:00"))

        events = await event_service.list(EventFilter())

        assert [e.title for e in events] == ["B 08Z", "A 09Z"]

    async def test_offset_bounds_compare_by_instant(self, event_service):
        await event_service.create(event_create(title="A 09Z", date="2026-06-15T09:00:00Z"))
        await event_service.create(event_create(title="B 08Z", date="2026-06-15T10:00:00+02:00"))

        before = await event_service.list(EventFilter(endDate="2026-06-15T10:30:00+02:00"))
        after = await event_service.list(EventFilter(startDate="2026-06-15T10:30:00+02:00"))

        assert [e.title for e in before] == ["B 08Z"]
        assert [e.title for e in after] == ["A 09Z"]


class TestGet:
    """Tests for EventService.get"""

    async def test_get_existing(self, event_service):
        created = await event_service.create(event_create())
        fetched = await event_service.get(str(created.id))
        assert fetched.id == created.id
        assert fetched.title == "Test Workshop"

    async def test_get_unknown_id_raises_not_found(self, event_service):
        with pytest.raises(EventNotFoundError):
            await event_service.get(str(uuid4()))

    @pytest.mark.parametrize("bad_id", ["nonexistent", "507f1f77bcf86cd799439011", ""])
    async def test_get_malformed_id_raises_not_found(self, event_service, bad_id):
        with pytest.raises(EventNotFoundError):
            await event_service.get(bad_id)


class TestUpdate:
    """Tests for EventService.update"""

    async def test_update_replaces_only_given_fields(self, event_service):
        created = await event_service.create(event_create())
        before = {
            "description": created.description,
            "date": as_utc(created.date),
            "location": created.location,
            "category": created.category,
            "organizer": created.organizer,
            "status": created.status,
        }

        updated = await event_service.update(str(created.id), EventUpdate(title="X" * 3))

        assert updated.id == created.id
        assert updated.title == "XXX"
        assert {
            "description": updated.description,
            "date": as_utc(updated.date),
            "location": updated.location,
            "category": updated.category,
            "organizer": updated.organizer,
            "status": updated.status,
        } == before

    async def test_update_is_visible_to_get(self, event_service):
        created = await event_service.create(event_create())
        await event_service.update(created.id, EventUpdate(status="cancelled"))
        assert (await event_service.get(created.id)).status == EventStatus.CANCELLED

    async def test_update_with_empty_string_replaces_value(self, event_service):
        created = await event_service.create(event_create())
        updated = await event_service.update(created.id, EventUpdate(location=""))
        assert updated.location == ""

    async def test_update_without_changes_returns_current(self, event_service):
        created = await event_service.create(event_create())
        updated = await event_service.update(created.id, EventUpdate())
        assert updated.id == created.id
        assert updated.title == created.title

    async def test_update_bumps_updated_at_only(self, event_service, db_session):
        created = await event_service.create(event_create())
        created_at = as_utc(created.created_at)
        earlier = datetime(2020, 1, 1, tzinfo=timezone.utc)
        await backdate(db_session, created.id, earlier)

        updated = await event_service.update(created.id, EventUpdate(title="Renamed"))

        assert as_utc(updated.updated_at) > earlier
        assert as_utc(updated.created_at) == created_at

    async def test_update_without_changes_keeps_updated_at(self, event_service, db_session):
        created = await event_service.create(event_create())
        earlier = datetime(2020, 1, 1, tzinfo=timezone.utc)
        await backdate(db_session, created.id, earlier)

        unchanged = await event_service.update(created.id, EventUpdate())

        assert as_utc(unchanged.updated_at) == earlier

    async def test_update_stores_offset_dates_in_utc(self, event_service):
        created = await event_service.create(event_create())
        await event_service.update(created.id, EventUpdate(date="2026-06-15T10:00:00+02:00"))
        fetched = await event_service.get(created.id)
        assert as_utc(fetched.date) == datetime(2026, 6, 15, 8, 0, tzinfo=timezone.utc)

    async def test_update_unknown_id_raises_and_creates_nothing(self, event_service, db_session):
        await event_service.create(event_create())

        with pytest.raises(EventNotFoundError):
            await event_service.update(str(uuid4()), EventUpdate(title="Updated"))

        assert await count_events(db_session) == 1

    async def test_update_malformed_id_raises_not_found(self, event_service):
        with pytest.raises(EventNotFoundError):
            await event_service.update("nonexistent", EventUpdate(title="Updated"))

    async def test_update_unknown_id_without_changes_raises_not_found(self, event_service):
        with pytest.raises(EventNotFoundError):
            await event_service.update(str(uuid4()), EventUpdate())


class TestDelete:
    """Tests for EventService.delete"""

    async def test_delete_returns_removed_record(self, event_service, db_session):
        created = await event_service.create(event_create())
        removed = await event_service.delete(str(created.id))

        assert removed.id == created.id
        assert removed.title == "Test Workshop"
        assert await count_events(db_session) == 0

    async def test_get_after_delete_raises_not_found(self, event_service):
        created = await event_service.create(event_create())
        await event_service.delete(created.id)

        with pytest.raises(EventNotFoundError):
            await event_service.get(created.id)
        with pytest.raises(EventNotFoundError):
            await event_service.delete(created.id)

    async def test_delete_unknown_id_raises_not_found(self, event_service):
        with pytest.raises(EventNotFoundError):
            await event_service.delete(str(uuid4()))

    async def test_delete_malformed_id_raises_not_found(self, event_service):
        with pytest.raises(EventNotFoundError):
            await event_service.delete("nonexistent")
