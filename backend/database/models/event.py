from sqlalchemy import String, Text, DateTime, Enum, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column
from database.models.base import BaseModel
import enum
from datetime import datetime

class EventCategory(str, enum.Enum):
    """Kinds of events on the board"""
    WORKSHOP = "workshop"
    MEETUP = "meetup"
    TALK = "talk"
    SOCIAL = "social"

class EventStatus(str, enum.Enum):
    """Publication state of an event"""
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Stored values of an enum, in member order."""
    return [member.value for member in enum_cls]

EVENT_CATEGORY_VALUES = frozenset(enum_values(EventCategory))
EVENT_STATUS_VALUES = frozenset(enum_values(EventStatus))

TITLE_MIN_LENGTH = 3

class Event(BaseModel):
    """A scheduled event. Ordered by date when listed."""
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint(f"length(title) >= {TITLE_MIN_LENGTH}", name="title_min_length"),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    # Stored as VARCHAR plus a CHECK constraint over the enum values
    category: Mapped[EventCategory] = mapped_column(
        Enum(
            EventCategory,
            name="event_category",
            values_callable=enum_values,
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
        ),
        nullable=False,
        index=True,
    )
    organizer: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[EventStatus] = mapped_column(
        Enum(
            EventStatus,
            name="event_status",
            values_callable=enum_values,
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
        ),
        default=EventStatus.DRAFT,
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<Event {self.id} {self.title!r} {self.date}>"
