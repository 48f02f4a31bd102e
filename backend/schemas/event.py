from typing import Optional
from datetime import date, datetime, time, timezone
from uuid import UUID
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from database.models.event import EventCategory, EventStatus, TITLE_MIN_LENGTH


def parse_event_datetime(value):
    """
    Turn a plain date into midnight UTC; other values go on to pydantic.
    The after-validators on each model normalize the parsed result to UTC.
    """
    if isinstance(value, str) and len(value) == 10:
        value = date.fromisoformat(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if isinstance(value, datetime):
        return as_utc(value)
    return value


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes (SQLite drops offsets), convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class EventCreate(BaseModel):
    """Schema to create events"""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=TITLE_MIN_LENGTH)
    description: str = Field(..., min_length=1)
    date: datetime
    location: str = Field(..., min_length=1)
    category: EventCategory
    organizer: str = Field(..., min_length=1)
    status: Optional[EventStatus] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_event_datetime(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return as_utc(v)


class EventUpdate(BaseModel):
    """
    Schema to update events (partial patch).

    Only fields present in the request are written; an explicitly provided
    empty string replaces the stored value. Explicit nulls are rejected.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=TITLE_MIN_LENGTH)
    description: Optional[str] = None
    date: Optional[datetime] = None
    location: Optional[str] = None
    category: Optional[EventCategory] = None
    organizer: Optional[str] = None
    status: Optional[EventStatus] = None

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v):
        return parse_event_datetime(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else v

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Fields explicitly provided by the caller."""
        return self.model_dump(exclude_unset=True)


class EventFilter(BaseModel):
    """Optional constraints for listing events; absence means no constraint"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    category: Optional[EventCategory] = None
    status: Optional[EventStatus] = None
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    search: Optional[str] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v):
        return parse_event_datetime(v)

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        # Naive values are taken as UTC
        return as_utc(v) if v is not None else v


class EventResponse(BaseModel):
    """Schema for event responses"""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID = Field(..., validation_alias=AliasChoices("_id", "id"), serialization_alias="_id")
    title: str
    description: str
    date: datetime
    location: str
    category: EventCategory
    organizer: str
    status: EventStatus
    created_at: datetime = Field(..., validation_alias=AliasChoices("createdAt", "created_at"), serialization_alias="createdAt")
    updated_at: datetime = Field(..., validation_alias=AliasChoices("updatedAt", "updated_at"), serialization_alias="updatedAt")

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def normalize_timestamps(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_serializer("id")
    def serialize_id(self, v: UUID, _info):
        return str(v)
