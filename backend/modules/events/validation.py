"""Structured validation of event input.

Each validator returns a ValidationResult instead of raising, so callers
can report every field-level reason at once.
"""
from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from database.models.event import (
    EVENT_CATEGORY_VALUES,
    EVENT_STATUS_VALUES,
    TITLE_MIN_LENGTH,
    EventCategory,
    EventStatus,
    enum_values,
)
from schemas.event import EventCreate, EventFilter, EventUpdate

T = TypeVar("T", bound=BaseModel)


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def as_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    errors: Tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    def error_dicts(self) -> List[dict]:
        return [error.as_dict() for error in self.errors]


def _one_of(enum_cls, values) -> str:
    ordered = [value for value in enum_values(enum_cls) if value in values]
    return ", ".join(ordered)


FIELD_MESSAGES = {
    "title": f"Title must be at least {TITLE_MIN_LENGTH} characters long",
    "description": "Description is required",
    "location": "Location is required",
    "organizer": "Organizer is required",
    "date": "Date must be a valid ISO date string",
    "startDate": "startDate must be a valid ISO date string",
    "endDate": "endDate must be a valid ISO date string",
    "category": f"Category must be one of: {_one_of(EventCategory, EVENT_CATEGORY_VALUES)}",
    "status": f"Status must be one of: {_one_of(EventStatus, EVENT_STATUS_VALUES)}",
}


def _field_errors(exc: ValidationError) -> Tuple[FieldError, ...]:
    errors = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        name = str(loc[0]) if loc else "__root__"
        if error.get("type") == "extra_forbidden":
            message = f"property {name} should not exist"
        elif error.get("type") == "missing":
            message = f"{name} is required"
        else:
            message = FIELD_MESSAGES.get(name, error.get("msg", "Invalid value"))
        errors.append(FieldError(field=name, message=message))
    return tuple(errors)


def _validate(model: Type[T], payload: Any) -> ValidationResult[T]:
    if not isinstance(payload, Mapping):
        return ValidationResult(errors=(FieldError(field="__root__", message="Request body must be an object"),))
    try:
        return ValidationResult(value=model.model_validate(dict(payload)))
    except ValidationError as exc:
        return ValidationResult(errors=_field_errors(exc))


def validate_event_create(payload: Any) -> ValidationResult[EventCreate]:
    """Validate a create request: every field required except status."""
    return _validate(EventCreate, payload)


def validate_event_update(payload: Any) -> ValidationResult[EventUpdate]:
    """Validate a partial patch: every field optional, none nullable."""
    return _validate(EventUpdate, payload)


def validate_event_filter(params: Any) -> ValidationResult[EventFilter]:
    """Validate list filters given by their wire names (startDate, endDate)."""
    return _validate(EventFilter, params)
