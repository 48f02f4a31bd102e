from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
import logging

from core.dependencies import get_current_user, get_event_service
from core.exceptions import AppException
from database.models.user import User
from modules.events.exceptions import EventNotFoundError
from modules.events.service import EventService
from modules.events.validation import (
    ValidationResult,
    validate_event_create,
    validate_event_filter,
    validate_event_update,
)
from schemas.event import EventResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def _require_valid(result: ValidationResult):
    if not result.ok:
        raise AppException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Validation error",
            errors=result.error_dicts(),
        )
    return result.value


def _not_found(e: EventNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: Dict[str, Any] = Body(...),
    event_service: EventService = Depends(get_event_service),
    current_user: User = Depends(get_current_user),
):
    """
    Create an event (authenticated)
    """
    data = _require_valid(validate_event_create(payload))
    event = await event_service.create(data)
    logger.info(f"Event {event.id} created by {current_user.email}")
    return event


@router.get("", response_model=List[EventResponse])
async def list_events(
    category: Optional[str] = Query(None),
    status_: Optional[str] = Query(None, alias="status"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    search: Optional[str] = Query(None),
    event_service: EventService = Depends(get_event_service),
):
    """
    List events matching the optional filters, ordered by date ascending (public)
    """
    params = {
        "category": category,
        "status": status_,
        "startDate": start_date,
        "endDate": end_date,
        "search": search,
    }
    filters = _require_valid(validate_event_filter({k: v for k, v in params.items() if v is not None}))
    return await event_service.list(filters)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    event_service: EventService = Depends(get_event_service),
):
    """
    Get a single event (public)
    """
    try:
        return await event_service.get(event_id)
    except EventNotFoundError as e:
        raise _not_found(e)


@router.patch("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    payload: Dict[str, Any] = Body(...),
    event_service: EventService = Depends(get_event_service),
    current_user: User = Depends(get_current_user),
):
    """
    Partially update an event (authenticated)
    """
    data = _require_valid(validate_event_update(payload))
    try:
        return await event_service.update(event_id, data)
    except EventNotFoundError as e:
        raise _not_found(e)


@router.delete("/{event_id}", response_model=EventResponse)
async def delete_event(
    event_id: str,
    event_service: EventService = Depends(get_event_service),
    current_user: User = Depends(get_current_user),
):
    """
    Delete an event and return the removed record (authenticated)
    """
    try:
        return await event_service.delete(event_id)
    except EventNotFoundError as e:
        raise _not_found(e)
