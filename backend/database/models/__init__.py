from database.models.base import BaseModel
from database.models.event import Event, EventCategory, EventStatus
from database.models.user import User

# This ensures that SQLAlchemy loads all models in the correct order
__all__ = [
    "BaseModel",
    "Event",
    "EventCategory",
    "EventStatus",
    "User",
]
