class EventError(Exception):
    """Base class for event errors."""
    pass

class EventNotFoundError(EventError):
    """Raised when no event has the given ID, including IDs that are not valid UUIDs."""

    def __init__(self, event_id):
        super().__init__(f'Event with ID "{event_id}" not found')
        self.event_id = event_id
