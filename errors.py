# errors.py


class ValidationError(Exception):
    """Bad input shape or range. Nothing has been written when this is raised."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message

    def to_dict(self):
        return {"error": self.message, "field": self.field}


class RoomInUseError(ValidationError):
    """A room cannot be deleted while a booking still points at it."""

    def __init__(self, room_number: str, booking_count: int):
        super().__init__(
            "room_id",
            f"Room {room_number} is referenced by {booking_count} booking(s)",
        )
        self.room_number = room_number
        self.booking_count = booking_count


class NotFoundError(LookupError):
    # services return None/False; the web layer raises this to answer 404
    def __init__(self, collection: str, entity_id: str):
        super().__init__(f"{collection}/{entity_id} not found")
        self.collection = collection
        self.entity_id = entity_id


class StorageUnavailable(RuntimeError):
    """Raised by a backend that cannot read or write its data."""
