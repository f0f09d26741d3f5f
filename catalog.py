# catalog.py
import logging
import re
from typing import List, Optional

from config import DefaultConfig
from errors import RoomInUseError, ValidationError
from models import ROOM_TYPES, Employee, Room, parse_date
from storage import BOOKINGS, EMPLOYEES, ROOMS

logger = logging.getLogger(__name__)

READ_ONLY_FIELDS = ("id", "created_at", "updated_at")


def _positive_int(data: dict, key: str, minimum: int = 1) -> int:
    raw = data.get(key)
    if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
        raise ValidationError(key, f"{key} must be a whole number")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(key, f"{key} must be a whole number")
    if value < minimum:
        raise ValidationError(key, f"{key} must be at least {minimum}")
    return value


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "y", "on")
    return bool(value)


def _amenities(value) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [str(a).strip() for a in value if str(a).strip()]


def _check_read_only(partial: dict):
    for key in READ_ONLY_FIELDS:
        if key in partial:
            raise ValidationError(key, f"{key} cannot be changed")


class RoomService:
    def __init__(self, store):
        self.store = store

    def list_rooms(self) -> List[Room]:
        return [Room.from_dict(r) for r in self.store.list(ROOMS)]

    def get_room(self, room_id: str) -> Optional[Room]:
        record = self.store.get(ROOMS, room_id)
        return Room.from_dict(record) if record else None

    def _clean(self, data: dict, room_id: Optional[str] = None) -> dict:
        room_number = str(data.get("room_number") or "").strip()
        if not room_number:
            raise ValidationError("room_number", "Room number is required")
        for other in self.store.list(ROOMS):
            if other.get("room_number") == room_number and other.get("id") != room_id:
                raise ValidationError("room_number", f"Room {room_number} already exists")

        room_type = data.get("type", "single")
        if room_type not in ROOM_TYPES:
            raise ValidationError("type", f"type must be one of {', '.join(ROOM_TYPES)}")

        return {
            "room_number": room_number,
            "type": room_type,
            "has_ac": _as_bool(data.get("has_ac", False)),
            "beds": _positive_int(data, "beds"),
            "price_per_day": _positive_int(data, "price_per_day"),
            "is_available": _as_bool(data.get("is_available", True)),
            "amenities": _amenities(data.get("amenities")),
        }

    def create_room(self, data: dict) -> Room:
        record = self.store.create(ROOMS, self._clean(data))
        logger.info("Added room %s", record["room_number"])
        return Room.from_dict(record)

    def update_room(self, room_id: str, partial: dict) -> Optional[Room]:
        existing = self.store.get(ROOMS, room_id)
        if existing is None:
            return None
        _check_read_only(partial)
        cleaned = self._clean({**existing, **partial}, room_id=room_id)
        record = self.store.update(ROOMS, room_id, cleaned)
        return Room.from_dict(record) if record else None

    def delete_room(self, room_id: str) -> bool:
        existing = self.store.get(ROOMS, room_id)
        if existing is None:
            return False
        holding = [b for b in self.store.list(BOOKINGS) if room_id in (b.get("room_ids") or [])]
        if holding:
            logger.warning("Refused to delete room %s, %d booking(s) use it",
                           existing.get("room_number"), len(holding))
            raise RoomInUseError(existing.get("room_number"), len(holding))
        deleted = self.store.delete(ROOMS, room_id)
        if deleted:
            logger.info("Deleted room %s", existing.get("room_number"))
        return deleted


class EmployeeService:
    def __init__(self, store, min_contact_digits: int = DefaultConfig.MIN_MOBILE_DIGITS):
        self.store = store
        self.contact_re = re.compile(r"^\d{%d,}$" % min_contact_digits)

    def list_employees(self) -> List[Employee]:
        return [Employee.from_dict(e) for e in self.store.list(EMPLOYEES)]

    def get_employee(self, employee_id: str) -> Optional[Employee]:
        record = self.store.get(EMPLOYEES, employee_id)
        return Employee.from_dict(record) if record else None

    def _clean(self, data: dict) -> dict:
        name = str(data.get("name") or "").strip()
        if not name:
            raise ValidationError("name", "Name is required")
        designation = str(data.get("designation") or "").strip()
        if not designation:
            raise ValidationError("designation", "Designation is required")
        contact = str(data.get("contact_number") or "").strip()
        if not self.contact_re.match(contact):
            raise ValidationError("contact_number", "Valid contact number required")
        if not data.get("joining_date"):
            raise ValidationError("joining_date", "Joining date is required")
        try:
            joining_date = parse_date(data["joining_date"])
        except ValueError:
            raise ValidationError("joining_date", "Joining date must be YYYY-MM-DD")

        return {
            "name": name,
            "designation": designation,
            "monthly_salary": _positive_int(data, "monthly_salary"),
            "joining_date": joining_date.isoformat(),
            "contact_number": contact,
            "is_active": _as_bool(data.get("is_active", True)),
        }

    def create_employee(self, data: dict) -> Employee:
        record = self.store.create(EMPLOYEES, self._clean(data))
        logger.info("Added employee %s (%s)", record["name"], record["designation"])
        return Employee.from_dict(record)

    def update_employee(self, employee_id: str, partial: dict) -> Optional[Employee]:
        existing = self.store.get(EMPLOYEES, employee_id)
        if existing is None:
            return None
        _check_read_only(partial)
        record = self.store.update(EMPLOYEES, employee_id, self._clean({**existing, **partial}))
        return Employee.from_dict(record) if record else None

    def toggle_active(self, employee_id: str) -> Optional[Employee]:
        existing = self.store.get(EMPLOYEES, employee_id)
        if existing is None:
            return None
        record = self.store.update(EMPLOYEES, employee_id,
                                   {"is_active": not existing.get("is_active", True)})
        return Employee.from_dict(record) if record else None

    def delete_employee(self, employee_id: str) -> bool:
        deleted = self.store.delete(EMPLOYEES, employee_id)
        if deleted:
            logger.info("Deleted employee %s", employee_id)
        return deleted
