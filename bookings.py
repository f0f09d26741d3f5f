# bookings.py
import logging
import re
from datetime import date, datetime
from typing import Iterable, List, Optional

from config import DefaultConfig
from errors import ValidationError
from models import Booking, Guest, Room, parse_date, parse_datetime
from storage import BOOKINGS, GUESTS, ROOMS

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("room_ids", "check_in_date", "check_out_date", "notes", "is_paid")
PAYMENT_FILTERS = ("all", "paid", "unpaid")


def count_nights(check_in: date, check_out: date) -> int:
    return (parse_date(check_out) - parse_date(check_in)).days


def calculate_total_amount(rooms: Iterable[Room], check_in, check_out) -> int:
    nights = count_nights(check_in, check_out)
    return sum(room.price_per_day for room in rooms) * nights


def is_active(booking: Booking, as_of) -> bool:
    """True when as_of falls inside the stay, both ends included.

    A datetime is compared against the stay dates taken at midnight, so the
    afternoon of the check-out day is already outside the stay.
    """
    if isinstance(as_of, datetime):
        as_of = parse_datetime(as_of)
        start = datetime.combine(booking.check_in_date, datetime.min.time())
        end = datetime.combine(booking.check_out_date, datetime.min.time())
        return start <= as_of <= end
    return booking.check_in_date <= as_of <= booking.check_out_date


def _overlaps(a_in: date, a_out: date, b_in: date, b_out: date) -> bool:
    return a_in < b_out and b_in < a_out


def _date_field(value, field: str) -> date:
    if not value:
        raise ValidationError(field, f"{field} is required")
    try:
        return parse_date(value)
    except ValueError:
        raise ValidationError(field, f"{field} must be a date (YYYY-MM-DD)")


def _room_id_list(value) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValidationError("room_ids", "room_ids must be a list of room ids")
    return list(dict.fromkeys(str(room_id) for room_id in value))


def payment_fields(is_paid: bool) -> dict:
    return {"is_paid": is_paid, "payment_status": "paid" if is_paid else "unpaid"}


class BookingEngine:
    """Creates, edits and reads bookings.

    Bookings keep a snapshot of their guest and rooms, but every read joins
    them again against the store; the stored copy is only shown when the
    referenced guest or room no longer exists.
    """

    def __init__(self, store, guests, min_mobile_digits: int = DefaultConfig.MIN_MOBILE_DIGITS):
        self.store = store
        self.guests = guests
        self.mobile_re = re.compile(r"^\d{%d,}$" % min_mobile_digits)

    # reads

    def _join(self, record: dict, rooms_by_id: dict, guests_by_id: dict) -> Booking:
        booking = Booking.from_dict(record)
        guest = guests_by_id.get(booking.guest_id)
        if guest is not None:
            booking.guest = Guest.from_dict(guest)
        snapshots = {r.id: r for r in booking.rooms}
        rooms = []
        for room_id in booking.room_ids:
            if room_id in rooms_by_id:
                rooms.append(Room.from_dict(rooms_by_id[room_id]))
            elif room_id in snapshots:
                rooms.append(snapshots[room_id])
        booking.rooms = rooms
        return booking

    def _join_all(self, records: List[dict]) -> List[Booking]:
        rooms_by_id = {r["id"]: r for r in self.store.list(ROOMS)}
        guests_by_id = {g["id"]: g for g in self.store.list(GUESTS)}
        return [self._join(r, rooms_by_id, guests_by_id) for r in records]

    def list_bookings(self) -> List[Booking]:
        records = list(reversed(self.store.list(BOOKINGS)))
        records.sort(key=lambda r: r.get("created_at") or "", reverse=True)
        return self._join_all(records)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        record = self.store.get(BOOKINGS, booking_id)
        if record is None:
            return None
        return self._join_all([record])[0]

    def is_active(self, booking: Booking, as_of) -> bool:
        return is_active(booking, as_of)

    # validation

    def _validate_guest(self, guest_name, mobile_number):
        if not str(guest_name or "").strip():
            raise ValidationError("guest_name", "Guest name is required")
        if not self.mobile_re.match(str(mobile_number or "").strip()):
            raise ValidationError("mobile_number", "Valid mobile number required")

    def _validate_stay(self, room_ids, check_in, check_out,
                       current_room_ids=(), booking_id=None) -> List[dict]:
        """Check a room selection and date range; return the room records."""
        if not room_ids:
            raise ValidationError("room_ids", "Select at least one room")
        if check_out <= check_in:
            raise ValidationError("check_out_date", "Check-out must be after check-in")

        rooms_by_id = {r["id"]: r for r in self.store.list(ROOMS)}
        selected = []
        for room_id in room_ids:
            room = rooms_by_id.get(room_id)
            if room is None:
                raise ValidationError("room_ids", f"Room {room_id} does not exist")
            if room_id not in current_room_ids and not room.get("is_available", True):
                raise ValidationError("room_ids", f"Room {room['room_number']} is not available")
            selected.append(room)

        for other in self.store.list(BOOKINGS):
            if other.get("id") == booking_id:
                continue
            shared = set(room_ids) & set(other.get("room_ids") or [])
            if not shared:
                continue
            other_in = parse_date(other["check_in_date"])
            other_out = parse_date(other["check_out_date"])
            if _overlaps(check_in, check_out, other_in, other_out):
                number = rooms_by_id[sorted(shared)[0]]["room_number"]
                raise ValidationError(
                    "room_ids",
                    f"Room {number} is already booked from {other_in} to {other_out}",
                )
        return selected

    # writes

    def create_booking(self, guest_name: str, mobile_number: str, room_ids: List[str],
                       check_in, check_out, notes: Optional[str] = None) -> Booking:
        self._validate_guest(guest_name, mobile_number)
        room_ids = _room_id_list(room_ids)
        check_in = _date_field(check_in, "check_in_date")
        check_out = _date_field(check_out, "check_out_date")
        selected = self._validate_stay(room_ids, check_in, check_out)

        guest = self.guests.resolve_guest(str(guest_name).strip(), str(mobile_number).strip())
        rooms = [Room.from_dict(r) for r in selected]
        record = self.store.create(BOOKINGS, {
            "guest_id": guest.id,
            "guest": guest.to_dict(),
            "room_ids": room_ids,
            "rooms": [r.to_dict() for r in rooms],
            "check_in_date": check_in.isoformat(),
            "check_out_date": check_out.isoformat(),
            "total_amount": calculate_total_amount(rooms, check_in, check_out),
            "notes": notes or None,
            **payment_fields(False),
        })
        logger.info("Booked %s for %s, %s to %s, total %d",
                    ", ".join(r.room_number for r in rooms), guest.full_name,
                    check_in, check_out, record["total_amount"])
        return self.get_booking(record["id"]) or Booking.from_dict(record)

    def update_booking(self, booking_id: str, partial: dict) -> Optional[Booking]:
        existing = self.store.get(BOOKINGS, booking_id)
        if existing is None:
            return None
        for key in partial:
            if key not in EDITABLE_FIELDS:
                raise ValidationError(key, f"{key} cannot be changed")

        changes = {}
        if "notes" in partial:
            changes["notes"] = partial["notes"] or None
        if "is_paid" in partial:
            changes.update(payment_fields(bool(partial["is_paid"])))

        if {"room_ids", "check_in_date", "check_out_date"} & set(partial):
            current_room_ids = existing.get("room_ids") or []
            room_ids = _room_id_list(partial.get("room_ids", current_room_ids))
            check_in = _date_field(partial.get("check_in_date", existing["check_in_date"]),
                                   "check_in_date")
            check_out = _date_field(partial.get("check_out_date", existing["check_out_date"]),
                                    "check_out_date")
            selected = self._validate_stay(room_ids, check_in, check_out,
                                           current_room_ids=current_room_ids,
                                           booking_id=booking_id)
            rooms = [Room.from_dict(r) for r in selected]
            changes.update({
                "room_ids": room_ids,
                "rooms": [r.to_dict() for r in rooms],
                "check_in_date": check_in.isoformat(),
                "check_out_date": check_out.isoformat(),
                "total_amount": calculate_total_amount(rooms, check_in, check_out),
            })

        record = self.store.update(BOOKINGS, booking_id, changes)
        if record is None:
            return None
        return self._join_all([record])[0]

    def set_payment(self, booking_id: str, is_paid: bool) -> Optional[Booking]:
        return self.update_booking(booking_id, {"is_paid": is_paid})

    def toggle_payment(self, booking_id: str) -> Optional[Booking]:
        existing = self.store.get(BOOKINGS, booking_id)
        if existing is None:
            return None
        return self.set_payment(booking_id, not existing.get("is_paid", False))

    def delete_booking(self, booking_id: str) -> bool:
        deleted = self.store.delete(BOOKINGS, booking_id)
        if deleted:
            logger.info("Deleted booking %s", booking_id)
        return deleted

    # history

    def search_bookings(self, term: Optional[str] = None, payment: Optional[str] = None,
                        date_from=None, date_to=None) -> List[Booking]:
        payment = payment or "all"
        if payment not in PAYMENT_FILTERS:
            raise ValidationError("payment", f"payment must be one of {', '.join(PAYMENT_FILTERS)}")
        start = _date_field(date_from, "date_from") if date_from else None
        end = _date_field(date_to, "date_to") if date_to else None
        term = (term or "").strip().lower()

        results = []
        for booking in self.list_bookings():
            if term:
                name = booking.guest.full_name.lower() if booking.guest else ""
                mobile = booking.guest.mobile_number if booking.guest else ""
                numbers = [r.room_number.lower() for r in booking.rooms]
                if term not in name and term not in mobile and not any(term in n for n in numbers):
                    continue
            if payment == "paid" and not booking.is_paid:
                continue
            if payment == "unpaid" and booking.is_paid:
                continue
            created = booking.created_at.date() if booking.created_at else None
            if start and (created is None or created < start):
                continue
            if end and (created is None or created > end):
                continue
            results.append(booking)
        return results


def summarize(bookings: List[Booking]) -> dict:
    paid = [b for b in bookings if b.is_paid]
    return {
        "total_bookings": len(bookings),
        "paid_bookings": len(paid),
        "total_revenue": sum(b.total_amount for b in paid),
    }
