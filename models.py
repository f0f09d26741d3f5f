# models.py
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Optional, List

ROOM_TYPES = ("single", "double", "suite", "deluxe")
PAYMENT_STATUSES = ("paid", "unpaid", "partial")   # partial: no flow sets it yet


def parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def parse_datetime(value) -> datetime:
    """Naive local datetime; an offset-aware value is converted to local time."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _iso(value):
    return value.isoformat() if value is not None else None


@dataclass
class Room:
    room_number: str
    type: str = "single"
    has_ac: bool = False
    beds: int = 1
    price_per_day: int = 0
    is_available: bool = True
    amenities: List[str] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Room":
        return cls(
            id=data.get("id"),
            room_number=str(data.get("room_number", "")),
            type=data.get("type", "single"),
            has_ac=bool(data.get("has_ac", False)),
            beds=int(data.get("beds", 1)),
            price_per_day=int(data.get("price_per_day", 0)),
            is_available=bool(data.get("is_available", True)),
            amenities=list(data.get("amenities") or []),
            created_at=parse_datetime(data["created_at"]) if data.get("created_at") else None,
            updated_at=parse_datetime(data["updated_at"]) if data.get("updated_at") else None,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = _iso(self.created_at)
        data["updated_at"] = _iso(self.updated_at)
        return data


@dataclass
class Employee:
    name: str
    designation: str = ""
    monthly_salary: int = 0
    joining_date: Optional[date] = None
    contact_number: str = ""
    is_active: bool = True
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Employee":
        return cls(
            id=data.get("id"),
            name=data.get("name", ""),
            designation=data.get("designation", ""),
            monthly_salary=int(data.get("monthly_salary", 0)),
            joining_date=parse_date(data["joining_date"]) if data.get("joining_date") else None,
            contact_number=str(data.get("contact_number", "")),
            is_active=bool(data.get("is_active", True)),
            created_at=parse_datetime(data["created_at"]) if data.get("created_at") else None,
            updated_at=parse_datetime(data["updated_at"]) if data.get("updated_at") else None,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["joining_date"] = _iso(self.joining_date)
        data["created_at"] = _iso(self.created_at)
        data["updated_at"] = _iso(self.updated_at)
        return data


@dataclass
class Guest:
    full_name: str
    mobile_number: str
    id_document_url: Optional[str] = None   # scanned identity card, if any
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Guest":
        return cls(
            id=data.get("id"),
            full_name=data.get("full_name", ""),
            mobile_number=str(data.get("mobile_number", "")),
            id_document_url=data.get("id_document_url"),
            created_at=parse_datetime(data["created_at"]) if data.get("created_at") else None,
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["created_at"] = _iso(self.created_at)
        return data


@dataclass
class Booking:
    guest_id: str
    check_in_date: date
    check_out_date: date   # exclusive: the guest leaves that morning
    room_ids: List[str] = field(default_factory=list)
    guest: Optional[Guest] = None
    rooms: List[Room] = field(default_factory=list)
    total_amount: int = 0
    is_paid: bool = False
    payment_status: str = "unpaid"
    notes: Optional[str] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def nights(self) -> int:
        return (self.check_out_date - self.check_in_date).days

    @classmethod
    def from_dict(cls, data: dict) -> "Booking":
        guest = data.get("guest")
        is_paid = bool(data.get("is_paid", False))
        status = data.get("payment_status")
        if status not in PAYMENT_STATUSES:
            status = "paid" if is_paid else "unpaid"
        return cls(
            id=data.get("id"),
            guest_id=data.get("guest_id", ""),
            guest=Guest.from_dict(guest) if guest else None,
            room_ids=list(data.get("room_ids") or []),
            rooms=[Room.from_dict(r) for r in data.get("rooms") or []],
            check_in_date=parse_date(data["check_in_date"]),
            check_out_date=parse_date(data["check_out_date"]),
            total_amount=int(data.get("total_amount", 0)),
            is_paid=is_paid,
            payment_status=status,
            notes=data.get("notes"),
            created_at=parse_datetime(data["created_at"]) if data.get("created_at") else None,
            updated_at=parse_datetime(data["updated_at"]) if data.get("updated_at") else None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "guest_id": self.guest_id,
            "guest": self.guest.to_dict() if self.guest else None,
            "room_ids": list(self.room_ids),
            "rooms": [r.to_dict() for r in self.rooms],
            "check_in_date": _iso(self.check_in_date),
            "check_out_date": _iso(self.check_out_date),
            "total_amount": self.total_amount,
            "is_paid": self.is_paid,
            "payment_status": self.payment_status,
            "notes": self.notes,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


@dataclass
class DashboardStats:
    total_revenue: int = 0
    monthly_revenue: int = 0
    total_bookings: int = 0
    active_bookings: int = 0
    occupancy_rate: float = 0.0
    total_rooms: int = 0
    available_rooms: int = 0
    total_employees: int = 0
    monthly_expenses: int = 0

    @property
    def monthly_profit(self) -> int:
        return self.monthly_revenue - self.monthly_expenses

    def to_dict(self) -> dict:
        data = asdict(self)
        data["monthly_profit"] = self.monthly_profit
        return data


@dataclass
class RevenuePoint:
    month: str        # e.g. "Jan 2024"
    revenue: int = 0
    bookings: int = 0

    def to_dict(self) -> dict:
        return asdict(self)
