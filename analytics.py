# analytics.py
from datetime import datetime
from typing import Callable, List, Optional

from bookings import is_active
from models import Booking, DashboardStats, Employee, RevenuePoint, parse_datetime
from storage import BOOKINGS, EMPLOYEES, ROOMS

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def month_label(value: datetime) -> str:
    return f"{MONTH_NAMES[value.month - 1]} {value.year}"


class AnalyticsAggregator:
    """Dashboard figures, recomputed from a full scan on every call."""

    def __init__(self, store, clock: Optional[Callable[[], datetime]] = None):
        self.store = store
        self.clock = clock or store.clock

    def _bookings(self) -> List[Booking]:
        return [Booking.from_dict(b) for b in self.store.list(BOOKINGS)]

    def compute_stats(self, as_of=None) -> DashboardStats:
        as_of = as_of or self.clock()
        if isinstance(as_of, datetime):
            as_of = parse_datetime(as_of)
        bookings = self._bookings()
        total_rooms = len(self.store.list(ROOMS))
        employees = [Employee.from_dict(e) for e in self.store.list(EMPLOYEES)]
        active_staff = [e for e in employees if e.is_active]

        paid = [b for b in bookings if b.is_paid]
        this_month = [
            b for b in paid
            if b.created_at and (b.created_at.year, b.created_at.month) == (as_of.year, as_of.month)
        ]
        active = [b for b in bookings if is_active(b, as_of)]
        occupied = sum(len(b.room_ids) for b in active)

        return DashboardStats(
            total_revenue=sum(b.total_amount for b in paid),
            monthly_revenue=sum(b.total_amount for b in this_month),
            total_bookings=len(bookings),
            active_bookings=len(active),
            occupancy_rate=round(occupied / total_rooms * 100, 2) if total_rooms else 0.0,
            total_rooms=total_rooms,
            available_rooms=max(total_rooms - occupied, 0),
            total_employees=len(active_staff),
            monthly_expenses=sum(e.monthly_salary for e in active_staff),
        )

    def compute_revenue_series(self, as_of=None, months: int = 6) -> List[RevenuePoint]:
        as_of = as_of or self.clock()
        if not isinstance(as_of, datetime):
            # a bare date covers the whole day
            as_of = datetime.combine(as_of, datetime.max.time())
        as_of = parse_datetime(as_of)

        points = {}
        for booking in self._bookings():
            if booking.created_at is None or booking.created_at > as_of:
                continue
            label = month_label(booking.created_at)
            point = points.setdefault(label, RevenuePoint(month=label))
            if booking.is_paid:
                point.revenue += booking.total_amount
            point.bookings += 1

        series = list(points.values())
        return series[-months:] if months > 0 else []
