# billing.py
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from config import DefaultConfig
from models import Booking

CURRENCY_SYMBOL = DefaultConfig.CURRENCY_SYMBOL


def format_currency(amount, symbol: str = CURRENCY_SYMBOL) -> str:
    """Indian digit grouping, no decimals: 1234567 -> ₹12,34,567."""
    amount = int(round(amount))
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"{sign}{symbol}{digits}"


def format_date(value: date) -> str:
    return value.strftime("%d %b %Y")


@dataclass
class BillLine:
    room_number: str
    room_type: str
    rate: int
    nights: int

    @property
    def subtotal(self) -> int:
        return self.rate * self.nights


@dataclass
class Bill:
    invoice_number: str
    issued_on: date
    hotel_name: str
    guest_name: str
    mobile_number: str
    check_in_date: date
    check_out_date: date
    total_amount: int
    is_paid: bool
    lines: List[BillLine] = field(default_factory=list)
    currency_symbol: str = CURRENCY_SYMBOL

    @property
    def filename(self) -> str:
        return f"hotel-bill-{self.invoice_number}.txt"

    def _money(self, amount) -> str:
        return format_currency(amount, self.currency_symbol)

    def render(self) -> str:
        out = [
            "Hotel Bill",
            self.hotel_name,
            f"Invoice #: {self.invoice_number}",
            f"Date: {format_date(self.issued_on)}",
            "",
            "Guest Details:",
            f"Name: {self.guest_name}",
            f"Mobile: {self.mobile_number}",
            f"Check-in: {format_date(self.check_in_date)}",
            f"Check-out: {format_date(self.check_out_date)}",
            "",
            "Room Details:",
        ]
        for line in self.lines:
            out.append(
                f"Room {line.room_number} ({line.room_type})  "
                f"{self._money(line.rate)}/day x {line.nights} days  {self._money(line.subtotal)}"
            )
        out += [
            "",
            f"Total Amount: {self._money(self.total_amount)}",
            f"Payment Status: {'Paid' if self.is_paid else 'Unpaid'}",
            "",
            "Thank you for choosing our hotel!",
            "For any queries, please contact the front desk.",
        ]
        return "\n".join(out) + "\n"


def build_bill(booking: Booking, hotel_name: str, issued_on: Optional[date] = None,
               currency_symbol: str = CURRENCY_SYMBOL) -> Bill:
    """Bill for a booking whose guest and rooms have been joined in."""
    nights = booking.nights
    guest = booking.guest
    return Bill(
        invoice_number=booking.id or "",
        issued_on=issued_on or date.today(),
        hotel_name=hotel_name,
        guest_name=guest.full_name if guest else "",
        mobile_number=guest.mobile_number if guest else "",
        check_in_date=booking.check_in_date,
        check_out_date=booking.check_out_date,
        total_amount=booking.total_amount,
        is_paid=booking.is_paid,
        lines=[BillLine(r.room_number, r.type, r.price_per_day, nights) for r in booking.rooms],
        currency_symbol=currency_symbol,
    )
