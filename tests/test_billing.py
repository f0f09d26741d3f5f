import unittest
from datetime import date

from billing import build_bill, format_currency
from models import Booking, Guest, Room


class FormatCurrencyTests(unittest.TestCase):
    def test_indian_grouping(self):
        self.assertEqual(format_currency(0), "₹0")
        self.assertEqual(format_currency(950), "₹950")
        self.assertEqual(format_currency(11000), "₹11,000")
        self.assertEqual(format_currency(110000), "₹1,10,000")
        self.assertEqual(format_currency(12345678), "₹1,23,45,678")
        self.assertEqual(format_currency(-2500, symbol="Rs "), "-Rs 2,500")


class BillTests(unittest.TestCase):
    def setUp(self):
        self.booking = Booking(
            id="1700000000",
            guest_id="g1",
            guest=Guest("Asha Rao", "9876500000", id="g1"),
            room_ids=["r1", "r2"],
            rooms=[Room("101", type="single", price_per_day=2000, id="r1"),
                   Room("102", type="double", price_per_day=3500, id="r2")],
            check_in_date=date(2024, 1, 1),
            check_out_date=date(2024, 1, 3),
            total_amount=11000,
        )

    def test_lines_and_total(self):
        bill = build_bill(self.booking, "Sea View", issued_on=date(2024, 1, 3))

        self.assertEqual([line.subtotal for line in bill.lines], [4000, 7000])
        self.assertEqual(bill.filename, "hotel-bill-1700000000.txt")

    def test_render(self):
        text = build_bill(self.booking, "Sea View", issued_on=date(2024, 1, 3)).render()

        self.assertIn("Invoice #: 1700000000", text)
        self.assertIn("Date: 03 Jan 2024", text)
        self.assertIn("Name: Asha Rao", text)
        self.assertIn("Room 101 (single)  ₹2,000/day x 2 days  ₹4,000", text)
        self.assertIn("Room 102 (double)  ₹3,500/day x 2 days  ₹7,000", text)
        self.assertIn("Total Amount: ₹11,000", text)
        self.assertIn("Payment Status: Unpaid", text)
