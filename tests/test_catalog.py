import unittest
from datetime import date

from bookings import BookingEngine
from catalog import EmployeeService, RoomService
from errors import RoomInUseError, ValidationError
from guests import GuestResolver
from storage import ROOMS
from support import ROOM_101, ROOM_102, make_store

EMPLOYEE = {
    "name": "Rajesh Kumar",
    "designation": "Front Desk Manager",
    "monthly_salary": 35000,
    "joining_date": "2023-01-15",
    "contact_number": "9876543210",
}


class RoomServiceTests(unittest.TestCase):
    def setUp(self):
        self.store = make_store()
        self.rooms = RoomService(self.store)

    def test_create_room(self):
        room = self.rooms.create_room({**ROOM_101, "has_ac": True,
                                       "amenities": "WiFi, TV ,Mini Fridge"})

        self.assertEqual(room.room_number, "101")
        self.assertTrue(room.has_ac)
        self.assertEqual(room.amenities, ["WiFi", "TV", "Mini Fridge"])
        self.assertEqual(self.rooms.get_room(room.id), room)

    def test_room_number_is_unique(self):
        self.rooms.create_room(ROOM_101)
        with self.assertRaises(ValidationError) as ctx:
            self.rooms.create_room({**ROOM_102, "room_number": "101"})
        self.assertEqual(ctx.exception.field, "room_number")

    def test_invalid_fields(self):
        cases = [
            ({**ROOM_101, "room_number": ""}, "room_number"),
            ({**ROOM_101, "type": "penthouse"}, "type"),
            ({**ROOM_101, "beds": 0}, "beds"),
            ({**ROOM_101, "price_per_day": 0}, "price_per_day"),
            ({**ROOM_101, "price_per_day": "cheap"}, "price_per_day"),
        ]
        for data, field in cases:
            with self.assertRaises(ValidationError) as ctx:
                self.rooms.create_room(data)
            self.assertEqual(ctx.exception.field, field)
        self.assertEqual(self.store.list(ROOMS), [])

    def test_numbers_must_be_whole(self):
        for value in (True, 2.7):
            with self.assertRaises(ValidationError) as ctx:
                self.rooms.create_room({**ROOM_101, "beds": value})
            self.assertEqual(ctx.exception.field, "beds")

        room = self.rooms.create_room({**ROOM_101, "beds": 3.0})
        self.assertEqual(room.beds, 3)

    def test_update_keeps_own_number(self):
        room = self.rooms.create_room(ROOM_101)

        updated = self.rooms.update_room(room.id, {"price_per_day": 2500})

        self.assertEqual(updated.price_per_day, 2500)
        self.assertEqual(updated.room_number, "101")

    def test_update_missing(self):
        self.assertIsNone(self.rooms.update_room("missing", {"beds": 2}))

    def test_delete_room(self):
        room = self.rooms.create_room(ROOM_101)
        self.assertTrue(self.rooms.delete_room(room.id))
        self.assertFalse(self.rooms.delete_room(room.id))

    def test_delete_booked_room_refused(self):
        room = self.rooms.create_room(ROOM_101)
        engine = BookingEngine(self.store, GuestResolver(self.store))
        engine.create_booking("Asha", "9876500000", [room.id], "2024-01-01", "2024-01-02")

        with self.assertRaises(RoomInUseError):
            self.rooms.delete_room(room.id)
        self.assertIsNotNone(self.rooms.get_room(room.id))


class EmployeeServiceTests(unittest.TestCase):
    def setUp(self):
        self.employees = EmployeeService(make_store())

    def test_create_employee(self):
        employee = self.employees.create_employee(EMPLOYEE)

        self.assertEqual(employee.joining_date, date(2023, 1, 15))
        self.assertTrue(employee.is_active)
        self.assertEqual(len(self.employees.list_employees()), 1)

    def test_invalid_fields(self):
        cases = [
            ({**EMPLOYEE, "name": " "}, "name"),
            ({**EMPLOYEE, "designation": ""}, "designation"),
            ({**EMPLOYEE, "monthly_salary": -1}, "monthly_salary"),
            ({**EMPLOYEE, "contact_number": "98765"}, "contact_number"),
            ({**EMPLOYEE, "joining_date": ""}, "joining_date"),
            ({**EMPLOYEE, "joining_date": "15/01/2023"}, "joining_date"),
        ]
        for data, field in cases:
            with self.assertRaises(ValidationError) as ctx:
                self.employees.create_employee(data)
            self.assertEqual(ctx.exception.field, field)

    def test_contact_digits_are_configurable(self):
        employees = EmployeeService(make_store(), min_contact_digits=8)
        employee = employees.create_employee({**EMPLOYEE, "contact_number": "98765432"})
        self.assertEqual(employee.contact_number, "98765432")

    def test_toggle_active(self):
        employee = self.employees.create_employee(EMPLOYEE)

        self.assertFalse(self.employees.toggle_active(employee.id).is_active)
        self.assertTrue(self.employees.toggle_active(employee.id).is_active)
        self.assertIsNone(self.employees.toggle_active("missing"))

    def test_update_and_delete(self):
        employee = self.employees.create_employee(EMPLOYEE)

        updated = self.employees.update_employee(employee.id, {"monthly_salary": 40000})
        self.assertEqual(updated.monthly_salary, 40000)

        with self.assertRaises(ValidationError):
            self.employees.update_employee(employee.id, {"id": "other"})

        self.assertTrue(self.employees.delete_employee(employee.id))
        self.assertFalse(self.employees.delete_employee(employee.id))
