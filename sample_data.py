# sample_data.py
import logging

from storage import EMPLOYEES, ROOMS

logger = logging.getLogger(__name__)

SAMPLE_ROOMS = [
    {"room_number": "101", "type": "single", "has_ac": True, "beds": 1,
     "price_per_day": 2000, "is_available": True,
     "amenities": ["WiFi", "TV", "Mini Fridge"]},
    {"room_number": "102", "type": "double", "has_ac": True, "beds": 2,
     "price_per_day": 3500, "is_available": True,
     "amenities": ["WiFi", "TV", "Mini Fridge", "Balcony"]},
    {"room_number": "201", "type": "suite", "has_ac": True, "beds": 2,
     "price_per_day": 6000, "is_available": True,
     "amenities": ["WiFi", "TV", "Mini Fridge", "Balcony", "Kitchenette"]},
]

SAMPLE_EMPLOYEES = [
    {"name": "Rajesh Kumar", "designation": "Front Desk Manager",
     "monthly_salary": 35000, "joining_date": "2023-01-15",
     "contact_number": "9876543210", "is_active": True},
    {"name": "Priya Sharma", "designation": "Housekeeping Supervisor",
     "monthly_salary": 28000, "joining_date": "2023-03-01",
     "contact_number": "9876543211", "is_active": True},
]


def seed_sample_data(store, rooms, employees) -> bool:
    """Add demo rooms and staff unless the rooms collection was ever written."""
    if store.exists(ROOMS):
        return False
    for data in SAMPLE_ROOMS:
        rooms.create_room(data)
    for data in SAMPLE_EMPLOYEES:
        employees.create_employee(data)
    logger.info("Seeded %d rooms and %d employees", len(SAMPLE_ROOMS), len(SAMPLE_EMPLOYEES))
    return True
