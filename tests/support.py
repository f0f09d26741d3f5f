from datetime import datetime, timedelta

from storage import EntityStore, MemoryBackend


class FixedClock:
    def __init__(self, now=datetime(2024, 1, 15, 10, 0)):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


def make_store(clock=None):
    return EntityStore(MemoryBackend(), clock=clock or FixedClock())


ROOM_101 = {"room_number": "101", "type": "single", "beds": 1, "price_per_day": 2000}
ROOM_102 = {"room_number": "102", "type": "double", "beds": 2, "price_per_day": 3500}
