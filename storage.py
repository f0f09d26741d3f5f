# storage.py
import json
import logging
import os
import threading
import time
from datetime import datetime
from typing import Callable, Dict, List, Optional

from errors import StorageUnavailable

logger = logging.getLogger(__name__)

# collection keys, one JSON document each
ROOMS = "hotel_rooms"
EMPLOYEES = "hotel_employees"
GUESTS = "hotel_guests"
BOOKINGS = "hotel_bookings"

PROTECTED_FIELDS = ("id", "created_at")


class MemoryBackend:
    """Keeps each collection as a JSON string in a dict."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def load(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def save(self, key: str, text: str) -> None:
        self._data[key] = text


class JsonFileBackend:
    """One <key>.json file per collection inside data_dir."""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def _path(self, key: str) -> str:
        return os.path.join(self.data_dir, f"{key}.json")

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, encoding="utf-8") as fh:
                return fh.read()
        except OSError as exc:
            raise StorageUnavailable(f"cannot read {path}: {exc}") from exc

    def save(self, key: str, text: str) -> None:
        path = self._path(key)
        try:
            os.makedirs(self.data_dir, exist_ok=True)
            with open(path, "w", encoding="utf-8") as fh:
                fh.write(text)
        except OSError as exc:
            raise StorageUnavailable(f"cannot write {path}: {exc}") from exc


class TimeIdFactory:
    """Ids from the nanosecond clock, bumped so two calls never collide."""

    def __init__(self):
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> str:
        with self._lock:
            value = max(time.time_ns(), self._last + 1)
            self._last = value
            return str(value)


class EntityStore:
    """Generic get/add/update/delete over named collections.

    Each collection is an ordered list of dict records. Every mutation
    re-serializes the whole collection through the backend. With no backend,
    or a backend raising StorageUnavailable, reads come back empty and
    writes are dropped.
    """

    def __init__(self, backend=None,
                 clock: Optional[Callable[[], datetime]] = None,
                 id_factory: Optional[Callable[[], str]] = None):
        self.backend = backend
        self.clock = clock or datetime.now
        self.id_factory = id_factory or TimeIdFactory()

    def _read(self, collection: str) -> List[dict]:
        if self.backend is None:
            return []
        try:
            text = self.backend.load(collection)
        except StorageUnavailable as exc:
            logger.warning("Reading %s failed, treating as empty: %s", collection, exc)
            return []
        return json.loads(text) if text else []

    def _write(self, collection: str, records: List[dict]) -> None:
        if self.backend is None:
            logger.warning("No storage available, dropped write to %s", collection)
            return
        try:
            self.backend.save(collection, json.dumps(records))
        except StorageUnavailable as exc:
            logger.warning("Dropped write to %s: %s", collection, exc)

    def _now(self) -> str:
        return self.clock().isoformat()

    def exists(self, collection: str) -> bool:
        if self.backend is None:
            return False
        try:
            return self.backend.load(collection) is not None
        except StorageUnavailable:
            return False

    def list(self, collection: str) -> List[dict]:
        return self._read(collection)

    def get(self, collection: str, entity_id: str) -> Optional[dict]:
        for record in self._read(collection):
            if record.get("id") == entity_id:
                return record
        return None

    def create(self, collection: str, record: dict) -> dict:
        records = self._read(collection)
        now = self._now()
        new_record = dict(record)
        new_record["id"] = self.id_factory()
        new_record["created_at"] = now
        new_record["updated_at"] = now
        records.append(new_record)
        self._write(collection, records)
        return new_record

    def update(self, collection: str, entity_id: str, partial: dict) -> Optional[dict]:
        records = self._read(collection)
        for i, record in enumerate(records):
            if record.get("id") != entity_id:
                continue
            changes = {k: v for k, v in partial.items() if k not in PROTECTED_FIELDS}
            updated = {**record, **changes, "updated_at": self._now()}
            records[i] = updated
            self._write(collection, records)
            return updated
        return None

    def delete(self, collection: str, entity_id: str) -> bool:
        records = self._read(collection)
        remaining = [r for r in records if r.get("id") != entity_id]
        if len(remaining) == len(records):
            return False
        self._write(collection, remaining)
        return True
