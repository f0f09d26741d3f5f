# guests.py
import logging
from typing import List, Optional

from models import Guest
from storage import GUESTS

logger = logging.getLogger(__name__)


class GuestResolver:
    """Finds or creates guests keyed by mobile number."""

    def __init__(self, store):
        self.store = store

    def list_guests(self) -> List[Guest]:
        return [Guest.from_dict(g) for g in self.store.list(GUESTS)]

    def get_guest(self, guest_id: str) -> Optional[Guest]:
        record = self.store.get(GUESTS, guest_id)
        return Guest.from_dict(record) if record else None

    def find_by_mobile(self, mobile_number: str) -> Optional[Guest]:
        for record in self.store.list(GUESTS):
            if record.get("mobile_number") == mobile_number:
                return Guest.from_dict(record)
        return None

    def resolve_guest(self, full_name: str, mobile_number: str) -> Guest:
        guest = self.find_by_mobile(mobile_number)
        if guest is not None:
            # the stored name wins
            if guest.full_name != full_name:
                logger.debug("Guest %s is stored as %r, ignoring name %r",
                             mobile_number, guest.full_name, full_name)
            return guest

        record = self.store.create(GUESTS, {
            "full_name": full_name,
            "mobile_number": mobile_number,
            "id_document_url": None,
        })
        logger.info("Created guest %s (%s)", record["id"], mobile_number)
        return Guest.from_dict(record)
