import threading
from datetime import datetime
from typing import Optional

from storefront.models.discount import Discount


class DiscountRepository:
    """The single process-wide discount slot. Holds at most one Discount."""

    def __init__(self):
        self._current: Optional[Discount] = None
        self._lock = threading.RLock()

    def get(self) -> Optional[Discount]:
        with self._lock:
            return self._current

    def replace(self, discount: Discount) -> Discount:
        # previous discount is discarded whether used or not
        with self._lock:
            self._current = discount
            return discount

    def mark_used(self, when: datetime) -> bool:
        with self._lock:
            d = self._current
            if d is None or d.is_used:
                return False
            d.is_used = True
            d.used_at = when
            return True

    def clear(self):
        with self._lock:
            self._current = None
