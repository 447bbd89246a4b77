import threading
from typing import Dict, Optional

from storefront.models.cart import Cart


class CartRepository:
    """
    Per-user carts keyed by user id.

    ``lock`` is re-entrant; services hold it across read-modify-write
    sequences so concurrent requests for the same cart cannot interleave.
    """

    def __init__(self):
        self._carts: Dict[str, Cart] = {}
        self.lock = threading.RLock()

    def get(self, user_id: str) -> Optional[Cart]:
        with self.lock:
            return self._carts.get(user_id)

    def get_or_create(self, user_id: str) -> Cart:
        with self.lock:
            c = self._carts.get(user_id)
            if c is None:
                c = Cart.empty_for(user_id)
                self._carts[user_id] = c
            return c

    def count(self) -> int:
        with self.lock:
            return len(self._carts)

    def clear(self):
        with self.lock:
            self._carts.clear()
