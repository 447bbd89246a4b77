import threading
from typing import Dict, List, Optional

from storefront.models.order import Order


class OrderRepository:
    """Append-only order ledger; the source of truth for order statistics."""

    def __init__(self):
        self._orders: Dict[str, Order] = {}
        self._lock = threading.RLock()

    def store(self, order: Order) -> Order:
        with self._lock:
            if order.id in self._orders:
                raise ValueError(f"Order {order.id} already stored")
            self._orders[order.id] = order
            return order

    def get(self, order_id: str) -> Optional[Order]:
        with self._lock:
            return self._orders.get(order_id)

    def list(self) -> List[Order]:
        with self._lock:
            return list(self._orders.values())

    def size(self) -> int:
        with self._lock:
            return len(self._orders)

    def clear(self):
        with self._lock:
            self._orders.clear()
