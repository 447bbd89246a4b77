import logging
import threading
from typing import Iterable, Optional

from storefront.config import settings
from storefront.models.product import Product
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.discount_repo import DiscountRepository
from storefront.repositories.order_repo import OrderRepository
from storefront.repositories.product_repo import ProductRepository, load_catalogue

log = logging.getLogger(__name__)


class Store:
    """
    Process-lifetime state of the shop.

    Every piece of shared state lives behind its repository; callers never get
    at the backing dicts. ``checkout_lock`` serialises the commit phase of
    checkout (store order, consume discount, regenerate, clear cart) and the
    admin reset, so the order count a regeneration sees is never stale.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self.products = ProductRepository(products)
        self.carts = CartRepository()
        self.orders = OrderRepository()
        self.discounts = DiscountRepository()
        self.checkout_lock = threading.RLock()

    def reset(self):
        """Clear orders, carts and the discount slot. The catalogue is kept."""
        with self.checkout_lock:
            self.orders.clear()
            self.carts.clear()
            self.discounts.clear()
        log.info("Store reset: orders, carts and discount cleared")


_store: Optional[Store] = None
_store_lock = threading.Lock()


def init_db(catalogue_file: Optional[str] = None, reset: bool = False) -> Store:
    """
    Build the process-wide store, loading the catalogue once.

    With reset=True a fresh store replaces any existing one (used by tests).
    """
    global _store
    with _store_lock:
        if _store is None or reset:
            products = load_catalogue(catalogue_file or settings.CATALOGUE_FILE)
            _store = Store(products)
        return _store


def get_db() -> Store:
    return _store if _store is not None else init_db()
