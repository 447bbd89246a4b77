import logging
from typing import Optional

from storefront.config import settings
from storefront.db import Store
from storefront.models.base import utcnow
from storefront.models.discount import Discount, DiscountStats
from storefront.utils.results import ErrorCode, ShopError, service_operation
from storefront.utils.tokens import generate_discount_code

log = logging.getLogger(__name__)


class DiscountService:
    """
    Every Nth order earns a fresh discount code.

    Generation is keyed to the ledger's order *count*, not to a particular
    order: asking again at the same count regenerates again, and a code nobody
    used is silently replaced at the next threshold. Callers that must hand a
    code to a customer capture it from the generation result.
    """

    def __init__(self, db: Store, n: Optional[int] = None):
        self.db = db
        self.slot = db.discounts
        self.n = n if n is not None else settings.DISCOUNT_EVERY_N_ORDERS
        if self.n < 1:
            raise ValueError(f"discount interval must be a positive integer, got {self.n}")

    def is_eligible(self, order_count: int) -> bool:
        return order_count > 0 and order_count % self.n == 0

    def _issue(self) -> Discount:
        discount = Discount(code=generate_discount_code(), created_at=utcnow())
        self.slot.replace(discount)
        log.info("Issued discount code %s", discount.code)
        return discount

    @service_operation("Failed to generate discount code")
    def generate_if_eligible(self, order_count: int) -> Optional[Discount]:
        if not self.is_eligible(order_count):
            return self.slot.get()
        return self._issue()

    @service_operation("Failed to generate discount code")
    def generate_manually(self) -> Discount:
        return self._issue()

    @service_operation("Failed to validate discount code")
    def validate(self, code: str) -> Discount:
        current = self.slot.get()
        if current is None:
            raise ShopError(ErrorCode.DISCOUNT_NOT_FOUND, "No discount code available")
        if current.code != code:
            raise ShopError(ErrorCode.INVALID_DISCOUNT_CODE, "Invalid discount code")
        if current.is_used:
            raise ShopError(
                ErrorCode.DISCOUNT_ALREADY_USED, "Discount code has already been used"
            )
        return current

    def mark_used(self) -> None:
        if self.slot.mark_used(utcnow()):
            log.info("Discount code %s consumed", self.slot.get().code)

    def get_current(self) -> Optional[Discount]:
        """The active discount, or None when the slot is empty or already used."""
        current = self.slot.get()
        return current if current and not current.is_used else None

    @service_operation("Failed to get discount stats")
    def get_stats(self) -> DiscountStats:
        orders = self.db.orders.list()
        order_count = len(orders)
        used = sum(1 for o in orders if o.discount_code)
        remainder = order_count % self.n
        return DiscountStats(
            current_discount=self.slot.get(),
            order_count=order_count,
            n=self.n,
            next_discount_at=None if remainder == 0 else self.n - remainder,
            total_discounts_used=used,
            total_orders=order_count,
            orders_with_discount=used,
        )

    def clear(self):
        self.slot.clear()
