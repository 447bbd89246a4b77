import logging
from typing import Dict, Optional

from storefront.db import Store
from storefront.models.discount import Discount
from storefront.models.order import OrderStatistics
from storefront.services.discount_service import DiscountService
from storefront.utils.results import service_operation

log = logging.getLogger(__name__)


class AdminService:
    def __init__(self, db: Store, discount_service: Optional[DiscountService] = None):
        self.db = db
        self.discounts = discount_service or DiscountService(db)

    @service_operation("Failed to reset store")
    def reset_store(self) -> Dict[str, str]:
        self.db.reset()
        return {
            "message": "Store reset successfully. All orders, carts, and discount codes have been cleared."
        }

    @service_operation("Failed to get orders")
    def list_orders_with_statistics(self) -> Dict:
        orders = self.db.orders.list()
        stats = OrderStatistics(total_orders=len(orders))
        seen_codes = []
        for o in orders:
            stats.total_items_purchased += o.item_count
            stats.total_purchase_amount += o.total
            if o.discount_code:
                if o.discount_code not in seen_codes:
                    seen_codes.append(o.discount_code)
                stats.total_discount_amount += o.discount_amount or 0
        stats.discount_codes_used = seen_codes
        return {"orders": orders, "statistics": stats}

    @service_operation("Failed to generate discount code")
    def generate_discount(self, force: bool = False) -> Optional[Discount]:
        log.info("Admin discount generation requested (force=%s)", force)
        if force:
            return self.discounts.generate_manually().unwrap()
        return self.discounts.generate_if_eligible(self.db.orders.size()).unwrap()

    def get_stats(self):
        return self.discounts.get_stats()
