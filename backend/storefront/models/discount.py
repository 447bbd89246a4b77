from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from storefront.models.base import ShopModel, utcnow

DISCOUNT_PERCENTAGE = 10


class Discount(ShopModel):
    code: str = Field(pattern=r"^[A-Z0-9]{8}$")
    percentage: Literal[10] = DISCOUNT_PERCENTAGE
    is_used: bool = False
    created_at: datetime = Field(default_factory=utcnow)
    used_at: Optional[datetime] = None


class DiscountStats(ShopModel):
    current_discount: Optional[Discount] = None
    order_count: int
    n: int
    next_discount_at: Optional[int] = None
    total_discounts_used: int
    total_orders: int
    orders_with_discount: int
