import enum
from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import ConfigDict, Field

from storefront.models.base import ShopModel, utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class PaymentType(str, enum.Enum):
    CARD = "card"
    PAYPAL = "paypal"
    APPLE_PAY = "apple_pay"


class PaymentMethod(ShopModel):
    type: PaymentType


class OrderItem(ShopModel):
    """One purchased line, copied from the cart at checkout."""

    model_config = ConfigDict(frozen=True)

    product_id: str
    quantity: int
    added_at: datetime


class Order(ShopModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    items: Tuple[OrderItem, ...]
    total: int
    discount_code: Optional[str] = None
    discount_amount: Optional[int] = None
    status: OrderStatus = OrderStatus.PROCESSING
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self.items)


class CheckoutResult(ShopModel):
    order_id: str
    total: int
    discount_amount: Optional[int] = None
    status: OrderStatus
    created_at: datetime
    generated_discount_code: Optional[str] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class OrderStatistics(ShopModel):
    total_orders: int = 0
    total_items_purchased: int = 0
    total_purchase_amount: int = 0
    discount_codes_used: List[str] = Field(default_factory=list)
    total_discount_amount: int = 0
