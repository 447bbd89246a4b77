from datetime import datetime
from typing import List

from pydantic import Field

from storefront.models.base import ShopModel, utcnow
from storefront.models.cart_item import CartItem


class Cart(ShopModel):
    id: str
    user_id: str
    items: List[CartItem] = Field(default_factory=list)
    # derived from items and catalogue prices; only CartService writes these
    total: int = 0
    item_count: int = 0
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @classmethod
    def empty_for(cls, user_id: str) -> "Cart":
        return cls(id=f"cart-{user_id}", user_id=user_id)

    def find_item(self, product_id: str):
        return next((it for it in self.items if it.product_id == product_id), None)
