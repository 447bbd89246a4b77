from datetime import datetime

from pydantic import Field

from storefront.models.base import ShopModel, utcnow


class CartItem(ShopModel):
    product_id: str
    # positive by caller contract; a line is removed rather than set to zero
    quantity: int
    added_at: datetime = Field(default_factory=utcnow)
