from datetime import datetime
from typing import Union

from pydantic import ConfigDict, Field, NonNegativeFloat, NonNegativeInt

from storefront.models.base import ShopModel, utcnow


class Product(ShopModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    price: Union[NonNegativeInt, NonNegativeFloat]
    category: str = ""
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
