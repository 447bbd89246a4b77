from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CartRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    user_id: str = Field(min_length=1)
    product_id: str = Field(min_length=1)


class AddItemIn(CartRequest):
    # range and integrality are checked by CartService (INVALID_QUANTITY)
    quantity: Any = 1


class UpdateItemIn(CartRequest):
    quantity: Any


class RemoveItemIn(CartRequest):
    pass
