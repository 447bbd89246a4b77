from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CheckoutIn(BaseModel):
    """Checkout body; CheckoutService does the semantic validation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
    user_id: Optional[str] = None
    payment_method: Optional[Dict[str, Any]] = None
    discount_code: Optional[str] = None
