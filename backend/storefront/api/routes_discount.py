from fastapi import APIRouter, Depends

from storefront.db import Store, get_db
from storefront.services.discount_service import DiscountService
from storefront.utils.responses import success_response

router = APIRouter(tags=["discount"])


@router.get("", summary="Current unused discount code, if any")
def current_discount(db: Store = Depends(get_db)):
    return success_response(DiscountService(db).get_current())
