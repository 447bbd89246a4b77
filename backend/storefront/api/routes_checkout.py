from fastapi import APIRouter, Depends

from storefront.adapters.mock_payment import MockPaymentAdapter
from storefront.config import settings
from storefront.db import Store, get_db
from storefront.schemas.checkout_schema import CheckoutIn
from storefront.services.checkout_service import CheckoutService
from storefront.utils.responses import from_result

router = APIRouter(tags=["checkout"])


def get_payment_adapter() -> MockPaymentAdapter:
    return MockPaymentAdapter(
        delay_ms=settings.PAYMENT_MOCK_DELAY_MS,
        success_rate=settings.PAYMENT_SUCCESS_RATE,
    )


@router.post("", summary="Checkout the user's cart")
async def checkout(
    payload: CheckoutIn,
    db: Store = Depends(get_db),
    payment_adapter: MockPaymentAdapter = Depends(get_payment_adapter),
):
    svc = CheckoutService(db, payment_adapter=payment_adapter)
    result = await svc.process_checkout(
        payload.user_id, payload.payment_method, discount_code=payload.discount_code
    )
    return from_result(result, success_status=201)
