from fastapi import APIRouter, Depends

from storefront.api.routes_checkout import get_payment_adapter
from storefront.adapters.mock_payment import MockPaymentAdapter
from storefront.db import Store, get_db

router = APIRouter()


@router.get("/health", tags=["health"])
def health(
    db: Store = Depends(get_db),
    payment_adapter: MockPaymentAdapter = Depends(get_payment_adapter),
):
    catalogue_ok = db.products.count() > 0
    payment_ok = payment_adapter.health_check()
    return {
        "status": "ok" if catalogue_ok and payment_ok else "degraded",
        "catalogue": catalogue_ok,
        "payment_adapter": payment_ok,
        "orders": db.orders.size(),
    }
