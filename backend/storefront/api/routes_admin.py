from fastapi import APIRouter, Depends, Query

from storefront.db import Store, get_db
from storefront.services.admin_service import AdminService
from storefront.utils.responses import from_result, success_response

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/stats", summary="Discount statistics")
def stats(db: Store = Depends(get_db)):
    return from_result(AdminService(db).get_stats())


@router.get("/orders", summary="All orders with aggregate statistics")
def list_orders(db: Store = Depends(get_db)):
    return from_result(AdminService(db).list_orders_with_statistics())


@router.post("/discount/generate", summary="Generate a discount code")
def generate_discount(
    force: bool = Query(False, description="skip the every-Nth-order condition"),
    db: Store = Depends(get_db),
):
    result = AdminService(db).generate_discount(force=force)
    if result.success and result.data is None:
        return success_response(
            None,
            message=(
                "Discount code generation condition not satisfied. "
                "Next discount will be available on the next Nth order."
            ),
        )
    return from_result(result, success_status=201)


@router.post("/reset", summary="Clear orders, carts and discount; keep products")
def reset(db: Store = Depends(get_db)):
    return from_result(AdminService(db).reset_store())
