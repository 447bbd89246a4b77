from fastapi import APIRouter, Depends

from storefront.db import Store, get_db
from storefront.utils.responses import error_response, success_response
from storefront.utils.results import ErrorCode

router = APIRouter(tags=["catalogue"])


@router.get("", summary="List products")
def list_products(db: Store = Depends(get_db)):
    return success_response(db.products.list())


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Store = Depends(get_db)):
    p = db.products.get(product_id)
    if not p:
        return error_response(
            ErrorCode.PRODUCT_NOT_FOUND, f"Product with ID {product_id} not found"
        )
    return success_response(p)
