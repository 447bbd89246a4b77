from typing import Optional

from fastapi import APIRouter, Depends, Query

from storefront.db import Store, get_db
from storefront.schemas.cart_schema import AddItemIn, RemoveItemIn, UpdateItemIn
from storefront.services.cart_service import CartService
from storefront.utils.responses import error_response, from_result
from storefront.utils.results import ErrorCode

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", summary="Get cart")
def get_cart(
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Store = Depends(get_db),
):
    if not user_id:
        return error_response(ErrorCode.INVALID_REQUEST, "userId query parameter is required")
    return from_result(CartService(db).get_or_create_cart(user_id))


@router.post("", summary="Add item to cart")
def add_item(payload: AddItemIn, db: Store = Depends(get_db)):
    svc = CartService(db)
    return from_result(svc.add_item(payload.user_id, payload.product_id, payload.quantity))


@router.patch("/update", summary="Set item quantity")
def update_item(payload: UpdateItemIn, db: Store = Depends(get_db)):
    svc = CartService(db)
    return from_result(svc.update_quantity(payload.user_id, payload.product_id, payload.quantity))


@router.delete("/remove", summary="Remove item")
def remove_item(payload: RemoveItemIn, db: Store = Depends(get_db)):
    return from_result(CartService(db).remove_item(payload.user_id, payload.product_id))
