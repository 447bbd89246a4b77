import logging
from typing import Optional, Union

from pydantic import ValidationError

from storefront.adapters.mock_payment import MockPaymentAdapter, PaymentDeclined
from storefront.config import settings
from storefront.db import Store
from storefront.models.base import utcnow
from storefront.models.order import (
    CheckoutResult,
    Order,
    OrderItem,
    OrderStatus,
    PaymentMethod,
    PaymentType,
)
from storefront.services.cart_service import CartService
from storefront.services.discount_service import DiscountService
from storefront.utils.money import percentage_of
from storefront.utils.results import ErrorCode, ShopError, service_operation
from storefront.utils.tokens import generate_order_id

log = logging.getLogger(__name__)

VALID_PAYMENT_TYPES = [t.value for t in PaymentType]


def _parse_payment_method(raw: Union[PaymentMethod, dict, None]) -> PaymentMethod:
    if isinstance(raw, PaymentMethod):
        return raw
    if not raw:
        raise ShopError(ErrorCode.INVALID_REQUEST, "Payment method is required")
    try:
        return PaymentMethod.model_validate(raw)
    except ValidationError:
        raise ShopError(
            ErrorCode.INVALID_REQUEST,
            "Invalid payment method type. Must be one of: " + ", ".join(VALID_PAYMENT_TYPES),
        )


class CheckoutService:
    def __init__(
        self,
        db: Store,
        payment_adapter: Optional[MockPaymentAdapter] = None,
        discount_service: Optional[DiscountService] = None,
    ):
        self.db = db
        self.carts = CartService(db)
        self.discounts = discount_service or DiscountService(db)
        self.payment_adapter = payment_adapter or MockPaymentAdapter(
            delay_ms=settings.PAYMENT_MOCK_DELAY_MS,
            success_rate=settings.PAYMENT_SUCCESS_RATE,
        )

    @service_operation("Failed to process checkout")
    async def process_checkout(
        self,
        user_id: str,
        payment_method: Union[PaymentMethod, dict, None],
        discount_code: Optional[str] = None,
    ) -> CheckoutResult:
        """
        Turn the user's cart into an order.

        Every validation and the payment run before anything is written; the
        ledger write and its follow-ups (consume discount, regenerate, clear
        cart) then happen together under the store's checkout lock.

        The order holds the lines snapshotted before payment, but the whole
        cart is cleared afterwards: anything added while the payment was in
        flight is dropped, not ordered.
        """
        # 1) request
        if not user_id or not isinstance(user_id, str):
            raise ShopError(ErrorCode.INVALID_REQUEST, "Invalid userId")
        method = _parse_payment_method(payment_method)

        # 2-3) cart must be non-empty and every line still sold; held until snapshotted
        with self.db.carts.lock:
            cart = self.carts.get_cart(user_id).unwrap()
            if not cart.items:
                raise ShopError(ErrorCode.INVALID_REQUEST, "Cannot checkout with an empty cart")

            for it in cart.items:
                if not self.db.products.get(it.product_id):
                    raise ShopError(
                        ErrorCode.PRODUCT_NOT_FOUND, f"Product {it.product_id} no longer exists"
                    )
            snapshot = tuple(
                OrderItem(product_id=it.product_id, quantity=it.quantity, added_at=it.added_at)
                for it in cart.items
            )
            cart_total = cart.total

        # 4) discount
        discount_amount = 0
        if discount_code:
            discount = self.discounts.validate(discount_code).unwrap()
            discount_amount = percentage_of(cart_total, discount.percentage)
        final_total = cart_total - discount_amount

        # 5) payment
        try:
            payment = await self.payment_adapter.charge(final_total, method)
        except PaymentDeclined:
            log.warning("Checkout declined for %s amount=%s", user_id, final_total)
            raise ShopError(ErrorCode.CHECKOUT_FAILED, "Payment processing failed")

        # 6-9) commit; nothing in here may await
        with self.db.checkout_lock:
            if discount_code:
                # another checkout may have consumed it while we awaited payment
                self.discounts.validate(discount_code).unwrap()

            now = utcnow()
            order = Order(
                id=generate_order_id(),
                user_id=user_id,
                items=snapshot,
                total=final_total,
                discount_code=discount_code or None,
                discount_amount=discount_amount if discount_code else None,
                status=OrderStatus.PROCESSING,
                payment_method=method,
                transaction_id=payment.get("transaction_id"),
                created_at=now,
                updated_at=now,
            )
            self.db.orders.store(order)

            if discount_code:
                self.discounts.mark_used()

            generated_code = None
            order_count = self.db.orders.size()
            if self.discounts.is_eligible(order_count):
                generated = self.discounts.generate_if_eligible(order_count).unwrap()
                generated_code = generated.code

            self.carts.clear_cart(user_id).unwrap()

        log.info(
            "Order %s placed by %s total=%s discount=%s",
            order.id,
            user_id,
            final_total,
            discount_amount,
        )
        return CheckoutResult(
            order_id=order.id,
            total=final_total,
            discount_amount=discount_amount if discount_amount > 0 else None,
            status=order.status,
            created_at=order.created_at,
            generated_discount_code=generated_code,
        )
