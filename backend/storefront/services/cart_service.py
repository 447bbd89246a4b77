import logging
import numbers

from storefront.db import Store
from storefront.models.base import utcnow
from storefront.models.cart import Cart
from storefront.models.cart_item import CartItem
from storefront.utils.money import round_currency
from storefront.utils.results import ErrorCode, ShopError, service_operation

log = logging.getLogger(__name__)


def _validate_quantity(quantity) -> int:
    # integral floats (2.0) pass, bools and fractions do not
    if isinstance(quantity, bool) or not isinstance(quantity, numbers.Real):
        raise ShopError(ErrorCode.INVALID_QUANTITY, "Quantity must be a positive integer")
    if isinstance(quantity, float) and not quantity.is_integer():
        raise ShopError(ErrorCode.INVALID_QUANTITY, "Quantity must be a positive integer")
    if quantity <= 0:
        raise ShopError(ErrorCode.INVALID_QUANTITY, "Quantity must be a positive integer")
    return int(quantity)


class CartService:
    def __init__(self, db: Store):
        self.db = db
        self.carts = db.carts

    def _require_product(self, product_id: str):
        if not self.db.products.get(product_id):
            raise ShopError(
                ErrorCode.PRODUCT_NOT_FOUND, f"Product with ID {product_id} not found"
            )

    def _require_cart(self, user_id: str) -> Cart:
        cart = self.carts.get(user_id)
        if cart is None:
            raise ShopError(ErrorCode.CART_NOT_FOUND, "Cart not found")
        return cart

    def _require_item(self, cart: Cart, product_id: str) -> CartItem:
        item = cart.find_item(product_id)
        if item is None:
            raise ShopError(
                ErrorCode.CART_ITEM_NOT_FOUND,
                f"Item with product ID {product_id} not found in cart",
            )
        return item

    def recalculate(self, cart: Cart) -> Cart:
        """
        Re-derive total and item_count from current catalogue prices.

        Lines whose product has left the catalogue stay in the cart but do not
        count towards either figure.
        """
        total = 0
        item_count = 0
        for it in cart.items:
            product = self.db.products.get(it.product_id)
            if product:
                total += product.price * it.quantity
                item_count += it.quantity
        cart.total = round_currency(total)
        cart.item_count = item_count
        return cart

    def _touch(self, cart: Cart) -> Cart:
        self.recalculate(cart)
        cart.updated_at = utcnow()
        return cart

    @service_operation("Failed to fetch cart")
    def get_or_create_cart(self, user_id: str) -> Cart:
        with self.carts.lock:
            return self.recalculate(self.carts.get_or_create(user_id))

    @service_operation("Failed to fetch cart")
    def get_cart(self, user_id: str) -> Cart:
        with self.carts.lock:
            return self.recalculate(self._require_cart(user_id))

    @service_operation("Failed to add item to cart")
    def add_item(self, user_id: str, product_id: str, quantity=1) -> Cart:
        qty = _validate_quantity(quantity)
        self._require_product(product_id)
        with self.carts.lock:
            cart = self.carts.get_or_create(user_id)
            now = utcnow()
            item = cart.find_item(product_id)
            if item:
                item.quantity += qty
                item.added_at = now
            else:
                cart.items.append(CartItem(product_id=product_id, quantity=qty, added_at=now))
            self._touch(cart)
        log.info("Added %s x%d to cart of %s", product_id, qty, user_id)
        return cart

    @service_operation("Failed to remove item from cart")
    def remove_item(self, user_id: str, product_id: str) -> Cart:
        with self.carts.lock:
            cart = self._require_cart(user_id)
            item = self._require_item(cart, product_id)
            cart.items.remove(item)
            self._touch(cart)
        log.info("Removed %s from cart of %s", product_id, user_id)
        return cart

    @service_operation("Failed to update cart item")
    def update_quantity(self, user_id: str, product_id: str, quantity) -> Cart:
        qty = _validate_quantity(quantity)
        with self.carts.lock:
            cart = self._require_cart(user_id)
            item = self._require_item(cart, product_id)
            # the product may have left the catalogue since it was added
            self._require_product(product_id)
            item.quantity = qty
            self._touch(cart)
        log.info("Set %s to x%d in cart of %s", product_id, qty, user_id)
        return cart

    @service_operation("Failed to clear cart")
    def clear_cart(self, user_id: str) -> Cart:
        with self.carts.lock:
            cart = self._require_cart(user_id)
            cart.items = []
            self._touch(cart)
        log.info("Cleared cart of %s", user_id)
        return cart
