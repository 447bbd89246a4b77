from storefront.repositories.product_repo import ProductRepository
from storefront.utils.results import ErrorCode


def test_get_or_create_cart_is_empty(carts):
    res = carts.get_or_create_cart("u1")
    assert res.success
    cart = res.data
    assert cart.id == "cart-u1"
    assert cart.items == []
    assert cart.total == 0 and cart.item_count == 0


def test_add_item_computes_totals(carts):
    res = carts.add_item("u1", "prod-1", 2)
    assert res.success
    assert res.data.total == 400
    assert res.data.item_count == 2


def test_add_same_product_merges_lines(carts):
    first = carts.add_item("u1", "prod-3", 1).data
    added_at = first.items[0].added_at
    cart = carts.add_item("u1", "prod-3", 4).data
    assert len(cart.items) == 1
    assert cart.items[0].quantity == 5
    assert cart.items[0].added_at >= added_at
    assert cart.total == 150


def test_add_item_rejects_bad_quantity(carts):
    for q in (0, -1, 1.5, "2", True):
        res = carts.add_item("u1", "prod-1", q)
        assert not res.success
        assert res.error.code == ErrorCode.INVALID_QUANTITY
    # integral floats behave like ints
    assert carts.add_item("u1", "prod-1", 2.0).data.item_count == 2


def test_add_unknown_product(carts):
    res = carts.add_item("u1", "nope", 1)
    assert res.error.code == ErrorCode.PRODUCT_NOT_FOUND


def test_remove_item(carts):
    carts.add_item("u1", "prod-1", 1)
    carts.add_item("u1", "prod-2", 1)
    cart = carts.remove_item("u1", "prod-1").data
    assert [it.product_id for it in cart.items] == ["prod-2"]
    assert cart.total == 350


def test_remove_errors(carts):
    assert carts.remove_item("ghost", "prod-1").error.code == ErrorCode.CART_NOT_FOUND
    carts.get_or_create_cart("u1")
    assert carts.remove_item("u1", "prod-1").error.code == ErrorCode.CART_ITEM_NOT_FOUND


def test_update_quantity_is_absolute(carts):
    carts.add_item("u1", "prod-4", 3)
    cart = carts.update_quantity("u1", "prod-4", 1).data
    assert cart.items[0].quantity == 1
    assert cart.total == 150


def test_update_quantity_errors(carts):
    assert carts.update_quantity("u1", "prod-1", 0).error.code == ErrorCode.INVALID_QUANTITY
    assert carts.update_quantity("u1", "prod-1", 1).error.code == ErrorCode.CART_NOT_FOUND
    carts.add_item("u1", "prod-2", 1)
    assert carts.update_quantity("u1", "prod-1", 1).error.code == ErrorCode.CART_ITEM_NOT_FOUND
    # zero never removes the line
    assert carts.update_quantity("u1", "prod-2", 0).error.code == ErrorCode.INVALID_QUANTITY
    assert len(carts.get_cart("u1").data.items) == 1


def test_update_quantity_revalidates_product(store, carts):
    carts.add_item("u1", "prod-1", 1)
    store.products = ProductRepository(p for p in store.products.list() if p.id != "prod-1")
    res = carts.update_quantity("u1", "prod-1", 2)
    assert res.error.code == ErrorCode.PRODUCT_NOT_FOUND


def test_vanished_product_excluded_from_totals_but_kept(store, carts):
    carts.add_item("u1", "prod-1", 1)
    carts.add_item("u1", "prod-2", 2)
    store.products = ProductRepository(p for p in store.products.list() if p.id != "prod-1")
    cart = carts.get_or_create_cart("u1").data
    assert len(cart.items) == 2
    assert cart.total == 700
    assert cart.item_count == 2


def test_recalculate_is_idempotent(carts):
    cart = carts.add_item("u1", "prod-9", 3).data
    once = (carts.recalculate(cart).total, cart.item_count)
    twice = (carts.recalculate(cart).total, cart.item_count)
    assert once == twice == (270, 3)


def test_fractional_prices_round_half_up(store, carts):
    from storefront.models.product import Product

    store.products = ProductRepository([Product(id="p-half", name="Half", price=2.5)])
    assert carts.add_item("u1", "p-half", 1).data.total == 3
    assert carts.update_quantity("u1", "p-half", 3).data.total == 8


def test_clear_cart_keeps_identity(carts):
    before = carts.add_item("u1", "prod-1", 2).data
    cart = carts.clear_cart("u1").data
    assert cart.id == before.id and cart.user_id == "u1"
    assert cart.items == [] and cart.total == 0 and cart.item_count == 0
    assert carts.clear_cart("ghost").error.code == ErrorCode.CART_NOT_FOUND


def test_cart_routes(client):
    r = client.post("/api/cart", json={"userId": "u1", "productId": "prod-1", "quantity": 2})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["data"]["total"] == 400
    assert body["data"]["itemCount"] == 2
    assert body["data"]["items"][0]["productId"] == "prod-1"

    r = client.patch("/api/cart/update", json={"userId": "u1", "productId": "prod-1", "quantity": 1})
    assert r.json()["data"]["total"] == 200

    r = client.get("/api/cart", params={"userId": "u1"})
    assert r.json()["data"]["itemCount"] == 1

    r = client.request("DELETE", "/api/cart/remove", json={"userId": "u1", "productId": "prod-1"})
    assert r.json()["data"]["items"] == []


def test_cart_route_errors(client):
    r = client.get("/api/cart")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_REQUEST"

    r = client.post("/api/cart", json={"userId": "u1", "productId": "prod-1", "quantity": -3})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_QUANTITY"

    r = client.post("/api/cart", json={"userId": "u1", "productId": "missing"})
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "PRODUCT_NOT_FOUND"

    r = client.post("/api/cart", json={"productId": "prod-1"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_REQUEST"

    r = client.request("DELETE", "/api/cart/remove", json={"userId": "nobody", "productId": "prod-1"})
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "CART_NOT_FOUND"
