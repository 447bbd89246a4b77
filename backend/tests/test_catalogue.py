import json

from storefront.repositories.product_repo import load_catalogue


def test_list_products(client):
    res = client.get("/api/products")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    ids = [p["id"] for p in body["data"]]
    assert len(ids) == 9
    assert "prod-1" in ids


def test_get_product(client):
    res = client.get("/api/products/prod-1")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["price"] == 200
    assert "createdAt" in data and "updatedAt" in data


def test_get_unknown_product(client):
    res = client.get("/api/products/does-not-exist")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "PRODUCT_NOT_FOUND"


def test_load_catalogue_accepts_wrapped_and_aliased_entries(tmp_path):
    path = tmp_path / "catalogue.json"
    path.write_text(
        json.dumps({"products": [{"sku": "TEA-1", "title": "Tea", "price": "3.50"},
                                 {"id": "c-2", "name": "Coffee", "price": 6}]})
    )
    products = load_catalogue(str(path))
    assert [p.id for p in products] == ["TEA-1", "c-2"]
    assert products[0].name == "Tea" and products[0].price == 3.5
    assert products[1].price == 6 and isinstance(products[1].price, int)
