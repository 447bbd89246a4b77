import json
import logging
import os
from typing import Dict, Iterable, List, Optional

from storefront.models.product import Product

log = logging.getLogger(__name__)

DEFAULT_CATALOGUE = os.path.join(
    os.path.dirname(os.path.dirname(__file__)), "data", "catalogue.json"
)


def _normalize_entry(entry: dict) -> dict:
    """Return a dict with keys: id, name, description, price, category (+ timestamps if given)."""
    product_id = entry.get("id") or entry.get("sku") or entry.get("productId")
    if not product_id:
        raise ValueError(f"catalogue entry without id: {entry!r}")
    raw_price = entry.get("price", entry.get("amount", 0))
    price = float(raw_price)
    if price.is_integer():
        price = int(price)
    normalized = {
        "id": str(product_id),
        "name": entry.get("name") or entry.get("title") or "",
        "description": entry.get("description") or "",
        "price": price,
        "category": entry.get("category") or "",
    }
    for key in ("createdAt", "updatedAt"):
        if entry.get(key):
            normalized[key] = entry[key]
    return normalized


def load_catalogue(path: Optional[str] = None) -> List[Product]:
    path = path or DEFAULT_CATALOGUE
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    # accept a bare list or {"products": [...]}
    if isinstance(data, dict):
        data = data.get("products") or data.get("items") or []
    products = [Product.model_validate(_normalize_entry(e)) for e in data]
    log.info("Loaded %d products from %s", len(products), path)
    return products


class ProductRepository:
    """Read-only product catalogue, populated once at startup."""

    def __init__(self, products: Iterable[Product] = ()):
        self._products: Dict[str, Product] = {p.id: p for p in products}

    def get(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    def list(self) -> List[Product]:
        return list(self._products.values())

    def count(self) -> int:
        return len(self._products)
