# shopkeeper/database/repositories/products_repo.py
from __future__ import annotations

from dataclasses import dataclass, replace

from ...constants import DEFAULT_MIN_STOCK, PRODUCT_CATEGORIES, STORE_PRODUCTS
from ...utils.validators import is_non_negative_int, non_empty
from ..errors import InsufficientStockError, ValidationError
from .base import RecordRepo


@dataclass
class Product:
    name: str
    price: int                  # sale price, cents
    cost_price: int             # cents
    quantity: int
    category: str
    description: str = ""
    min_stock: int = DEFAULT_MIN_STOCK
    image_url: str | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


def is_low_stock(product: Product, threshold: int | None = None) -> bool:
    """At or below `threshold` when given, else at or below the product's own min_stock."""
    limit = product.min_stock if threshold is None else threshold
    return product.quantity <= limit


class ProductsRepo(RecordRepo[Product]):
    STORE = STORE_PRODUCTS
    ENTITY = "Product"
    MODEL = Product

    def _validate(self, p: Product) -> None:
        errors: dict[str, str] = {}
        if not non_empty(p.name):
            errors["name"] = "Name cannot be empty."
        if not is_non_negative_int(p.price):
            errors["price"] = "Price must be zero or more."
        if not is_non_negative_int(p.cost_price):
            errors["cost_price"] = "Cost price must be zero or more."
        if not is_non_negative_int(p.quantity):
            errors["quantity"] = "Quantity must be a whole number, zero or more."
        if p.category not in PRODUCT_CATEGORIES:
            errors["category"] = f"Unknown category: {p.category}"
        if not is_non_negative_int(p.min_stock):
            errors["min_stock"] = "Minimum stock must be a whole number, zero or more."
        if errors:
            raise ValidationError(errors)

    # ---- Queries ----------------------------------------------------------

    def find_by_category(self, category: str) -> list[Product]:
        return self._many(self.store.query_by_index(self.STORE, "by-category", category))

    def find_low_stock(self, threshold: int | None = None) -> list[Product]:
        """
        Products at or below their stock threshold.

        With an explicit `threshold` every product is compared against it.
        Without one, each product's own `min_stock` applies.
        """
        return [p for p in self.list_all() if is_low_stock(p, threshold)]

    # ---- Stock ------------------------------------------------------------

    def adjust_quantity(self, product_id: str, delta: int) -> Product:
        """
        Add `delta` (negative to take stock out) to the quantity on hand.
        Refuses to go below zero.
        """
        product = self.require(product_id)
        new_qty = product.quantity + delta
        if new_qty < 0:
            raise InsufficientStockError(
                f"Only {product.quantity} units of {product.name} available in stock",
                available=product.quantity,
            )
        return self.update(replace(product, quantity=new_qty))
