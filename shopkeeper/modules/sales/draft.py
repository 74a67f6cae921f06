# shopkeeper/modules/sales/draft.py
"""
In-progress sale, before it is committed.

A draft owns the selected customer, the item lines, the discount and the
payment choice. Totals are always derived from the current lines, so they
can never drift from what the cashier sees. Nothing here touches the store;
SaleEngine.commit() turns a valid draft into a persisted Sale.
"""
from __future__ import annotations

from typing import Callable, Optional

from ...constants import PAYMENT_FULL, PAYMENT_METHODS, PAYMENT_TYPES
from ...database.errors import InsufficientStockError, NotFoundError, ValidationError
from ...database.repositories import Customer, Product, Sale, SaleItem
from ...utils.helpers import now_iso
from ...utils.validators import non_empty
from ..payments.calculations import initial_remaining, item_subtotal, sale_total

ProductLookup = Callable[[str], Optional[Product]]


class SaleDraft:
    def __init__(self, lookup_product: ProductLookup):
        self._lookup_product = lookup_product
        self.customer_id: str = ""
        self.customer_name: str = ""
        self.items: list[SaleItem] = []
        self.discount: int = 0
        self.is_credit_only: bool = False
        self.credit_amount: int = 0
        self.payment_type: str = PAYMENT_FULL
        self.payment_method: str = ""
        self.notes: str = ""

    # ---- derived -----------------------------------------------------------

    @property
    def subtotal(self) -> int:
        return sum(i.subtotal for i in self.items)

    @property
    def total(self) -> int:
        if self.is_credit_only:
            return self.credit_amount
        return sale_total((i.subtotal for i in self.items), self.discount)

    # ---- customer ------------------------------------------------------------

    def select_customer(self, customer: Customer | None) -> None:
        if customer is None:
            self.customer_id, self.customer_name = "", ""
        else:
            self.customer_id, self.customer_name = customer.id or "", customer.name

    # ---- items ---------------------------------------------------------------

    def add_item(self, product_id: str, quantity: int) -> SaleItem:
        """
        Add `quantity` units of a product, merging with an existing line for
        the same product. The unit price is snapshotted from the product.
        On any error the item lines are left as they were.
        """
        if self.is_credit_only:
            raise ValidationError({"items": "A credit-only sale has no items."})
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise ValidationError({"quantity": "Quantity must be greater than zero."})
        product = self._lookup_product(product_id) if product_id else None
        if product is None:
            raise NotFoundError("Product", product_id)

        if quantity > product.quantity:
            raise InsufficientStockError(
                f"Only {product.quantity} units available in stock",
                available=product.quantity,
            )

        for index, existing in enumerate(self.items):
            if existing.product_id != product.id:
                continue
            merged = existing.quantity + quantity
            if merged > product.quantity:
                available = product.quantity - existing.quantity
                raise InsufficientStockError(
                    f"Limit exceeded. Only {available} units available",
                    available=available,
                )
            line = SaleItem(
                product_id=product.id,
                product_name=product.name,
                quantity=merged,
                unit_price=product.price,
                subtotal=item_subtotal(product.price, merged),
            )
            self.items[index] = line
            return line

        line = SaleItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
            subtotal=item_subtotal(product.price, quantity),
        )
        self.items.append(line)
        return line

    def remove_item(self, index: int) -> SaleItem:
        return self.items.pop(index)

    def set_discount(self, cents: int) -> None:
        if cents < 0:
            raise ValidationError({"discount": "Discount cannot be negative."})
        self.discount = cents

    # ---- credit-only ("fiado") ------------------------------------------------

    def set_credit_only(self, flag: bool) -> None:
        self.is_credit_only = bool(flag)
        if self.is_credit_only:
            self.items = []

    def set_credit_amount(self, cents: int) -> None:
        self.credit_amount = cents

    # ---- payment ---------------------------------------------------------------

    def set_payment(self, payment_type: str, method: str = "") -> None:
        if payment_type not in PAYMENT_TYPES:
            raise ValidationError({"payment_type": f"Unknown payment type: {payment_type}"})
        self.payment_type = payment_type
        self.payment_method = (method or "").strip()

    # ---- submit ----------------------------------------------------------------

    def validate(self) -> None:
        errors: dict[str, str] = {}
        if not non_empty(self.customer_id):
            errors["customer_id"] = "Select a customer."
        if not self.is_credit_only and not self.items:
            errors["items"] = "Add at least one item to the sale."
        if self.is_credit_only and self.credit_amount <= 0:
            errors["credit_amount"] = "Enter the credit amount."
        # anything that will be saved as paid needs a method, including zero totals
        will_be_paid = self.payment_type == PAYMENT_FULL or self.total == 0
        if will_be_paid and not non_empty(self.payment_method):
            errors["payment_method"] = "Select a payment method."
        elif self.payment_method and self.payment_method not in PAYMENT_METHODS:
            errors["payment_method"] = f"Unknown payment method: {self.payment_method}"
        if errors:
            raise ValidationError(errors)

    def build(self) -> Sale:
        """The Sale this draft describes, with its initial payment state. Not persisted."""
        self.validate()
        total = self.total
        remaining = initial_remaining(total, self.payment_type)
        paid = remaining == 0
        return Sale(
            customer_id=self.customer_id,
            customer_name=self.customer_name,
            items=[] if self.is_credit_only else list(self.items),
            discount=0 if self.is_credit_only else self.discount,
            total=total,
            remaining_amount=remaining,
            paid=paid,
            payment_method=self.payment_method,
            notes=self.notes,
            payment_date=now_iso() if paid else None,
            partial_payment=[],
            is_credit_only=self.is_credit_only,
        )
