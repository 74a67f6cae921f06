# shopkeeper/modules/sales/engine.py
"""
The one place where sales change state.

Every view (sale form, sale details, customer history) goes through
SaleEngine to create sales, take payments, edit or delete them. That keeps
the paid/remaining bookkeeping in a single implementation:

    PENDING --record_payment--> PARTIAL --record_payment--> PAID
    PENDING --record_payment (whole balance)--------------> PAID
    PAID    --update_sale (paid cleared)------------------> PENDING

Committing a sale and taking its items out of stock happen in one store
transaction: either both are saved or neither is.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
import logging

from ...constants import PAYMENT_METHODS
from ...database.errors import ValidationError
from ...database.repositories import (
    PartialPayment,
    Product,
    Repositories,
    Sale,
)
from ...utils.helpers import fmt_money, now_iso
from ...utils.validators import is_strictly_positive_int, non_empty
from ..payments.calculations import (
    apply_payment,
    clamp_non_negative,
    item_subtotal,
    received_amount,
    sale_total,
)
from .draft import ProductLookup, SaleDraft

_log = logging.getLogger(__name__)


@dataclass
class CommitResult:
    sale: Sale
    products: list[Product] = field(default_factory=list)  # products whose stock changed


class SaleEngine:
    def __init__(self, repos: Repositories):
        self.store = repos.store
        self.products = repos.products
        self.customers = repos.customers
        self.sales = repos.sales

    # ---------------------------------------------------------------------
    # Creation
    # ---------------------------------------------------------------------
    def new_draft(self, lookup_product: ProductLookup | None = None) -> SaleDraft:
        return SaleDraft(lookup_product or self.products.get)

    def commit(self, draft: SaleDraft) -> CommitResult:
        """
        Persist the draft as a Sale and take its items out of stock.
        Raises ValidationError/NotFoundError/InsufficientStockError without
        saving anything.
        """
        sale = draft.build()
        customer = self.customers.require(sale.customer_id)
        sale = replace(sale, customer_name=customer.name)

        changed: list[Product] = []
        with self.store.transaction():
            created = self.sales.create(sale)
            if not created.is_credit_only:
                for item in created.items:
                    changed.append(self.products.adjust_quantity(item.product_id, -item.quantity))

        _log.info(
            "sale %s committed: customer=%s total=%s paid=%s items=%d",
            created.id, created.customer_name, fmt_money(created.total), created.paid, len(created.items),
        )
        return CommitResult(sale=created, products=changed)

    # ---------------------------------------------------------------------
    # Settlement
    # ---------------------------------------------------------------------
    def record_payment(self, sale: Sale | str, amount: int, method: str) -> Sale:
        """
        Receive `amount` cents towards a sale.

        Appends to the payment history, lowers the remaining balance (never
        below zero) and marks the sale paid once nothing remains. The sale's
        payment_method becomes the method of this payment.
        """
        errors: dict[str, str] = {}
        if not non_empty(method):
            errors["payment_method"] = "Select a payment method."
        elif method not in PAYMENT_METHODS:
            errors["payment_method"] = f"Unknown payment method: {method}"
        if not is_strictly_positive_int(amount):
            errors["amount"] = "Payment amount must be greater than zero."
        if errors:
            raise ValidationError(errors)

        current = self.sales.require(sale.id if isinstance(sale, Sale) else sale)
        if current.remaining_amount <= 0:
            raise ValidationError({"amount": "This sale is already paid."})

        now = now_iso()
        remaining, settled = apply_payment(current.remaining_amount, amount)
        updated = replace(
            current,
            partial_payment=[*current.partial_payment, PartialPayment(amount=amount, date=now, method=method)],
            remaining_amount=remaining,
            paid=settled,
            payment_method=method,
            payment_date=now if settled else None,
        )
        saved = self.sales.update(updated)
        _log.info(
            "payment on sale %s: %s via %s, remaining %s",
            saved.id, fmt_money(amount), method, fmt_money(saved.remaining_amount),
        )
        return saved

    def settle(self, sale: Sale | str, method: str) -> Sale:
        """Receive the whole remaining balance."""
        current = self.sales.require(sale.id if isinstance(sale, Sale) else sale)
        return self.record_payment(current, current.remaining_amount, method)

    # ---------------------------------------------------------------------
    # Edit / delete
    # ---------------------------------------------------------------------
    def update_sale(self, sale: Sale) -> Sale:
        """
        Explicit edit/replace of a committed sale.

        Item subtotals and the total are re-derived. Money already received is
        kept: the new balance is the new total minus what was received, unless
        the edit marks the sale paid. Clearing `paid` on a settled sale reopens
        it: the given remaining amount is owed again, or the whole total when
        none is given. Stock is not adjusted.
        """
        previous = self.sales.require(sale.id)

        if sale.is_credit_only:
            items, total = [], sale.total
        else:
            items = [replace(i, subtotal=item_subtotal(i.unit_price, i.quantity)) for i in sale.items]
            total = sale_total((i.subtotal for i in items), sale.discount)

        if sale.paid:
            remaining = 0
        elif previous.paid:
            remaining = sale.remaining_amount if 0 < sale.remaining_amount <= total else total
        else:
            received = received_amount(previous.total, previous.paid, previous.remaining_amount)
            remaining = clamp_non_negative(total - received)

        paid = remaining == 0
        if paid and not non_empty(sale.payment_method):
            raise ValidationError({"payment_method": "Select a payment method."})
        updated = replace(
            sale,
            items=items,
            total=total,
            remaining_amount=remaining,
            paid=paid,
            payment_date=(sale.payment_date or previous.payment_date or now_iso()) if paid else None,
            created_at=previous.created_at,
        )
        saved = self.sales.update(updated)
        _log.info("sale %s edited: total=%s remaining=%s", saved.id, fmt_money(saved.total), fmt_money(saved.remaining_amount))
        return saved

    def delete_sale(self, sale_id: str) -> None:
        """Idempotent. Stock taken by the sale is not put back."""
        self.sales.delete(sale_id)
        _log.info("sale %s deleted", sale_id)
