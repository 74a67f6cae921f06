from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ...constants import STORE_SALES
from ...utils.validators import non_empty
from ..errors import ValidationError
from .base import RecordRepo


@dataclass
class SaleItem:
    product_id: str
    product_name: str           # snapshot at sale time
    quantity: int
    unit_price: int             # snapshot at sale time, cents
    subtotal: int               # unit_price * quantity


@dataclass
class PartialPayment:
    amount: int
    date: str
    method: str


@dataclass
class Sale:
    customer_id: str
    customer_name: str          # snapshot at sale time
    total: int
    remaining_amount: int
    paid: bool = False
    items: list[SaleItem] = field(default_factory=list)
    discount: int = 0
    payment_method: str = ""
    notes: str = ""
    payment_date: str | None = None
    partial_payment: list[PartialPayment] = field(default_factory=list)
    is_credit_only: bool = False
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


def _lower_bound(value: date | datetime | str) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return f"{value.isoformat()}T00:00:00"
    return str(value)


def _upper_bound(value: date | datetime | str) -> str:
    # a bare date covers the whole day
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        value = value.isoformat()
    value = str(value)
    return f"{value}T23:59:59.999999" if len(value) == 10 else value


class SalesRepo(RecordRepo[Sale]):
    """
    Sales, including credit-only ("fiado") sales.

    The repository keeps the record consistent (paid iff nothing remains,
    no items on credit-only sales) but does not price items or touch stock;
    that is SaleEngine's job.
    """

    STORE = STORE_SALES
    ENTITY = "Sale"
    MODEL = Sale

    def _from_record(self, record: dict[str, Any]) -> Sale:
        sale = super()._from_record(record)
        sale.items = [SaleItem(**i) for i in record.get("items") or []]
        sale.partial_payment = [PartialPayment(**p) for p in record.get("partial_payment") or []]
        sale.discount = sale.discount or 0
        return sale

    def _validate(self, s: Sale) -> None:
        errors: dict[str, str] = {}
        if not s.customer_id:
            errors["customer_id"] = "Select a customer."
        if s.total < 0:
            errors["total"] = "Total cannot be negative."
        if s.discount < 0:
            errors["discount"] = "Discount cannot be negative."
        if s.remaining_amount < 0:
            errors["remaining_amount"] = "Remaining amount cannot be negative."
        elif s.paid != (s.remaining_amount == 0):
            errors["paid"] = "A sale is paid exactly when nothing remains to be paid."
        elif s.paid and not non_empty(s.payment_method):
            errors["payment_method"] = "A paid sale needs a payment method."
        if s.is_credit_only and s.items:
            errors["items"] = "A credit-only sale has no items."
        if any(i.quantity <= 0 for i in s.items):
            errors["items"] = "Item quantities must be positive."
        if errors:
            raise ValidationError(errors)

    # ---- Queries ----------------------------------------------------------

    def find_pending(self) -> list[Sale]:
        return [s for s in self.list_all() if not s.paid or s.remaining_amount > 0]

    def find_by_customer_id(self, customer_id: str) -> list[Sale]:
        return self._many(self.store.query_by_index(self.STORE, "by-customer", customer_id))

    def find_by_date_range(self, start: date | datetime | str, end: date | datetime | str) -> list[Sale]:
        """Sales created between start and end, both inclusive."""
        return self._many(
            self.store.query_by_index(
                self.STORE, "by-date", lower=_lower_bound(start), upper=_upper_bound(end)
            )
        )

    def find_by_paid(self, paid: bool) -> list[Sale]:
        return self._many(self.store.query_by_index(self.STORE, "by-paid", paid))
