from __future__ import annotations

from dataclasses import dataclass, replace

from ...constants import STORE_CUSTOMERS
from ...utils.validators import non_empty
from ..errors import ValidationError
from .base import RecordRepo
from .sales_repo import Sale, SalesRepo


@dataclass
class Customer:
    name: str
    phone: str                  # as typed; formatting is a display concern
    notes: str | None = None
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class CustomersRepo(RecordRepo[Customer]):
    STORE = STORE_CUSTOMERS
    ENTITY = "Customer"
    MODEL = Customer

    # ---- Internal helpers -------------------------------------------------

    @staticmethod
    def _normalize_text(s: str | None) -> str | None:
        if s is None:
            return None
        # trim only; phones keep their punctuation
        return s.strip()

    def _validate(self, c: Customer) -> None:
        errors: dict[str, str] = {}
        if not non_empty(c.name):
            errors["name"] = "Name cannot be empty."
        if not non_empty(c.phone):
            errors["phone"] = "Phone cannot be empty."
        if errors:
            raise ValidationError(errors)

    def _normalized(self, c: Customer) -> Customer:
        return replace(
            c,
            name=self._normalize_text(c.name),
            phone=self._normalize_text(c.phone),
            notes=self._normalize_text(c.notes),
        )

    # ---- Mutations --------------------------------------------------------

    def create(self, customer: Customer) -> Customer:
        return super().create(self._normalized(customer))

    def update(self, customer: Customer) -> Customer:
        return super().update(self._normalized(customer))

    # ---- Queries ----------------------------------------------------------

    def find_by_phone(self, phone: str) -> list[Customer]:
        return self._many(
            self.store.query_by_index(self.STORE, "by-phone", self._normalize_text(phone))
        )

    def pending_sales(self, customer_id: str) -> list[Sale]:
        """Unpaid sales of one customer."""
        return [s for s in SalesRepo(self.store).find_by_customer_id(customer_id) if not s.paid]
