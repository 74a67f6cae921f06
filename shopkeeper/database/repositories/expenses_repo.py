from __future__ import annotations

"""
Repository for expenses.

Expenses are independent records: no link to sales or products. Amounts
are integer cents; `date` is an ISO calendar date ('YYYY-MM-DD') that may
not lie in the future. Categories and payment methods are fixed tags from
`shopkeeper.constants`.

The repository does not enforce business rules beyond field validation
(mirrors the expense form checks).
"""

from dataclasses import dataclass, replace
from datetime import date, datetime

from ...constants import (
    EXPENSE_CATEGORIES,
    MAX_EXPENSE_AMOUNT,
    PAYMENT_METHODS,
    STORE_EXPENSES,
)
from ...utils.validators import is_not_future, is_strictly_positive_int, parse_iso_date
from ..errors import ValidationError
from .base import RecordRepo

MIN_DESCRIPTION_LENGTH = 5


@dataclass
class Expense:
    description: str
    amount: int                 # cents, > 0
    category: str
    date: str                   # YYYY-MM-DD
    payment_method: str
    notes: str = ""
    id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


def _day(value: date | datetime | str) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value)[:10]


class ExpensesRepo(RecordRepo[Expense]):
    """
    CRUD for expenses plus date-range and category lookups.
    Persists immediately after each write.
    """

    STORE = STORE_EXPENSES
    ENTITY = "Expense"
    MODEL = Expense

    def _validate(self, e: Expense) -> None:
        errors: dict[str, str] = {}
        description = (e.description or "").strip()
        if not description:
            errors["description"] = "Enter a description for the expense."
        elif len(description) < MIN_DESCRIPTION_LENGTH:
            errors["description"] = (
                f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters."
            )

        if not is_strictly_positive_int(e.amount):
            errors["amount"] = "Expense amount must be greater than zero."
        elif e.amount > MAX_EXPENSE_AMOUNT:
            errors["amount"] = "Amount too high. Check the value entered."

        if parse_iso_date(e.date) is None:
            errors["date"] = "Enter the expense date."
        elif not is_not_future(e.date):
            errors["date"] = "Date cannot be in the future."

        if e.category not in EXPENSE_CATEGORIES:
            errors["category"] = f"Unknown category: {e.category}"
        if e.payment_method not in PAYMENT_METHODS:
            errors["payment_method"] = "Select a payment method."
        if errors:
            raise ValidationError(errors)

    def _normalized(self, e: Expense) -> Expense:
        return replace(e, description=e.description.strip(), date=_day(e.date))

    # ---- Mutations --------------------------------------------------------

    def create(self, expense: Expense) -> Expense:
        self._validate(expense)
        return super().create(self._normalized(expense))

    def update(self, expense: Expense) -> Expense:
        self._validate(expense)
        return super().update(self._normalized(expense))

    # ---- Queries ----------------------------------------------------------

    def find_by_date_range(self, start: date | datetime | str, end: date | datetime | str) -> list[Expense]:
        """Expenses dated between start and end, both inclusive."""
        return self._many(
            self.store.query_by_index(self.STORE, "by-date", lower=_day(start), upper=_day(end))
        )

    def find_by_category(self, category: str) -> list[Expense]:
        return self._many(self.store.query_by_index(self.STORE, "by-category", category))
