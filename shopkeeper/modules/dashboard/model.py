# shopkeeper/modules/dashboard/model.py
"""
Shop-wide figures folded over the in-memory collections.

Everything here is a pure function of the sales/expenses/products passed
in; nothing reads the store. DashboardModel just snapshots the figures for
a view.
"""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from ...database.repositories import Expense, Product, Sale
from ...database.repositories.products_repo import is_low_stock
from ..payments.calculations import received_amount

if TYPE_CHECKING:
    from ..app_state import AppState

RECENT_LIMIT = 5


# --------------------------- Aggregates ---------------------------

def total_sales(sales: Iterable[Sale]) -> int:
    """Everything sold, paid or not."""
    return sum(s.total for s in sales)


def total_paid_sales(sales: Iterable[Sale]) -> int:
    """Money actually received for sales."""
    return sum(received_amount(s.total, s.paid, s.remaining_amount) for s in sales)


def total_expenses(expenses: Iterable[Expense]) -> int:
    return sum(e.amount for e in expenses)


def pending_amount(sales: Iterable[Sale]) -> int:
    """Receivables: what customers still owe."""
    return sum(s.remaining_amount for s in sales)


def balance(sales: Iterable[Sale], expenses: Iterable[Expense]) -> int:
    """Cash position: money received minus money spent. Unpaid totals do not count."""
    return total_paid_sales(sales) - total_expenses(expenses)


def customer_pending_amount(sales: Iterable[Sale], customer_id: str) -> int:
    return sum(s.remaining_amount for s in sales if s.customer_id == customer_id and not s.paid)


def low_stock(products: Iterable[Product], threshold: Optional[int] = None) -> List[Product]:
    return [p for p in products if is_low_stock(p, threshold)]


def expenses_by_category(expenses: Iterable[Expense]) -> Dict[str, int]:
    totals: Dict[str, int] = defaultdict(int)
    for e in expenses:
        totals[e.category] += e.amount
    return dict(sorted(totals.items(), key=lambda kv: (-kv[1], kv[0])))


def recent_sales(sales: Iterable[Sale], limit: Optional[int] = RECENT_LIMIT) -> List[Sale]:
    """Newest first; `limit=None` returns them all."""
    ordered = sorted(sales, key=lambda s: s.created_at or "", reverse=True)
    return ordered if limit is None else ordered[:limit]


def recent_expenses(expenses: Iterable[Expense], limit: Optional[int] = RECENT_LIMIT) -> List[Expense]:
    ordered = sorted(expenses, key=lambda e: (e.date, e.created_at or ""), reverse=True)
    return ordered if limit is None else ordered[:limit]


# --------------------------- Dashboard Model ---------------------------

@dataclass
class DashboardModel:
    """
    KPI snapshot for the dashboard view.

    Usage:
        model = DashboardModel()
        model.refresh(state)
        print(model.kpi_balance, model.kpi_pending, ...)
    """

    # ---- KPI numbers (cents) ----
    kpi_total_sales: int = 0
    kpi_paid_sales: int = 0
    kpi_total_expenses: int = 0
    kpi_pending: int = 0
    kpi_balance: int = 0
    low_stock_count: int = 0

    # ---- Lists ----
    low_stock_rows: List[Product] = field(default_factory=list)
    expenses_by_category: Dict[str, int] = field(default_factory=dict)
    recent_sales: List[Sale] = field(default_factory=list)
    recent_expenses: List[Expense] = field(default_factory=list)

    def refresh(self, state: "AppState") -> "DashboardModel":
        snap = state.snapshot
        self.kpi_total_sales = total_sales(snap.sales)
        self.kpi_paid_sales = total_paid_sales(snap.sales)
        self.kpi_total_expenses = total_expenses(snap.expenses)
        self.kpi_pending = pending_amount(snap.sales)
        self.kpi_balance = self.kpi_paid_sales - self.kpi_total_expenses
        self.low_stock_rows = low_stock(snap.products)
        self.low_stock_count = len(self.low_stock_rows)
        self.expenses_by_category = expenses_by_category(snap.expenses)
        self.recent_sales = recent_sales(snap.sales)
        self.recent_expenses = recent_expenses(snap.expenses)
        return self
