# shopkeeper/modules/app_state.py
"""
In-memory mirror of the four collections, owned by one coordinator.

Views read `AppState.snapshot` and listen to the *_changed signals. The
snapshot is loaded from the repositories once (load()); after that every
successful repository/engine call is turned into an Action and folded in
with reduce(). The store is never re-read to refresh the mirror, and the
snapshot is never mutated in place.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from pathlib import Path
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal

from ..database import open_store
from ..database.repositories import Customer, Expense, Product, Repositories, Sale
from ..utils.loggers import get_logger
from . import dashboard
from .sales import SaleDraft, SaleEngine

_log = logging.getLogger(__name__)

# action kinds
SET = "set"
ADD = "add"
UPDATE = "update"
DELETE = "delete"

COLLECTIONS = ("products", "customers", "sales", "expenses")


@dataclass(frozen=True)
class Snapshot:
    products: tuple[Product, ...] = ()
    customers: tuple[Customer, ...] = ()
    sales: tuple[Sale, ...] = ()
    expenses: tuple[Expense, ...] = ()


@dataclass(frozen=True)
class Action:
    kind: str
    collection: str
    payload: Any        # list for SET, entity for ADD/UPDATE, id for DELETE


def reduce(snapshot: Snapshot, action: Action) -> Snapshot:
    if action.collection not in COLLECTIONS:
        raise ValueError(f"Unknown collection: {action.collection}")
    items = getattr(snapshot, action.collection)

    if action.kind == SET:
        new = tuple(action.payload)
    elif action.kind == ADD:
        new = items + (action.payload,)
    elif action.kind == UPDATE:
        new = tuple(action.payload if x.id == action.payload.id else x for x in items)
    elif action.kind == DELETE:
        new = tuple(x for x in items if x.id != action.payload)
    else:
        raise ValueError(f"Unknown action: {action.kind}")
    return replace(snapshot, **{action.collection: new})


class AppState(QObject):
    products_changed = Signal()
    customers_changed = Signal()
    sales_changed = Signal()
    expenses_changed = Signal()

    def __init__(self, repos: Repositories, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.repos = repos
        self.engine = SaleEngine(repos)
        self._snapshot = Snapshot()

    @classmethod
    def open(cls, db_path: Path | str | None = None) -> "AppState":
        get_logger()
        state = cls(Repositories.for_store(open_store(db_path)))
        state.load()
        return state

    # ---- mirror plumbing ----------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    def dispatch(self, action: Action) -> None:
        self._snapshot = reduce(self._snapshot, action)
        getattr(self, f"{action.collection}_changed").emit()

    def load(self) -> None:
        """Fill the mirror from the store. Called once at startup."""
        self.dispatch(Action(SET, "products", self.repos.products.list_all()))
        self.dispatch(Action(SET, "sales", self.repos.sales.list_all()))
        self.dispatch(Action(SET, "expenses", self.repos.expenses.list_all()))
        self.dispatch(Action(SET, "customers", self.repos.customers.list_all()))
        snap = self._snapshot
        _log.info(
            "loaded %d products, %d customers, %d sales, %d expenses",
            len(snap.products), len(snap.customers), len(snap.sales), len(snap.expenses),
        )

    @staticmethod
    def _find(items, entity_id: str):
        return next((x for x in items if x.id == entity_id), None)

    def find_product(self, product_id: str) -> Product | None:
        return self._find(self._snapshot.products, product_id)

    def find_customer(self, customer_id: str) -> Customer | None:
        return self._find(self._snapshot.customers, customer_id)

    def find_sale(self, sale_id: str) -> Sale | None:
        return self._find(self._snapshot.sales, sale_id)

    # ---- products -------------------------------------------------------------

    def add_product(self, product: Product) -> Product:
        created = self.repos.products.create(product)
        self.dispatch(Action(ADD, "products", created))
        return created

    def update_product(self, product: Product) -> Product:
        updated = self.repos.products.update(product)
        self.dispatch(Action(UPDATE, "products", updated))
        return updated

    def delete_product(self, product_id: str) -> None:
        # historical sales keep the product name; nothing cascades
        self.repos.products.delete(product_id)
        self.dispatch(Action(DELETE, "products", product_id))

    # ---- customers ------------------------------------------------------------

    def add_customer(self, customer: Customer) -> Customer:
        created = self.repos.customers.create(customer)
        self.dispatch(Action(ADD, "customers", created))
        return created

    def update_customer(self, customer: Customer) -> Customer:
        updated = self.repos.customers.update(customer)
        self.dispatch(Action(UPDATE, "customers", updated))
        return updated

    def delete_customer(self, customer_id: str) -> None:
        self.repos.customers.delete(customer_id)
        self.dispatch(Action(DELETE, "customers", customer_id))

    # ---- sales ----------------------------------------------------------------

    def new_sale_draft(self) -> SaleDraft:
        return self.engine.new_draft(self.find_product)

    def commit_sale(self, draft: SaleDraft) -> Sale:
        result = self.engine.commit(draft)
        self.dispatch(Action(ADD, "sales", result.sale))
        for product in result.products:
            self.dispatch(Action(UPDATE, "products", product))
        return result.sale

    def record_payment(self, sale: Sale | str, amount: int, method: str) -> Sale:
        updated = self.engine.record_payment(sale, amount, method)
        self.dispatch(Action(UPDATE, "sales", updated))
        return updated

    def settle_sale(self, sale: Sale | str, method: str) -> Sale:
        updated = self.engine.settle(sale, method)
        self.dispatch(Action(UPDATE, "sales", updated))
        return updated

    def update_sale(self, sale: Sale) -> Sale:
        updated = self.engine.update_sale(sale)
        self.dispatch(Action(UPDATE, "sales", updated))
        return updated

    def delete_sale(self, sale_id: str) -> None:
        self.engine.delete_sale(sale_id)
        self.dispatch(Action(DELETE, "sales", sale_id))

    # ---- expenses -------------------------------------------------------------

    def add_expense(self, expense: Expense) -> Expense:
        created = self.repos.expenses.create(expense)
        self.dispatch(Action(ADD, "expenses", created))
        return created

    def update_expense(self, expense: Expense) -> Expense:
        updated = self.repos.expenses.update(expense)
        self.dispatch(Action(UPDATE, "expenses", updated))
        return updated

    def delete_expense(self, expense_id: str) -> None:
        self.repos.expenses.delete(expense_id)
        self.dispatch(Action(DELETE, "expenses", expense_id))

    # ---- figures --------------------------------------------------------------

    def total_sales(self) -> int:
        return dashboard.total_sales(self._snapshot.sales)

    def total_paid_sales(self) -> int:
        return dashboard.total_paid_sales(self._snapshot.sales)

    def total_expenses(self) -> int:
        return dashboard.total_expenses(self._snapshot.expenses)

    def pending_amount(self) -> int:
        return dashboard.pending_amount(self._snapshot.sales)

    def balance(self) -> int:
        return dashboard.balance(self._snapshot.sales, self._snapshot.expenses)

    def pending_sales(self) -> list[Sale]:
        return [s for s in self._snapshot.sales if not s.paid or s.remaining_amount > 0]

    def low_stock_products(self, threshold: int | None = None) -> list[Product]:
        return dashboard.low_stock(self._snapshot.products, threshold)

    def customer_sales(self, customer_id: str) -> list[Sale]:
        return [s for s in self._snapshot.sales if s.customer_id == customer_id]

    def customer_pending_amount(self, customer_id: str) -> int:
        return dashboard.customer_pending_amount(self._snapshot.sales, customer_id)
