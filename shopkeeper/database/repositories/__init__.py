# shopkeeper/database/repositories/__init__.py
"""
Repository layer public API.

Usage:
    from shopkeeper.database.repositories import (
        # Customers
        CustomersRepo, Customer,
        # Expenses
        ExpensesRepo, Expense,
        # Products
        ProductsRepo, Product,
        # Sales
        SalesRepo, Sale, SaleItem, PartialPayment,
        # All four at once
        Repositories,
    )
"""
from __future__ import annotations

from dataclasses import dataclass

from ..store import RecordStore

# ---------------- Customers ----------------
from .customers_repo import CustomersRepo, Customer

# ---------------- Expenses -----------------
from .expenses_repo import ExpensesRepo, Expense

# ---------------- Products -----------------
from .products_repo import ProductsRepo, Product

# ------------------ Sales ------------------
from .sales_repo import SalesRepo, Sale, SaleItem, PartialPayment


@dataclass
class Repositories:
    store: RecordStore
    products: ProductsRepo
    customers: CustomersRepo
    sales: SalesRepo
    expenses: ExpensesRepo

    @classmethod
    def for_store(cls, store: RecordStore) -> "Repositories":
        return cls(
            store=store,
            products=ProductsRepo(store),
            customers=CustomersRepo(store),
            sales=SalesRepo(store),
            expenses=ExpensesRepo(store),
        )


__all__ = [
    # customers_repo
    "CustomersRepo",
    "Customer",
    # expenses_repo
    "ExpensesRepo",
    "Expense",
    # products_repo
    "ProductsRepo",
    "Product",
    # sales_repo
    "SalesRepo",
    "Sale",
    "SaleItem",
    "PartialPayment",
    # bundle
    "Repositories",
]
