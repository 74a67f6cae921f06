from .model import (
    DashboardModel,
    balance,
    customer_pending_amount,
    expenses_by_category,
    low_stock,
    pending_amount,
    recent_expenses,
    recent_sales,
    total_expenses,
    total_paid_sales,
    total_sales,
)

__all__ = [
    "DashboardModel",
    "balance",
    "customer_pending_amount",
    "expenses_by_category",
    "low_stock",
    "pending_amount",
    "recent_expenses",
    "recent_sales",
    "total_expenses",
    "total_paid_sales",
    "total_sales",
]
