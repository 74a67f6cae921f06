# shopkeeper/database/legacy_import.py
"""
One-shot import of the legacy JSON export.

The old app kept three arrays (products, sales, expenses) with camelCase
keys, currency as floating-point units and dates as ISO strings. Customers
did not exist yet, so legacy sales may carry only a customer name; a
customer is created for each such name (or an existing one with the same
name is reused).

The whole import runs in one transaction: a bad row aborts everything and
the DomainError names the collection and row.
"""
from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from ..constants import DEFAULT_MIN_STOCK
from ..utils.helpers import now_iso, to_cents
from .errors import DomainError, ValidationError
from .repositories import (
    Customer,
    Expense,
    PartialPayment,
    Product,
    Repositories,
    Sale,
    SaleItem,
)

_log = logging.getLogger(__name__)

UNKNOWN_PHONE = "-"
# settled legacy sales that never recorded how they were paid
UNKNOWN_PAYMENT_METHOD = "Outro"


@dataclass
class ImportResult:
    products: int = 0
    sales: int = 0
    expenses: int = 0
    customers: int = 0


def load_legacy_export(source: Path | str | Mapping[str, Any]) -> dict[str, Any]:
    """Accept a parsed dict, a JSON string, or a path to a JSON file."""
    if isinstance(source, Mapping):
        return dict(source)
    text = str(source)
    try:
        if isinstance(source, Path) or not text.lstrip().startswith(("{", "[")):
            text = Path(source).read_text(encoding="utf-8")
        data = json.loads(text)
    except (OSError, json.JSONDecodeError) as e:
        raise DomainError(f"Could not read legacy export: {e}") from e
    if not isinstance(data, dict):
        raise DomainError("Legacy export must be a JSON object with products/sales/expenses.")
    return data


# ---- row converters ----------------------------------------------------------

def _product(row: Mapping[str, Any]) -> Product:
    now = now_iso()
    return Product(
        id=row.get("id") or None,
        name=row["name"],
        description=row.get("description") or "",
        price=to_cents(row.get("price") or 0),
        cost_price=to_cents(row.get("costPrice") or 0),
        quantity=int(row.get("quantity") or 0),
        category=row.get("category") or "Outros",
        min_stock=int(row["minStock"]) if row.get("minStock") is not None else DEFAULT_MIN_STOCK,
        image_url=row.get("imageUrl"),
        created_at=row.get("createdAt") or now,
        updated_at=row.get("updatedAt") or row.get("createdAt") or now,
    )


def _sale(row: Mapping[str, Any], customer_id: str) -> Sale:
    total = to_cents(row.get("total") or 0)
    paid = bool(row.get("paid"))
    if paid:
        remaining = 0
    elif row.get("remainingAmount") is not None:
        remaining = to_cents(row["remainingAmount"])
    else:
        remaining = total
    is_credit_only = bool(row.get("isCreditOnly"))
    created = row.get("createdAt") or now_iso()
    return Sale(
        id=row.get("id") or None,
        customer_id=customer_id,
        customer_name=row.get("customerName") or "",
        items=[] if is_credit_only else [
            SaleItem(
                product_id=i["productId"],
                product_name=i.get("productName") or "",
                quantity=int(i["quantity"]),
                unit_price=to_cents(i["unitPrice"]),
                subtotal=to_cents(i.get("subtotal", i["unitPrice"] * i["quantity"])),
            )
            for i in row.get("items") or []
        ],
        discount=to_cents(row.get("discount") or 0),
        total=total,
        remaining_amount=remaining,
        paid=remaining == 0,
        payment_method=row.get("paymentMethod") or (UNKNOWN_PAYMENT_METHOD if remaining == 0 else ""),
        notes=row.get("notes") or "",
        payment_date=row.get("paymentDate") or (created if remaining == 0 else None),
        partial_payment=[
            PartialPayment(amount=to_cents(p["amount"]), date=p["date"], method=p.get("method") or "")
            for p in row.get("partialPayment") or []
        ],
        is_credit_only=is_credit_only,
        created_at=created,
        updated_at=created,
    )


def _expense(row: Mapping[str, Any]) -> Expense:
    now = now_iso()
    return Expense(
        id=row.get("id") or None,
        description=row["description"],
        amount=to_cents(row["amount"]),
        category=row["category"],
        date=str(row["date"])[:10],
        payment_method=row["paymentMethod"],
        notes=row.get("notes") or "",
        created_at=row.get("createdAt") or now,
        updated_at=row.get("createdAt") or now,
    )


# ---- import ------------------------------------------------------------------

def _customer_for(repos: Repositories, row: Mapping[str, Any], by_name: dict[str, str], result: ImportResult) -> str:
    if row.get("customerId"):
        return row["customerId"]
    name = (row.get("customerName") or "").strip() or "Cliente"
    if name not in by_name:
        created = repos.customers.create(Customer(name=name, phone=UNKNOWN_PHONE))
        by_name[name] = created.id
        result.customers += 1
    return by_name[name]


def import_legacy_export(source: Path | str | Mapping[str, Any], repos: Repositories) -> ImportResult:
    data = load_legacy_export(source)
    result = ImportResult()
    by_name = {c.name: c.id for c in repos.customers.list_all()}

    with repos.store.transaction():
        for collection, convert, repo in (
            ("products", _product, repos.products),
            ("expenses", _expense, repos.expenses),
        ):
            for n, row in enumerate(data.get(collection) or []):
                try:
                    repo.restore(convert(row))
                except (KeyError, TypeError, ValueError, ValidationError) as e:
                    raise DomainError(f"Legacy {collection} row {n}: {e}") from e
                setattr(result, collection, getattr(result, collection) + 1)

        for n, row in enumerate(data.get("sales") or []):
            try:
                customer_id = _customer_for(repos, row, by_name, result)
                repos.sales.restore(_sale(row, customer_id))
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                raise DomainError(f"Legacy sales row {n}: {e}") from e
            result.sales += 1

    _log.info("legacy import: %d products migrated", result.products)
    _log.info("legacy import: %d sales migrated (%d customers created)", result.sales, result.customers)
    _log.info("legacy import: %d expenses migrated", result.expenses)
    return result
