# tests/test_legacy_import.py

import json

import pytest

from shopkeeper.database.errors import DomainError
from shopkeeper.database.legacy_import import (
    UNKNOWN_PAYMENT_METHOD,
    UNKNOWN_PHONE,
    import_legacy_export,
    load_legacy_export,
)


LEGACY = {
    "products": [
        {
            "id": "p-1",
            "name": "Shape Maple 8.0",
            "description": "",
            "price": 250.0,
            "costPrice": 150.0,
            "quantity": 8,
            "category": "Shapes",
            "createdAt": "2024-05-01T10:00:00.000Z",
        }
    ],
    "sales": [
        {
            "id": "s-1",
            "customerName": "Ana Souza",
            "items": [
                {"productId": "p-1", "productName": "Shape Maple 8.0", "quantity": 1, "unitPrice": 250.0, "subtotal": 250.0}
            ],
            "total": 250.0,
            "paid": False,
            "remainingAmount": 100.5,
            "paymentMethod": "PIX",
            "partialPayment": [{"amount": 149.5, "date": "2024-05-02T10:00:00.000Z", "method": "PIX"}],
            "createdAt": "2024-05-01T11:00:00.000Z",
        },
        {
            "id": "s-2",
            "customerName": "Ana Souza",
            "items": [],
            "total": 80.0,
            "paid": True,
            "isCreditOnly": True,
            "createdAt": "2024-05-03T09:00:00.000Z",
        },
    ],
    "expenses": [
        {
            "id": "e-1",
            "description": "Aluguel de maio",
            "amount": 1200.0,
            "category": "Aluguel",
            "date": "2024-05-05T00:00:00.000Z",
            "paymentMethod": "Boleto",
        }
    ],
}


def test_import_converts_money_and_keys(repos):
    result = import_legacy_export(LEGACY, repos)
    assert (result.products, result.sales, result.expenses, result.customers) == (1, 2, 1, 1)

    product = repos.products.require("p-1")
    assert product.price == 25000 and product.cost_price == 15000
    assert product.created_at == "2024-05-01T10:00:00.000Z"

    sale = repos.sales.require("s-1")
    assert sale.total == 25000
    assert sale.remaining_amount == 10050
    assert sale.paid is False
    assert sale.partial_payment[0].amount == 14950
    assert sale.items[0].unit_price == 25000

    credit = repos.sales.require("s-2")
    assert credit.is_credit_only and credit.paid and credit.remaining_amount == 0

    expense = repos.expenses.require("e-1")
    assert expense.amount == 120000
    assert expense.date == "2024-05-05"


def test_import_creates_one_customer_per_name(repos):
    import_legacy_export(LEGACY, repos)
    customers = repos.customers.list_all()
    assert [(c.name, c.phone) for c in customers] == [("Ana Souza", UNKNOWN_PHONE)]
    assert {s.customer_id for s in repos.sales.list_all()} == {customers[0].id}


def test_import_reuses_existing_customer(repos, customer):
    result = import_legacy_export(LEGACY, repos)
    assert result.customers == 0
    assert len(repos.customers.find_by_phone(UNKNOWN_PHONE)) == 0
    assert repos.sales.require("s-1").customer_id == customer.id


def test_import_from_file(repos, tmp_path):
    path = tmp_path / "export.json"
    path.write_text(json.dumps(LEGACY), encoding="utf-8")
    assert import_legacy_export(path, repos).products == 1
    assert load_legacy_export(json.dumps(LEGACY))["products"][0]["id"] == "p-1"


def test_bad_row_aborts_whole_import(repos):
    broken = {**LEGACY, "expenses": [{"description": "sem valor", "category": "Aluguel"}]}
    with pytest.raises(DomainError) as exc:
        import_legacy_export(broken, repos)
    assert "expenses row 0" in str(exc.value)
    assert repos.products.list_all() == []
    assert repos.sales.list_all() == []


def test_unreadable_export(repos, tmp_path):
    with pytest.raises(DomainError):
        load_legacy_export(tmp_path / "missing.json")
    with pytest.raises(DomainError):
        load_legacy_export("[1, 2, 3]")


def test_settled_legacy_sale_without_method_gets_fallback(repos):
    import_legacy_export(LEGACY, repos)
    credit = repos.sales.require("s-2")
    assert credit.paid is True
    assert credit.payment_method == UNKNOWN_PAYMENT_METHOD
    assert repos.sales.require("s-1").payment_method == "PIX"
