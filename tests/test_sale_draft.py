# tests/test_sale_draft.py

import pytest

from shopkeeper.constants import PAYMENT_FULL, PAYMENT_PARTIAL
from shopkeeper.database.errors import InsufficientStockError, NotFoundError, ValidationError


@pytest.fixture()
def draft(engine, customer):
    d = engine.new_draft()
    d.select_customer(customer)
    return d


def test_add_item_snapshots_price_and_name(draft, make_product):
    p = make_product(name="Roda Spitfire 53mm", price=32000, quantity=10)
    line = draft.add_item(p.id, 2)
    assert line.product_name == "Roda Spitfire 53mm"
    assert line.unit_price == 32000
    assert line.subtotal == 64000
    assert draft.total == 64000


def test_adding_same_product_merges_lines(draft, make_product):
    p = make_product(price=1000, quantity=10)
    draft.add_item(p.id, 2)
    draft.add_item(p.id, 3)
    assert len(draft.items) == 1
    assert draft.items[0].quantity == 5
    assert draft.items[0].subtotal == 5000


def test_oversell_is_rejected_and_items_unchanged(draft, make_product):
    p = make_product(quantity=3)
    with pytest.raises(InsufficientStockError) as exc:
        draft.add_item(p.id, 5)
    assert str(exc.value) == "Only 3 units available in stock"
    assert exc.value.available == 3
    assert draft.items == []


def test_merge_over_stock_reports_what_is_left(draft, make_product):
    p = make_product(quantity=5)
    draft.add_item(p.id, 3)
    with pytest.raises(InsufficientStockError) as exc:
        draft.add_item(p.id, 3)
    assert str(exc.value) == "Limit exceeded. Only 2 units available"
    assert exc.value.available == 2
    assert draft.items[0].quantity == 3


@pytest.mark.parametrize("qty", [0, -1, True, 1.5])
def test_quantity_must_be_positive_int(draft, make_product, qty):
    p = make_product()
    with pytest.raises(ValidationError) as exc:
        draft.add_item(p.id, qty)
    assert "quantity" in exc.value
    assert draft.items == []


def test_unknown_product(draft):
    with pytest.raises(NotFoundError):
        draft.add_item("no-such-product", 1)


def test_remove_item_updates_total(draft, make_product):
    a = make_product(name="A", price=1000)
    b = make_product(name="B", price=2500)
    draft.add_item(a.id, 1)
    draft.add_item(b.id, 2)
    assert draft.total == 6000
    draft.remove_item(0)
    assert [i.product_name for i in draft.items] == ["B"]
    assert draft.total == 5000


def test_discount_is_clamped_at_zero(draft, make_product):
    p = make_product(price=1000)
    draft.add_item(p.id, 1)
    draft.set_discount(300)
    assert draft.subtotal == 1000
    assert draft.total == 700
    draft.set_discount(5000)
    assert draft.total == 0
    with pytest.raises(ValidationError):
        draft.set_discount(-1)


def test_credit_only_drops_items(draft, make_product):
    p = make_product()
    draft.add_item(p.id, 1)
    draft.set_credit_only(True)
    draft.set_credit_amount(25000)
    assert draft.items == []
    assert draft.total == 25000
    with pytest.raises(ValidationError):
        draft.add_item(p.id, 1)


def test_validate_collects_missing_fields(engine):
    d = engine.new_draft()
    with pytest.raises(ValidationError) as exc:
        d.validate()
    assert {"customer_id", "items", "payment_method"} <= set(exc.value.errors)


def test_deferred_sale_needs_no_method(draft, make_product):
    p = make_product(price=1000)
    draft.add_item(p.id, 1)
    draft.set_payment(PAYMENT_PARTIAL)
    sale = draft.build()
    assert sale.paid is False
    assert sale.remaining_amount == 1000
    assert sale.payment_date is None


def test_unknown_payment_method_or_type(draft, make_product):
    p = make_product()
    draft.add_item(p.id, 1)
    draft.set_payment(PAYMENT_FULL, "Cheque")
    with pytest.raises(ValidationError) as exc:
        draft.validate()
    assert "payment_method" in exc.value
    with pytest.raises(ValidationError):
        draft.set_payment("layaway", "PIX")


def test_credit_amount_required(draft):
    draft.set_credit_only(True)
    draft.set_payment(PAYMENT_PARTIAL)
    with pytest.raises(ValidationError) as exc:
        draft.validate()
    assert "credit_amount" in exc.value


def test_zero_total_deferred_sale_needs_method(draft, make_product):
    """A discount that wipes out the total makes the sale paid, so a method is required."""
    p = make_product(price=1000)
    draft.add_item(p.id, 1)
    draft.set_discount(5000)
    draft.set_payment(PAYMENT_PARTIAL)
    with pytest.raises(ValidationError) as exc:
        draft.validate()
    assert "payment_method" in exc.value

    draft.set_payment(PAYMENT_PARTIAL, "Dinheiro")
    sale = draft.build()
    assert sale.paid is True
    assert sale.payment_method == "Dinheiro"
