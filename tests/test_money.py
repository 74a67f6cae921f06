# tests/test_money.py

from datetime import date, datetime

import pytest

from shopkeeper.utils.helpers import fmt_money, format_phone, to_cents
from shopkeeper.utils.validators import is_not_future, mask_amount, parse_amount, parse_iso_date


@pytest.mark.parametrize(
    "value, cents",
    [(12.5, 1250), ("12.50", 1250), (0.1 + 0.2, 30), (100, 10000), ("0.005", 1)],
)
def test_to_cents(value, cents):
    assert to_cents(value) == cents


def test_to_cents_rejects_text():
    with pytest.raises(ValueError):
        to_cents("doze")


def test_fmt_money():
    assert fmt_money(123456) == "R$ 1.234,56"
    assert fmt_money(5) == "R$ 0,05"
    assert fmt_money(-2500) == "R$ -25,00"
    assert fmt_money(1000, symbol="") == "10,00"
    assert fmt_money("abc") == "abc"
    assert fmt_money("abc", sentinel="N/A") == "N/A"
    with pytest.raises(ValueError):
        fmt_money(None, strict=True)


@pytest.mark.parametrize(
    "typed, masked, cents",
    [
        ("12", "12,00", 1200),
        ("1.234,5", "1234,50", 123450),
        (",7", "0,70", 70),
        ("", "0,00", 0),
        ("R$ 9,999", "9,99", 999),
        ("abc", "0,00", 0),
    ],
)
def test_masked_amount_input(typed, masked, cents):
    assert mask_amount(typed) == masked
    assert parse_amount(typed) == cents


@pytest.mark.parametrize(
    "raw, shown",
    [
        ("11987654321", "(11) 98765-4321"),
        ("(11) 3456-7890", "(11) 3456-7890"),
        ("987654321", "98765-4321"),
        ("34567890", "3456-7890"),
        ("123", "123"),
        (None, ""),
    ],
)
def test_format_phone(raw, shown):
    assert format_phone(raw) == shown


def test_dates():
    assert parse_iso_date("2025-01-10T12:00:00") == date(2025, 1, 10)
    assert parse_iso_date(datetime(2025, 1, 10, 8)) == date(2025, 1, 10)
    assert parse_iso_date("10/01/2025") is None
    assert is_not_future("2025-01-10", today=date(2025, 1, 10))
    assert not is_not_future("2025-01-11", today=date(2025, 1, 10))
    assert not is_not_future("", today=date(2025, 1, 10))
