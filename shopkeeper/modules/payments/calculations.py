"""
payments/calculations.py

Pure settlement math for sales. All amounts are integer cents.

Do not import repos or open DB connections here.
Only compute numbers; formatting belongs in the UI.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from ...constants import PAYMENT_FULL

__all__ = [
    "clamp_non_negative",
    "item_subtotal",
    "sale_total",
    "initial_remaining",
    "apply_payment",
    "received_amount",
]


# -----------------------------
# Core utilities
# -----------------------------

def clamp_non_negative(x: int) -> int:
    """Return x if x > 0, else 0. Balances and totals never go below zero."""
    return x if x > 0 else 0


# -----------------------------
# Pricing
# -----------------------------

def item_subtotal(unit_price: int, quantity: int) -> int:
    return unit_price * quantity


def sale_total(subtotals: Iterable[int], discount: int) -> int:
    """
    total = max(0, sum(subtotals) - discount)

    A discount larger than the items is clamped, not rejected.
    """
    return clamp_non_negative(sum(subtotals) - discount)


# -----------------------------
# Settlement
# -----------------------------

def initial_remaining(total: int, payment_type: str) -> int:
    """Full payment leaves nothing due; a deferred/partial sale owes the whole total."""
    return 0 if payment_type == PAYMENT_FULL else total


def apply_payment(remaining: int, amount: int) -> Tuple[int, bool]:
    """
    Returns (new_remaining, fully_paid) after receiving `amount`.

    new_remaining = max(0, remaining - amount); an overpayment settles the
    sale and the excess is not carried anywhere.
    """
    new_remaining = clamp_non_negative(remaining - amount)
    return new_remaining, new_remaining == 0


def received_amount(total: int, paid: bool, remaining: int) -> int:
    """
    Money actually received for a sale:
      - total            if paid
      - total - remaining if partially paid
      - 0                if nothing was paid (remaining == total)
    """
    if paid:
        return total
    return clamp_non_negative(total - remaining)
