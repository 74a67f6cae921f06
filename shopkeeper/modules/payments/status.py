from __future__ import annotations

from enum import Enum
from typing import Optional


class SaleState(str, Enum):
    PENDING = "pending"     # nothing received yet
    PARTIAL = "partial"     # some received, some still due
    PAID = "paid"           # nothing due


# ---------- Human labels ----------
LABELS = {
    SaleState.PENDING: "Pendente",
    SaleState.PARTIAL: "Parcial",
    SaleState.PAID: "Pago",
}

# ---------- Descriptions (UI copy / tooltips) ----------
DESCRIPTIONS = {
    SaleState.PENDING: "No payment received yet; the whole total is due.",
    SaleState.PARTIAL: "Part of the total was received; the rest is still due.",
    SaleState.PAID: "Fully paid.",
}


# ---------- API ----------

def state_for(total: int, remaining: int) -> SaleState:
    """
    Threshold helper:
      - PAID    if remaining == 0
      - PENDING if remaining >= total (nothing received)
      - PARTIAL otherwise
    """
    if remaining <= 0:
        return SaleState.PAID
    if remaining >= total:
        return SaleState.PENDING
    return SaleState.PARTIAL


def sale_state(sale) -> SaleState:
    return state_for(sale.total, sale.remaining_amount)


def label(state: Optional[SaleState]) -> str:
    """Human label ('Pago'). Empty string if unknown."""
    return LABELS.get(state, "") if state is not None else ""


def description(state: Optional[SaleState]) -> str:
    """Short human description for tooltips; empty string if unknown."""
    return DESCRIPTIONS.get(state, "") if state is not None else ""
