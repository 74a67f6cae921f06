from .calculations import (
    apply_payment,
    clamp_non_negative,
    initial_remaining,
    item_subtotal,
    received_amount,
    sale_total,
)
from .status import SaleState, sale_state

__all__ = [
    "apply_payment",
    "clamp_non_negative",
    "initial_remaining",
    "item_subtotal",
    "received_amount",
    "sale_total",
    "SaleState",
    "sale_state",
]
