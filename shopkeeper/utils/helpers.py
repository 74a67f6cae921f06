# shopkeeper/utils/helpers.py
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
import re
from typing import Optional, Union

from ..constants import CENTS

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def now_iso() -> str:
    """Current local time as an ISO timestamp with microseconds."""
    return datetime.now().isoformat(timespec="microseconds")


def to_cents(v: NumberLike) -> int:
    """
    Convert an amount in currency units (e.g. 12.5 or "12.50") to integer cents.

    Rounds half-up on the third decimal so float noise such as 0.1 + 0.2
    lands on the expected cent. Raises ValueError when `v` is not numeric.
    """
    try:
        d = Decimal(str(v))
    except InvalidOperation as e:
        raise ValueError(f"Could not parse {v!r} as a number.") from e
    return int((d * CENTS).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def fmt_money(
    cents: NumberLike,
    *,
    symbol: str = "R$",
    strict: bool = False,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format an amount in cents for display, e.g. 123456 -> "R$ 1.234,56".

    Behavior on parse failure:
      - By default returns str(cents).
      - If `sentinel` is provided (e.g., "N/A"), returns that sentinel instead.
      - If `strict=True`, raises ValueError.
    """
    try:
        value = int(cents)
    except (TypeError, ValueError) as e:
        _log.debug("fmt_money: failed to parse %r as cents: %s", cents, e)
        if strict:
            raise ValueError(f"Could not parse {cents!r} as an amount in cents.") from e
        return str(sentinel) if sentinel is not None else str(cents)

    sign = "-" if value < 0 else ""
    units, rest = divmod(abs(value), CENTS)
    grouped = f"{units:,}".replace(",", ".")
    text = f"{sign}{grouped},{rest:02d}"
    return f"{symbol} {text}" if symbol else text


_NON_DIGITS = re.compile(r"\D")


def format_phone(phone: Optional[str]) -> str:
    """
    Display-time phone formatting. Stored phones keep whatever the user typed.

    11 digits -> (XX) XXXXX-XXXX, 10 -> (XX) XXXX-XXXX,
    9 -> XXXXX-XXXX, 8 -> XXXX-XXXX; anything else is returned as bare digits.
    """
    d = _NON_DIGITS.sub("", phone or "")
    if len(d) == 11:
        return f"({d[:2]}) {d[2:7]}-{d[7:]}"
    if len(d) == 10:
        return f"({d[:2]}) {d[2:6]}-{d[6:]}"
    if len(d) == 9:
        return f"{d[:5]}-{d[5:]}"
    if len(d) == 8:
        return f"{d[:4]}-{d[4:]}"
    return d
