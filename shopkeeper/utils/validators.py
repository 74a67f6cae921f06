# shopkeeper/utils/validators.py
import re
from datetime import date, datetime

_NOT_DIGIT_OR_COMMA = re.compile(r"[^\d,]")
_NON_DIGITS = re.compile(r"\D")


def non_empty(text) -> bool:
    """
    True if `text` is not None/empty after stripping whitespace.
    """
    return bool(text and str(text).strip())


# ---- Masked amount input ----

def mask_amount(text: str | None) -> str:
    """
    Normalize what the user typed into a comma-decimal amount string.

    Keeps digits and the first comma only, pads or truncates the fraction
    to two digits:
        "12"      -> "12,00"
        "1.234,5" -> "1234,50"
        ",7"      -> "0,70"
        ""        -> "0,00"
    """
    value = _NOT_DIGIT_OR_COMMA.sub("", text or "")
    if "," not in value:
        return f"{value or '0'},00"
    integer, _, fraction = value.partition(",")
    integer = _NON_DIGITS.sub("", integer) or "0"
    fraction = _NON_DIGITS.sub("", fraction)[:2].ljust(2, "0")
    return f"{integer},{fraction}"


def parse_amount(text: str | None) -> int:
    """
    Parse masked amount input into integer cents ("1.234,56" -> 123456).

    Never raises: anything unparseable becomes 0, same as an empty field.
    """
    integer, _, fraction = mask_amount(text).partition(",")
    return int(integer) * 100 + int(fraction)


# ---- Numeric validators ----

def is_non_negative_int(x) -> bool:
    """True iff x is an int (not bool) and x >= 0."""
    return isinstance(x, int) and not isinstance(x, bool) and x >= 0


def is_strictly_positive_int(x) -> bool:
    """True iff x is an int (not bool) and x > 0."""
    return isinstance(x, int) and not isinstance(x, bool) and x > 0


# ---- Dates ----

def parse_iso_date(x) -> date | None:
    """
    Best-effort parse of a date or ISO string ('YYYY-MM-DD', timestamps allowed).
    Returns None when the value cannot be read as a date.
    """
    if isinstance(x, datetime):
        return x.date()
    if isinstance(x, date):
        return x
    try:
        return date.fromisoformat(str(x)[:10])
    except (TypeError, ValueError):
        return None


def is_not_future(x, today: date | None = None) -> bool:
    """True iff x parses as a date that is on or before today."""
    d = parse_iso_date(x)
    return d is not None and d <= (today or date.today())
