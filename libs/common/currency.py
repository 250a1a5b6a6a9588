"""Currency helpers for fee amounts.

Amounts travel over the API as decimal rupees (e.g. ``1500.5``). The gateway
works in the same unit; paise are only used for exact comparisons.

Display follows the en-IN convention: the last three integer digits form one
group and the rest are grouped in pairs (₹12,34,567.50).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

from libs.common.config import get_settings

PAISE_PER_RUPEE: int = 100

CURRENCY_SYMBOLS = {"INR": "₹"}

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Optional[Decimal]:
    """Parse an amount, returning None for blanks and garbage."""
    if isinstance(value, Decimal):
        return value
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not parsed.is_finite():
        return None
    return parsed


def rupees_to_paise(rupees: Number) -> int:
    """Convert rupees to paise (round half-up). ₹1 = 100 paise."""
    amount = to_decimal(rupees)
    if amount is None:
        raise ValueError(f"Invalid amount: {rupees!r}")
    return int((amount * PAISE_PER_RUPEE).quantize(Decimal("1"), ROUND_HALF_UP))


def _group_indian(digits: str) -> str:
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_amount(amount: Number, currency: Optional[str] = None) -> str:
    """Format an amount for display, e.g. ``format_amount(123456.5) == "₹1,23,456.50"``.

    Whole amounts are shown without a fraction; others with two digits.
    """
    value = to_decimal(amount)
    if value is None:
        raise ValueError(f"Invalid amount: {amount!r}")

    value = value.quantize(Decimal("0.01"), ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):.2f}".partition(".")
    text = _group_indian(integer)
    if fraction != "00":
        text = f"{text}.{fraction}"
    currency = currency or get_settings().CURRENCY
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    return f"{sign}{symbol}{text}"
