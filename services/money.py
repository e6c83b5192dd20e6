from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional


ZERO = Decimal("0")
HUNDRED = Decimal("100")
RATIO_PLACES = Decimal("0.01")


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Coerce a numeric value from a driver or a fake into Decimal.
    Floats go through str() so 0.1 stays 0.1. None stays None.
    """
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Not a decimal amount: {value!r}") from e


def coalesce_zero(value: Any) -> Decimal:
    dec = to_decimal(value)
    return ZERO if dec is None else dec


def round_ratio(value: Decimal) -> Decimal:
    return value.quantize(RATIO_PLACES, rounding=ROUND_HALF_UP)
