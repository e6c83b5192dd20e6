from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from services.money import HUNDRED, ZERO, round_ratio


@dataclass(frozen=True)
class ThresholdResult:
    should_warn: bool
    ratio: Optional[Decimal]
    # True when the budget could not be evaluated (no division attempted)
    skipped: bool = False


SKIP = ThresholdResult(should_warn=False, ratio=None, skipped=True)


def evaluate_threshold(
    current_spending: Decimal,
    budget_amount: Optional[Decimal],
    warning_threshold: Optional[Decimal],
) -> ThresholdResult:
    """
    Compare spending against the budget. The ratio is spending / amount rounded
    half-up to 2 places; it warns once the ratio reaches threshold / 100 rounded
    the same way. A missing threshold or a non-positive amount is skipped.
    """
    if budget_amount is None or budget_amount <= ZERO or warning_threshold is None:
        return SKIP
    ratio = round_ratio(current_spending / budget_amount)
    limit = round_ratio(warning_threshold / HUNDRED)
    return ThresholdResult(should_warn=ratio >= limit, ratio=ratio)
