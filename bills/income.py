from __future__ import annotations

from decimal import Decimal
from typing import Optional

from services.money import ZERO


def remaining_income(monthly_income: Optional[Decimal], unpaid_total: Optional[Decimal]) -> Decimal:
    """Monthly income left after unpaid bills. No income on file means zero."""
    if monthly_income is None:
        return ZERO
    if unpaid_total is None:
        return monthly_income
    return monthly_income - unpaid_total
