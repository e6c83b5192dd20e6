from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional

from budgets.budget_model import BudgetPeriod


@dataclass(frozen=True)
class PeriodWindow:
    start: datetime
    end: datetime

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant <= self.end


def _midnight(day: date, like: datetime) -> datetime:
    return datetime.combine(day, time.min, tzinfo=like.tzinfo)


def _end_of_day(day: date, like: datetime) -> datetime:
    return datetime.combine(day, time.max, tzinfo=like.tzinfo)


def resolve_window(
    period: BudgetPeriod,
    now: datetime,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    fallback_days: int = 30,
) -> PeriodWindow:
    """
    Return the window that counts as the current cycle of a budget.

    DAILY, WEEKLY and MONTHLY windows run from the start of the current day,
    ISO week or calendar month up to `now`. CUSTOM windows run from midnight of
    `start_date` (or `fallback_days` before now) to the end of `end_date`
    (or now). A window whose start lands after its end collapses to [end, end].
    """
    today = now.date()
    end = now
    if period == BudgetPeriod.DAILY:
        start = _midnight(today, now)
    elif period == BudgetPeriod.WEEKLY:
        start = _midnight(today - timedelta(days=today.weekday()), now)
    elif period == BudgetPeriod.MONTHLY:
        start = _midnight(today.replace(day=1), now)
    else:
        if start_date is not None:
            start = _midnight(start_date, now)
        else:
            start = now - timedelta(days=fallback_days)
        if end_date is not None:
            end = _end_of_day(end_date, now)

    if start > end:
        start = end
    return PeriodWindow(start=start, end=end)
