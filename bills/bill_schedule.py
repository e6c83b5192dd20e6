from __future__ import annotations

import calendar
from datetime import date


def days_in_month(day: date) -> int:
    return calendar.monthrange(day.year, day.month)[1]


def is_bill_due(due_day: int, is_paid: bool, today_day: int) -> bool:
    """
    A bill is due once the calendar reaches its due day and stays due until it
    is paid or reset. There is no separate overdue state.
    """
    return not is_paid and due_day <= today_day


def is_bill_upcoming(due_day: int, is_paid: bool, today_day: int, days: int, days_in_current_month: int) -> bool:
    """
    True when an unpaid bill falls due within `days` days of `today_day`.

    When the lookahead runs past the end of the month, the overflow is mapped
    onto the first days of next month: today=28, days=10 in a 30-day month
    covers 28..30 and 1..8. Next month's own length is not consulted.
    """
    if is_paid:
        return False
    last_day_to_check = today_day + days
    if today_day <= due_day <= last_day_to_check:
        return True
    return last_day_to_check > days_in_current_month and due_day <= last_day_to_check - days_in_current_month
