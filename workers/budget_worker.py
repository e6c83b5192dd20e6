from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from alerts.notification_repo import NotificationRepositoryPg
from alerts.notification_service import NotificationService
from budgets.budget_monitor import BudgetMonitor
from budgets.budget_repo import BudgetRepositoryPg
from budgets.spending import SpendingAggregator
from services.clock import Clock, SystemClock
from settings.config import settings
from transactions.transaction_repo import TransactionRepositoryPg
from users.user_repo import UserRepositoryPg

logger = logging.getLogger(__name__)


def build_budget_monitor(session_factory: async_sessionmaker[AsyncSession], clock: Clock) -> BudgetMonitor:
    return BudgetMonitor(
        budgets=BudgetRepositoryPg(session_factory),
        users=UserRepositoryPg(session_factory),
        aggregator=SpendingAggregator(TransactionRepositoryPg(session_factory)),
        dispatcher=NotificationService(NotificationRepositoryPg(session_factory), clock),
        clock=clock,
        fallback_days=settings.CUSTOM_PERIOD_FALLBACK_DAYS,
    )


async def check_budget_thresholds(ctx: dict[str, Any]) -> dict:
    """
    Hourly job: evaluate every active budget of every user.
    """
    if not settings.ENABLE_BUDGET_ALERTS:
        logger.info("Budget alerts disabled; skipping budget check")
        return {"enabled": False}
    monitor = ctx.get("budget_monitor")
    if monitor is None:
        monitor = build_budget_monitor(ctx["session_factory"], ctx.get("clock") or SystemClock())
    report = await monitor.check_all_users()
    return {"enabled": True, "users": report.counts(), "budgets": report.child_counts()}
