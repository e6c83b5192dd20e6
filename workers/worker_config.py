from __future__ import annotations

from typing import Any

from arq.connections import RedisSettings
from arq import cron

from db.postgres import close_postgres, get_session_factory, init_postgres
from services.clock import SystemClock
from settings.config import settings
from settings.logging_config import configure_logging
from workers.bill_worker import reset_recurring_bills
from workers.budget_worker import check_budget_thresholds


async def startup(ctx: dict[str, Any]) -> None:
    configure_logging(settings.LOG_LEVEL)
    await init_postgres()
    ctx["session_factory"] = get_session_factory()
    ctx["clock"] = SystemClock()


async def shutdown(ctx: dict[str, Any]) -> None:
    await close_postgres()


class WorkerSettings:
    functions = [
        check_budget_thresholds,
        reset_recurring_bills,
    ]
    on_startup = startup
    on_shutdown = shutdown
    redis_settings = RedisSettings.from_dsn(settings.REDIS_URL or "redis://localhost:6379")
    cron_jobs = [
        cron(check_budget_thresholds, minute=settings.BUDGET_CHECK_MINUTE),  # Hourly
        cron(
            reset_recurring_bills,
            day=settings.BILL_RESET_DAY,
            hour=settings.BILL_RESET_HOUR,
            minute=0,
        ),  # Monthly, start of billing cycle
    ]
