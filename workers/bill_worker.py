from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bills.bill_repo import BillRepositoryPg
from bills.bill_service import BillService
from services.clock import Clock, SystemClock
from settings.config import settings
from users.user_repo import UserRepositoryPg


def build_bill_service(session_factory: async_sessionmaker[AsyncSession], clock: Clock) -> BillService:
    return BillService(
        bills=BillRepositoryPg(session_factory),
        users=UserRepositoryPg(session_factory),
        clock=clock,
        upcoming_days=settings.UPCOMING_BILLS_DAYS,
    )


async def reset_recurring_bills(ctx: dict[str, Any]) -> dict:
    """
    Monthly job: mark every paid recurring bill unpaid for the new cycle.
    """
    service = ctx.get("bill_service")
    if service is None:
        service = build_bill_service(ctx["session_factory"], ctx.get("clock") or SystemClock())
    report = await service.reset_all_users()
    return {"users": report.counts(), "bills": report.child_counts()}
