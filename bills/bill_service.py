from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import Dict, List, Optional

from bills.bill_model import Bill, BillCreate
from bills.bill_schedule import days_in_month, is_bill_due, is_bill_upcoming
from bills.income import remaining_income
from services.batch import BatchReport, ItemStatus, run_batch
from services.clock import Clock
from services.errors import BillNotFoundError, UserNotFoundError
from services.interfaces import BillStore, UserDirectory
from services.money import ZERO, to_decimal
from users.user_model import User

logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"


class BillService:
    """
    Bill bookkeeping for a user: due and upcoming bills, paid flags, the
    monthly reset of recurring bills and remaining income after unpaid bills.
    """

    def __init__(self, bills: BillStore, users: UserDirectory, clock: Clock, upcoming_days: int = 7) -> None:
        self._bills = bills
        self._users = users
        self._clock = clock
        self._upcoming_days = upcoming_days

    async def create_bill(self, user_id: uuid.UUID, data: BillCreate) -> Bill:
        if await self._users.get_user(user_id) is None:
            raise UserNotFoundError(user_id)
        return await self._bills.create_bill(user_id, data)

    async def update_bill(self, bill_id: uuid.UUID, data: BillCreate) -> Bill:
        await self.get_bill_by_id(bill_id)
        await self._bills.update_bill(bill_id, data)
        return await self.get_bill_by_id(bill_id)

    async def delete_bill(self, bill_id: uuid.UUID) -> None:
        await self._bills.delete_bill(bill_id)

    async def get_bill_by_id(self, bill_id: uuid.UUID) -> Bill:
        bill = await self._bills.get_bill(bill_id)
        if bill is None:
            raise BillNotFoundError(bill_id)
        return bill

    async def get_user_bills(self, user_id: uuid.UUID) -> List[Bill]:
        return await self._bills.bills_owned_by(user_id)

    async def get_user_bills_by_category(self, user_id: uuid.UUID, category_id: uuid.UUID) -> List[Bill]:
        return await self._bills.bills_in_category(user_id, category_id)

    async def get_due_bills(self, user_id: uuid.UUID) -> List[Bill]:
        today = self._clock.today().day
        bills = await self._bills.bills_owned_by(user_id)
        return [b for b in bills if is_bill_due(b.due_day, b.is_paid, today)]

    async def get_upcoming_bills(self, user_id: uuid.UUID, days: Optional[int] = None) -> List[Bill]:
        if days is None:
            days = self._upcoming_days
        today = self._clock.today()
        month_length = days_in_month(today)
        bills = await self._bills.bills_owned_by(user_id)
        return [b for b in bills if is_bill_upcoming(b.due_day, b.is_paid, today.day, days, month_length)]

    async def mark_paid(self, bill_id: uuid.UUID) -> None:
        await self._set_paid(bill_id, True)

    async def mark_unpaid(self, bill_id: uuid.UUID) -> None:
        await self._set_paid(bill_id, False)

    async def _set_paid(self, bill_id: uuid.UUID, is_paid: bool) -> None:
        await self.get_bill_by_id(bill_id)
        await self._bills.set_paid(bill_id, is_paid)

    async def get_bills_by_category(self, user_id: uuid.UUID) -> Dict[str, List[Bill]]:
        grouped: Dict[str, List[Bill]] = {c.name: [] for c in await self._bills.categories()}
        grouped[UNCATEGORIZED] = []
        for bill in await self._bills.bills_owned_by(user_id):
            name = bill.category.name if bill.category is not None else UNCATEGORIZED
            grouped.setdefault(name, []).append(bill)
        return grouped

    async def get_monthly_bills_total(self, user_id: uuid.UUID) -> Decimal:
        bills = await self._bills.bills_owned_by(user_id)
        return sum((b.amount for b in bills if b.is_recurring), ZERO)

    async def get_remaining_income(self, user_id: uuid.UUID) -> Decimal:
        user = await self._users.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        unpaid = to_decimal(await self._bills.unpaid_total(user_id))
        return remaining_income(user.monthly_income, unpaid)

    async def reset_recurring_bills(self, user_id: uuid.UUID) -> BatchReport:
        """
        Start a new billing cycle: every paid recurring bill goes back to unpaid.
        One-time bills keep their paid flag. Each bill is written on its own.
        """
        paid = await self._bills.paid_bills(user_id)

        async def _reset(bill: Bill) -> ItemStatus:
            if not bill.is_recurring:
                return ItemStatus.SKIPPED
            await self._bills.set_paid(bill.id, False)
            return ItemStatus.OK

        return await run_batch(f"bill reset user:{user_id}", paid, _reset, key=lambda b: f"bill:{b.id}")

    async def reset_all_users(self) -> BatchReport:
        users = await self._users.all_users()
        children: List[BatchReport] = []

        async def _reset_user(user: User) -> ItemStatus:
            children.append(await self.reset_recurring_bills(user.id))
            return ItemStatus.OK

        report = await run_batch("bill reset", users, _reset_user, key=lambda u: f"user:{u.id}")
        report.children.extend(children)
        logger.info("Bill reset done: users=%s bills=%s", report.counts(), report.child_counts())
        return report
