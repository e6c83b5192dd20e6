from __future__ import annotations

import uuid
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bills.bill_model import Bill, BillCreate
from db.models import BillRow, CategoryRow
from db.rows import validate_rows
from services.errors import BillNotFoundError
from services.money import to_decimal
from transactions.transaction_model import Category


class BillRepositoryPg:
    """
    Bill storage. Every call opens its own session, so each write commits
    independently of any other bill.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _select(self, stmt) -> List[Bill]:
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return validate_rows(Bill, res.unique().scalars().all(), "bill")

    async def create_bill(self, user_id: uuid.UUID, data: BillCreate) -> Bill:
        row = BillRow(id=uuid.uuid4(), user_id=user_id, **data.model_dump())
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
        bill = await self.get_bill(row.id)
        if bill is None:
            raise BillNotFoundError(row.id)
        return bill

    async def update_bill(self, bill_id: uuid.UUID, data: BillCreate) -> None:
        async with self._session_factory() as session:
            await session.execute(update(BillRow).where(BillRow.id == bill_id).values(**data.model_dump()))
            await session.commit()

    async def delete_bill(self, bill_id: uuid.UUID) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(BillRow).where(BillRow.id == bill_id))
            await session.commit()

    async def bills_owned_by(self, user_id: uuid.UUID) -> List[Bill]:
        return await self._select(select(BillRow).where(BillRow.user_id == user_id).order_by(BillRow.due_day))

    async def bills_in_category(self, user_id: uuid.UUID, category_id: uuid.UUID) -> List[Bill]:
        return await self._select(
            select(BillRow).where(BillRow.user_id == user_id, BillRow.category_id == category_id).order_by(BillRow.due_day)
        )

    async def paid_bills(self, user_id: uuid.UUID) -> List[Bill]:
        return await self._select(select(BillRow).where(BillRow.user_id == user_id, BillRow.is_paid.is_(True)))

    async def get_bill(self, bill_id: uuid.UUID) -> Optional[Bill]:
        bills = await self._select(select(BillRow).where(BillRow.id == bill_id))
        return bills[0] if bills else None

    async def set_paid(self, bill_id: uuid.UUID, is_paid: bool) -> None:
        async with self._session_factory() as session:
            await session.execute(update(BillRow).where(BillRow.id == bill_id).values(is_paid=is_paid))
            await session.commit()

    async def unpaid_total(self, user_id: uuid.UUID) -> Optional[Decimal]:
        stmt = select(func.sum(BillRow.amount)).where(BillRow.user_id == user_id, BillRow.is_paid.is_(False))
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return to_decimal(res.scalar())

    async def categories(self) -> List[Category]:
        async with self._session_factory() as session:
            res = await session.execute(select(CategoryRow).order_by(CategoryRow.name))
            return [Category.model_validate(row) for row in res.scalars().all()]
