from __future__ import annotations

import uuid
from datetime import date
from typing import List

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from budgets.budget_model import Budget, BudgetCreate
from db.models import BudgetRow
from db.rows import validate_rows
from services.errors import BudgetNotFoundError


def _apply(row: BudgetRow, data: BudgetCreate) -> None:
    row.name = data.name
    row.amount = data.amount
    row.category_id = data.category_id
    row.period = data.period.value
    row.start_date = data.start_date
    row.end_date = data.end_date
    row.warning_threshold = data.warning_threshold


class BudgetRepositoryPg:
    """
    Budget storage. Rows that no longer validate (for example a legacy
    period string) are logged and left out of every read.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def create_budget(self, user_id: uuid.UUID, data: BudgetCreate) -> Budget:
        row = BudgetRow(user_id=user_id)
        _apply(row, data)
        async with self._session_factory() as session:
            session.add(row)
            await session.commit()
            budget_id = row.id
        return await self.get_by_id(budget_id)

    async def update_budget(self, budget_id: uuid.UUID, data: BudgetCreate) -> Budget:
        async with self._session_factory() as session:
            row = (await session.execute(select(BudgetRow).where(BudgetRow.id == budget_id))).scalars().first()
            if row is None:
                raise BudgetNotFoundError(budget_id)
            _apply(row, data)
            await session.commit()
        # Re-read so the category relationship follows the new category_id
        return await self.get_by_id(budget_id)

    async def get_by_id(self, budget_id: uuid.UUID) -> Budget:
        async with self._session_factory() as session:
            res = await session.execute(select(BudgetRow).where(BudgetRow.id == budget_id))
            budgets = validate_rows(Budget, res.scalars().all(), "budget")
            if not budgets:
                raise BudgetNotFoundError(budget_id)
            return budgets[0]

    async def list_for_user(self, user_id: uuid.UUID) -> List[Budget]:
        stmt = select(BudgetRow).where(BudgetRow.user_id == user_id).order_by(BudgetRow.start_date)
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return validate_rows(Budget, res.scalars().all(), "budget")

    async def active_budgets(self, user_id: uuid.UUID, today: date) -> List[Budget]:
        stmt = select(BudgetRow).where(
            BudgetRow.user_id == user_id,
            BudgetRow.start_date <= today,
            or_(BudgetRow.end_date.is_(None), BudgetRow.end_date >= today),
        )
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return validate_rows(Budget, res.scalars().all(), "budget")

    async def delete(self, budget_id: uuid.UUID) -> None:
        async with self._session_factory() as session:
            await session.execute(delete(BudgetRow).where(BudgetRow.id == budget_id))
            await session.commit()
