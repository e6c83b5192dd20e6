from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from sqlalchemy import and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.models import TransactionRow
from services.money import to_decimal


class TransactionRepositoryPg:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def sum_amount(
        self,
        account_ids: Sequence[uuid.UUID],
        category_id: uuid.UUID,
        start: datetime,
        end: datetime,
    ) -> Optional[Decimal]:
        stmt = select(func.sum(TransactionRow.amount)).where(
            and_(
                TransactionRow.account_id.in_(list(account_ids)),
                TransactionRow.category_id == category_id,
                TransactionRow.date.between(start, end),
            )
        )
        async with self._session_factory() as session:
            res = await session.execute(stmt)
            return to_decimal(res.scalar())

