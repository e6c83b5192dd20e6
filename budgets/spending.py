from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

from budgets.period_window import PeriodWindow
from services.interfaces import TransactionStore
from services.money import ZERO, coalesce_zero
from transactions.transaction_model import Account, Category

logger = logging.getLogger(__name__)


class SpendingAggregator:
    def __init__(self, store: TransactionStore) -> None:
        self._store = store

    async def current_spending(
        self,
        accounts: Sequence[Account],
        category: Optional[Category],
        window: PeriodWindow,
    ) -> Decimal:
        """
        Signed sum of the category's transactions on `accounts` inside `window`
        (both ends inclusive). No accounts or no category means nothing to sum,
        so the store is not queried.
        """
        if not accounts or category is None:
            return ZERO
        total = await self._store.sum_amount(
            [a.id for a in accounts],
            category.id,
            window.start,
            window.end,
        )
        if total is None:
            logger.debug("No transactions for category %s in %s..%s", category.name, window.start, window.end)
        return coalesce_zero(total)
