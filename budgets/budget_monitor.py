from __future__ import annotations

import logging

from alerts.notification_model import BudgetWarning
from budgets.budget_model import Budget
from budgets.period_window import resolve_window
from budgets.spending import SpendingAggregator
from budgets.threshold import evaluate_threshold
from services.batch import BatchReport, ItemStatus, run_batch
from services.clock import Clock
from services.interfaces import BudgetStore, NotificationDispatcher, UserDirectory
from services.money import ZERO
from users.user_model import User

logger = logging.getLogger(__name__)


class BudgetMonitor:
    """
    Hourly budget check: for every user and every budget active today,
    compare the spending of the current period against the warning threshold
    and dispatch a warning when it is reached.
    """

    def __init__(
        self,
        budgets: BudgetStore,
        users: UserDirectory,
        aggregator: SpendingAggregator,
        dispatcher: NotificationDispatcher,
        clock: Clock,
        fallback_days: int = 30,
    ) -> None:
        self._budgets = budgets
        self._users = users
        self._aggregator = aggregator
        self._dispatcher = dispatcher
        self._clock = clock
        self._fallback_days = fallback_days

    async def check_all_users(self) -> BatchReport:
        users = await self._users.all_users()
        children: list[BatchReport] = []

        async def _check(user: User) -> ItemStatus:
            children.append(await self.check_budget_thresholds(user))
            return ItemStatus.OK

        report = await run_batch("budget check", users, _check, key=lambda u: f"user:{u.id}")
        report.children.extend(children)
        logger.info("Budget check done: users=%s budgets=%s", report.counts(), report.child_counts())
        return report

    async def check_budget_thresholds(self, user: User) -> BatchReport:
        today = self._clock.today()
        active = await self._budgets.active_budgets(user.id, today)
        return await run_batch(
            f"budget check user:{user.id}",
            active,
            lambda budget: self._evaluate_budget(user, budget),
            key=lambda b: f"budget:{b.id}",
        )

    async def _evaluate_budget(self, user: User, budget: Budget) -> ItemStatus:
        window = resolve_window(
            budget.period,
            self._clock.now(),
            start_date=budget.start_date,
            end_date=budget.end_date,
            fallback_days=self._fallback_days,
        )
        net = await self._aggregator.current_spending(user.accounts, budget.category, window)
        # Expenses are stored negative; the evaluator expects spending as a positive amount
        spending = ZERO - net
        result = evaluate_threshold(spending, budget.amount, budget.warning_threshold)
        if result.skipped:
            logger.debug("Skipping budget %s: amount=%s threshold=%s", budget.id, budget.amount, budget.warning_threshold)
            return ItemStatus.SKIPPED
        if result.should_warn and result.ratio is not None:
            logger.info("Budget %s for user %s at %s of amount", budget.id, user.id, result.ratio)
            await self._dispatcher.dispatch_warning(BudgetWarning.for_budget(user, budget, spending, result.ratio))
        return ItemStatus.OK
