from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from budgets.budget_model import Budget
from users.user_model import User


@dataclass(frozen=True)
class BudgetWarning:
    user: User
    budget: Budget
    current_spending: Decimal
    ratio: Decimal
    budget_name: str
    period_label: str
    category_name: str

    @classmethod
    def for_budget(cls, user: User, budget: Budget, current_spending: Decimal, ratio: Decimal) -> "BudgetWarning":
        return cls(
            user=user,
            budget=budget,
            current_spending=current_spending,
            ratio=ratio,
            budget_name=budget.name,
            period_label=budget.period.label,
            category_name=budget.category_name,
        )

    def render_message(self) -> str:
        return (
            f"Warning: You've used {self.ratio * 100:.2f}% "
            f"({self.current_spending:.2f} of {self.budget.amount:.2f}) "
            f"of your {self.period_label} budget for {self.category_name}."
        )

    @property
    def subject(self) -> str:
        return f"Budget Alert: {self.budget_name}"
