from __future__ import annotations


class FinManError(Exception):
    pass


class UserNotFoundError(FinManError):
    def __init__(self, user_id) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class BillNotFoundError(FinManError):
    def __init__(self, bill_id) -> None:
        super().__init__(f"Bill not found: {bill_id}")
        self.bill_id = bill_id


class BudgetNotFoundError(FinManError):
    def __init__(self, budget_id) -> None:
        super().__init__(f"Budget not found with id: {budget_id}")
        self.budget_id = budget_id
