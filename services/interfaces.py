from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from alerts.notification_model import BudgetWarning
    from bills.bill_model import Bill, BillCreate
    from budgets.budget_model import Budget
    from transactions.transaction_model import Category
    from users.user_model import User


class TransactionStore(Protocol):
    async def sum_amount(
        self,
        account_ids: Sequence[uuid.UUID],
        category_id: uuid.UUID,
        start: datetime,
        end: datetime,
    ) -> Optional[Decimal]:
        """Signed sum of matching transactions, None when no rows match."""
        ...


class UserDirectory(Protocol):
    async def all_users(self) -> List["User"]: ...

    async def get_user(self, user_id: uuid.UUID) -> Optional["User"]: ...


class BudgetStore(Protocol):
    async def active_budgets(self, user_id: uuid.UUID, today: date) -> List["Budget"]: ...


class BillStore(Protocol):
    async def create_bill(self, user_id: uuid.UUID, data: "BillCreate") -> "Bill": ...

    async def update_bill(self, bill_id: uuid.UUID, data: "BillCreate") -> None: ...

    async def delete_bill(self, bill_id: uuid.UUID) -> None: ...

    async def bills_owned_by(self, user_id: uuid.UUID) -> List["Bill"]: ...

    async def bills_in_category(self, user_id: uuid.UUID, category_id: uuid.UUID) -> List["Bill"]: ...

    async def paid_bills(self, user_id: uuid.UUID) -> List["Bill"]: ...

    async def get_bill(self, bill_id: uuid.UUID) -> Optional["Bill"]: ...

    async def set_paid(self, bill_id: uuid.UUID, is_paid: bool) -> None: ...

    async def unpaid_total(self, user_id: uuid.UUID) -> Optional[Decimal]: ...

    async def categories(self) -> List["Category"]: ...


class NotificationDispatcher(Protocol):
    async def dispatch_warning(self, warning: "BudgetWarning") -> None: ...
