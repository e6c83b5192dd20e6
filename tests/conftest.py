import os
import sys


def pytest_sessionstart(session):
    # Ensure project root is on sys.path so `budgets`, `bills` etc. resolve
    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


# --- Test utilities: in-memory collaborators ---
import uuid
from datetime import datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio


class FakeTransactionStore:
    def __init__(self) -> None:
        self.transactions = []
        self.calls = []
        self.fail_for_category = set()

    def add(self, account_id, category_id, amount, when):
        self.transactions.append({"account_id": account_id, "category_id": category_id, "amount": Decimal(str(amount)), "date": when})

    async def sum_amount(self, account_ids, category_id, start, end):
        self.calls.append((list(account_ids), category_id, start, end))
        if category_id in self.fail_for_category:
            raise RuntimeError("store unavailable")
        rows = [
            t for t in self.transactions
            if t["account_id"] in account_ids and t["category_id"] == category_id and start <= t["date"] <= end
        ]
        if not rows:
            # SQL SUM over no rows
            return None
        return sum((t["amount"] for t in rows), Decimal("0"))


class FakeUserDirectory:
    def __init__(self, users=None) -> None:
        self.users = {u.id: u for u in users or []}

    async def all_users(self):
        return list(self.users.values())

    async def get_user(self, user_id):
        return self.users.get(user_id)


class FakeBudgetStore:
    def __init__(self) -> None:
        self.budgets = []
        self.fail_for_user = set()

    async def active_budgets(self, user_id, today):
        if user_id in self.fail_for_user:
            raise RuntimeError("budget query failed")
        return [b for b in self.budgets if b.user_id == user_id and b.is_active_on(today)]


class FakeBillStore:
    def __init__(self, categories=None) -> None:
        self.bills = {}
        self._categories = list(categories or [])
        self.fail_on_set = set()
        self.writes = []

    def add(self, bill):
        self.bills[bill.id] = bill
        return bill

    def _category(self, category_id):
        return next((c for c in self._categories if c.id == category_id), None)

    async def create_bill(self, user_id, data):
        from bills.bill_model import Bill

        fields = data.model_dump(exclude={"category_id"})
        bill = Bill(id=uuid.uuid4(), user_id=user_id, category=self._category(data.category_id), **fields)
        return self.add(bill).model_copy()

    async def update_bill(self, bill_id, data):
        fields = data.model_dump(exclude={"category_id"})
        fields["category"] = self._category(data.category_id)
        self.bills[bill_id] = self.bills[bill_id].model_copy(update=fields)

    async def delete_bill(self, bill_id):
        self.bills.pop(bill_id, None)

    async def bills_owned_by(self, user_id):
        return [b.model_copy() for b in self.bills.values() if b.user_id == user_id]

    async def bills_in_category(self, user_id, category_id):
        return [
            b.model_copy() for b in self.bills.values()
            if b.user_id == user_id and b.category is not None and b.category.id == category_id
        ]

    async def paid_bills(self, user_id):
        return [b.model_copy() for b in self.bills.values() if b.user_id == user_id and b.is_paid]

    async def get_bill(self, bill_id):
        bill = self.bills.get(bill_id)
        return bill.model_copy() if bill is not None else None

    async def set_paid(self, bill_id, is_paid):
        if bill_id in self.fail_on_set:
            raise RuntimeError("write failed")
        self.writes.append((bill_id, is_paid))
        self.bills[bill_id] = self.bills[bill_id].model_copy(update={"is_paid": is_paid})

    async def unpaid_total(self, user_id):
        unpaid = [b.amount for b in self.bills.values() if b.user_id == user_id and not b.is_paid]
        if not unpaid:
            return None
        return sum(unpaid, Decimal("0"))

    async def categories(self):
        return list(self._categories)


class FakeResult:
    """Enough of a SQLAlchemy Result for the repositories."""

    def __init__(self, rows=None, scalar=None) -> None:
        self._rows = list(rows or [])
        self._scalar = scalar

    def unique(self):
        return self

    def scalars(self):
        return self

    def all(self):
        return list(self._rows)

    def first(self):
        return self._rows[0] if self._rows else None

    def scalar(self):
        return self._scalar


class FakeSession:
    def __init__(self, factory) -> None:
        self._factory = factory
        self.commits = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def execute(self, stmt):
        self._factory.statements.append(stmt)
        return self._factory.results.pop(0) if self._factory.results else FakeResult()

    def add(self, obj):
        self._factory.added.append(obj)

    async def commit(self):
        self.commits += 1


class FakeSessionFactory:
    """Stands in for async_sessionmaker; queued results are returned in order."""

    def __init__(self, *results) -> None:
        self.results = list(results)
        self.statements = []
        self.added = []
        self.sessions = []

    def __call__(self):
        session = FakeSession(self)
        self.sessions.append(session)
        return session


class FakeDispatcher:
    def __init__(self) -> None:
        self.warnings = []

    async def dispatch_warning(self, warning):
        self.warnings.append(warning)


class FakeNotificationRepo:
    def __init__(self) -> None:
        self.rows = []

    async def create_notification(self, user_id, budget_id, message, sent_at):
        self.rows.append({"user_id": user_id, "budget_id": budget_id, "message": message, "sent_at": sent_at})
        return uuid.uuid4()


# 2024-05-15 is a Wednesday
NOW = datetime(2024, 5, 15, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def clock():
    from services.clock import FixedClock

    return FixedClock(NOW)


@pytest.fixture
def groceries():
    from transactions.transaction_model import Category

    return Category(id=uuid.uuid4(), name="Groceries")


@pytest.fixture
def user():
    from transactions.transaction_model import Account
    from users.user_model import User

    user_id = uuid.uuid4()
    return User(
        id=user_id,
        email="jay@example.com",
        first_name="Jay",
        last_name="Doe",
        monthly_income=Decimal("5000.00"),
        accounts=[Account(id=uuid.uuid4(), owner_id=user_id, name="Checking")],
    )


@pytest.fixture
def make_budget(user, groceries):
    from budgets.budget_model import Budget

    def _make(**overrides):
        data = {
            "id": uuid.uuid4(),
            "user_id": user.id,
            "name": "Food",
            "amount": Decimal("100.00"),
            "category": groceries,
            "period": "MONTHLY",
            "start_date": NOW.date().replace(day=1),
            "end_date": None,
            "warning_threshold": Decimal("80"),
        }
        data.update(overrides)
        return Budget(**data)

    return _make


@pytest.fixture
def make_bill(user):
    from bills.bill_model import Bill

    def _make(**overrides):
        data = {
            "id": uuid.uuid4(),
            "user_id": user.id,
            "name": "Rent",
            "amount": Decimal("1200.00"),
            "due_day": 1,
            "is_paid": False,
            "is_recurring": True,
        }
        data.update(overrides)
        return Bill(**data)

    return _make


@pytest_asyncio.fixture
async def transaction_store():
    yield FakeTransactionStore()


@pytest_asyncio.fixture
async def budget_store():
    yield FakeBudgetStore()


@pytest_asyncio.fixture
async def bill_store(groceries):
    yield FakeBillStore(categories=[groceries])


@pytest.fixture
def dispatcher():
    return FakeDispatcher()
