from decimal import Decimal

from bills.income import remaining_income


def test_no_unpaid_bills_returns_full_income():
    assert remaining_income(Decimal("5000"), None) == Decimal("5000")


def test_no_income_is_zero():
    assert remaining_income(None, Decimal("1200")) == Decimal("0")


def test_unpaid_bills_are_subtracted():
    assert remaining_income(Decimal("5000.00"), Decimal("1234.56")) == Decimal("3765.44")


def test_remaining_income_can_go_negative():
    assert remaining_income(Decimal("1000"), Decimal("1500")) == Decimal("-500")
