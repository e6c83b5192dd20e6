from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from transactions.transaction_model import Category


class BudgetPeriod(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    CUSTOM = "CUSTOM"

    @property
    def label(self) -> str:
        return self.value.lower()


def _normalize_period(value):
    # Stored rows may carry lower-case or padded values; anything else is rejected
    if isinstance(value, str):
        return value.strip().upper()
    return value


class Budget(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    amount: Decimal
    category: Optional[Category] = None
    period: BudgetPeriod
    start_date: date
    end_date: Optional[date] = None
    # Percentage, 80 means warn at 80% of amount
    warning_threshold: Optional[Decimal] = None

    @field_validator("period", mode="before")
    @classmethod
    def normalize_period(cls, value):
        return _normalize_period(value)

    @property
    def category_name(self) -> str:
        return self.category.name if self.category is not None else "all categories"

    def is_active_on(self, day: date) -> bool:
        if self.start_date > day:
            return False
        return self.end_date is None or day <= self.end_date


class BudgetCreate(BaseModel):
    """Validated input for a new budget; unknown periods are rejected here."""

    name: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    category_id: Optional[uuid.UUID] = None
    period: BudgetPeriod
    start_date: date
    end_date: Optional[date] = None
    warning_threshold: Decimal = Field(default=Decimal("80"), ge=0, le=100)

    @field_validator("period", mode="before")
    @classmethod
    def normalize_period(cls, value):
        return _normalize_period(value)

    @model_validator(mode="after")
    def check_dates(self) -> "BudgetCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self
