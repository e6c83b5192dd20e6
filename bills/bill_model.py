from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from transactions.transaction_model import Category


class Bill(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    name: str
    amount: Decimal
    # Day of month; not checked against the length of any particular month
    due_day: int = Field(ge=1, le=31)
    is_paid: bool = False
    is_recurring: bool = True
    category: Optional[Category] = None


class BillCreate(BaseModel):
    """Validated bill fields; an update replaces every field with these."""

    name: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    due_day: int = Field(ge=1, le=31)
    is_paid: bool = False
    is_recurring: bool = True
    category_id: Optional[uuid.UUID] = None
