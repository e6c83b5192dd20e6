from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Category(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: uuid.UUID
    name: str
    description: Optional[str] = None


class Account(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: uuid.UUID
    owner_id: uuid.UUID
    name: str = ""


class Transaction(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: uuid.UUID
    account_id: uuid.UUID
    category_id: Optional[uuid.UUID] = None
    # negative = expense, positive = income/credit
    amount: Decimal
    date: datetime
    description: str = ""
