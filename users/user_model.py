from __future__ import annotations

import uuid
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from transactions.transaction_model import Account


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    email: str
    first_name: str = ""
    last_name: str = ""
    monthly_income: Optional[Decimal] = None
    payday_day: Optional[int] = Field(default=None, ge=1, le=31)
    accounts: List[Account] = Field(default_factory=list)

    @property
    def account_ids(self) -> List[uuid.UUID]:
        return [a.id for a in self.accounts]
