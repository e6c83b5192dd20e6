from __future__ import annotations

import logging
from typing import Iterable, List, Type, TypeVar

from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def validate_rows(model: Type[M], rows: Iterable[object], kind: str) -> List[M]:
    """
    Convert ORM rows to read models, leaving out rows that fail validation.

    The database does not enforce every constraint the models carry (day-of-month
    ranges, known budget periods), so one corrupt row must not hide the others.
    """
    items: List[M] = []
    for row in rows:
        try:
            items.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning("Skipping %s %s with invalid data: %s", kind, getattr(row, "id", None), e.errors(include_input=False))
    return items
