from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, Dict, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ItemStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ItemOutcome:
    key: str
    status: ItemStatus
    error: Optional[str] = None


@dataclass
class BatchReport:
    """
    Outcome of one pass over a list of independent items.
    `children` holds the reports of nested passes (e.g. budgets of each user).
    """

    label: str
    outcomes: List[ItemOutcome] = field(default_factory=list)
    children: List["BatchReport"] = field(default_factory=list)

    def counts(self, recursive: bool = False) -> Dict[str, int]:
        counter = Counter({status.value: 0 for status in ItemStatus})
        counter.update(outcome.status.value for outcome in self.outcomes)
        if recursive:
            for child in self.children:
                counter.update(child.counts(recursive=True))
        return dict(counter)

    def child_counts(self) -> Dict[str, int]:
        counter = Counter({status.value: 0 for status in ItemStatus})
        for child in self.children:
            counter.update(child.counts(recursive=True))
        return dict(counter)

    def by_status(self, status: ItemStatus) -> List[ItemOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def failed(self) -> List[ItemOutcome]:
        return self.by_status(ItemStatus.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed and all(child.ok for child in self.children)


async def run_batch(
    label: str,
    items: Iterable[T],
    handler: Callable[[T], Awaitable[Optional[ItemStatus]]],
    key: Callable[[T], str] = str,
) -> BatchReport:
    """
    Run `handler` over every item, one at a time.
    An exception from one item is logged and recorded as FAILED; the loop
    always moves on to the next item. A handler returning None counts as OK.
    """
    report = BatchReport(label=label)
    for item in items:
        item_key = key(item)
        try:
            status = await handler(item)
        except Exception as e:
            logger.exception("%s: %s failed", label, item_key)
            report.outcomes.append(ItemOutcome(item_key, ItemStatus.FAILED, f"{type(e).__name__}: {e}"))
            continue
        report.outcomes.append(ItemOutcome(item_key, status or ItemStatus.OK))
    counts = report.counts()
    if counts[ItemStatus.FAILED.value]:
        logger.warning("%s finished with failures: %s", label, counts)
    else:
        logger.debug("%s finished: %s", label, counts)
    return report
