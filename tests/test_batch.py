import logging

import pytest

from services.batch import ItemStatus, run_batch


@pytest.mark.asyncio
async def test_failures_are_recorded_and_loop_continues(caplog):
    seen = []

    async def handler(n):
        seen.append(n)
        if n == 2:
            raise ValueError("bad item")
        if n == 3:
            return ItemStatus.SKIPPED
        return None

    with caplog.at_level(logging.ERROR, logger="services.batch"):
        report = await run_batch("numbers", [1, 2, 3, 4], handler)

    assert seen == [1, 2, 3, 4]
    assert [o.status for o in report.outcomes] == [ItemStatus.OK, ItemStatus.FAILED, ItemStatus.SKIPPED, ItemStatus.OK]
    assert report.failed[0].key == "2"
    assert report.failed[0].error == "ValueError: bad item"
    assert "numbers: 2 failed" in caplog.text
    assert report.ok is False


@pytest.mark.asyncio
async def test_empty_batch():
    async def handler(_):
        raise AssertionError("not called")

    report = await run_batch("nothing", [], handler)

    assert report.outcomes == []
    assert report.counts() == {"ok": 0, "skipped": 0, "failed": 0}
    assert report.ok is True


@pytest.mark.asyncio
async def test_recursive_counts_include_children():
    async def ok(_):
        return ItemStatus.OK

    async def boom(_):
        raise RuntimeError("x")

    parent = await run_batch("parent", ["a"], ok)
    parent.children.append(await run_batch("child", ["b", "c"], boom))

    assert parent.counts() == {"ok": 1, "skipped": 0, "failed": 0}
    assert parent.counts(recursive=True) == {"ok": 1, "skipped": 0, "failed": 2}
    assert parent.child_counts() == {"ok": 0, "skipped": 0, "failed": 2}
    assert parent.ok is False
