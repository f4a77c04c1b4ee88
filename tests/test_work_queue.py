"""Close semantics of the shared target queue."""

from __future__ import annotations

import asyncio
from typing import List

import pytest

from foier.exceptions import QueueClosedError
from foier.generator import iter_targets
from foier.models import Target
from foier.work_queue import TargetQueue

BASE = "https://example.test/"


def test_put_after_close_raises() -> None:
    async def scenario() -> None:
        queue = TargetQueue()
        await queue.close()
        await queue.put(Target(uri=BASE + "1", name="1", id=1))

    with pytest.raises(QueueClosedError):
        asyncio.run(scenario())


def test_second_close_raises() -> None:
    async def scenario() -> None:
        queue = TargetQueue()
        await queue.close()
        await queue.close()

    with pytest.raises(QueueClosedError):
        asyncio.run(scenario())


def test_every_consumer_sees_the_close() -> None:
    async def scenario() -> List[List[Target]]:
        queue = TargetQueue()

        async def consume() -> List[Target]:
            return [t async for t in queue]

        consumers = [asyncio.create_task(consume()) for _ in range(4)]
        for target in iter_targets(BASE, 0, 9, 1):
            await queue.put(target)
        await queue.close()
        return await asyncio.wait_for(asyncio.gather(*consumers), timeout=5)

    results = asyncio.run(scenario())

    ids = sorted(t.id for batch in results for t in batch)
    assert ids == list(range(10))


def test_bounded_queue_blocks_producer_until_drained() -> None:
    async def scenario() -> List[int]:
        queue = TargetQueue(maxsize=2)
        seen: List[int] = []

        async def produce() -> None:
            for target in iter_targets(BASE, 0, 5, 1):
                await queue.put(target)
                assert queue.qsize() <= 2
            await queue.close()

        async def consume() -> None:
            async for target in queue:
                seen.append(target.id)
                await asyncio.sleep(0)

        await asyncio.wait_for(asyncio.gather(produce(), consume()), timeout=5)
        return seen

    assert asyncio.run(scenario()) == list(range(6))


def test_get_returns_none_once_closed_and_empty() -> None:
    async def scenario() -> tuple:
        queue = TargetQueue()
        await queue.put(Target(uri=BASE + "7", name="7", id=7))
        await queue.close()
        return await queue.get(), await queue.get(), await queue.get()

    first, second, third = asyncio.run(scenario())
    assert first is not None and first.id == 7
    assert second is None
    assert third is None
