"""Closable FIFO shared by the target generator and the fetch workers."""

from __future__ import annotations

import asyncio
from typing import Any, AsyncIterator

from foier.constants import STOP_TARGETS
from foier.exceptions import QueueClosedError
from foier.models import Target


class TargetQueue:
    """
    A small wrapper around an asyncio.Queue with an explicit close.

    One producer puts targets and then closes the queue exactly once. Any
    number of consumers read until the queue is both closed and empty. Closing
    enqueues a single sentinel; every consumer that reads it puts it back so
    the next consumer sees it too.
    """

    def __init__(self, maxsize: int = 0) -> None:
        """Create a new queue.

        Parameters
        ----------
        maxsize:
            Capacity bound. ``0`` (default) means unbounded; otherwise
            :meth:`put` waits while the queue is full.
        """
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        """Return ``True`` once :meth:`close` has been called."""
        return self._closed

    def qsize(self) -> int:
        """Return the number of pending targets."""
        n = self._queue.qsize()
        return n - 1 if self._closed and n else n

    async def put(self, target: Target) -> None:
        """Enqueue a target, waiting for room if the queue is bounded."""
        if self._closed:
            raise QueueClosedError("put() on a closed target queue")
        await self._queue.put(target)

    async def close(self) -> None:
        """Signal that no more targets will be enqueued."""
        if self._closed:
            raise QueueClosedError("target queue already closed")
        self._closed = True
        await self._queue.put(STOP_TARGETS)

    async def get(self) -> Target | None:
        """Return the next target, or ``None`` once closed and drained."""
        item = await self._queue.get()
        if item is STOP_TARGETS:
            # a slot was just freed, so this never blocks on a bounded queue
            self._queue.put_nowait(STOP_TARGETS)
            return None
        return item

    async def __aiter__(self) -> AsyncIterator[Target]:
        while True:
            target = await self.get()
            if target is None:
                return
            yield target
