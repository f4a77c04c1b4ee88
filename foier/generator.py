"""Builds the ordered sequence of download targets for an ID range."""

from __future__ import annotations

import logging
from typing import Iterator

from foier.config import Config
from foier.models import Target
from foier.work_queue import TargetQueue

logger = logging.getLogger(__name__)


def iter_targets(
    uri: str, start: int, end: int, step: int, suffix: str = ""
) -> Iterator[Target]:
    """Yield one :class:`Target` per ID from ``start`` to ``end`` inclusive.

    IDs increase strictly by ``step``. Nothing is yielded when
    ``start > end``. ``step`` must be positive.
    """
    for i in range(start, end + 1, step):
        name = f"{i}{suffix}"
        yield Target(uri=uri + name, name=name, id=i)


async def produce_targets(
    queue: TargetQueue,
    config: Config,
    log: logging.Logger | None = None,
) -> int:
    """Enqueue every target of ``config``'s range, then close ``queue``.

    Parameters
    ----------
    queue:
        Queue shared with the fetch workers. It is closed exactly once, after
        the last target has been enqueued.
    config:
        Run configuration supplying the URI template and the ID range.
    log:
        Optional logger; defaults to this module's logger.

    Returns
    -------
    int
        Number of targets enqueued.
    """
    log = log or logger
    count = 0
    for target in iter_targets(
        config.uri, config.start, config.end, config.step, config.suffix
    ):
        log.debug("Sending: %s", target.uri)
        await queue.put(target)
        count += 1

    log.debug("Closing the target queue after %d targets", count)
    await queue.close()
    return count
