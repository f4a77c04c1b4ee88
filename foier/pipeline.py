"""Top level orchestration of one scrape run."""

from __future__ import annotations

import asyncio
import logging

import httpx

from foier.clients.http import FetchClient
from foier.config import Config, initialize_environment
from foier.generator import produce_targets
from foier.telemetry.metrics import Metrics
from foier.work_queue import TargetQueue
from foier.workers.fetch import fetch_worker

logger = logging.getLogger(__name__)


async def run_scrape(
    config: Config | None = None,
    *,
    log: logging.Logger | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Fetch every target of the configured range and save it to disk.

    Returns once the generator has closed the queue and every worker has
    drained it and exited. Each worker closes its last file before it
    finishes, so all output is on disk when this returns. Per-target failures
    only show up in the log.

    Parameters
    ----------
    config:
        Optional :class:`Config` instance. If ``None``, environment variables
        are loaded via :func:`initialize_environment`.
    log:
        Logger passed down to the generator and the workers. Defaults to this
        module's logger.
    transport:
        Optional httpx transport, mainly for tests.
    """
    if config is None:
        config = await initialize_environment()
    log = log or logger
    metrics = Metrics()

    log.info(
        "Scraping IDs %d..%d step %d from %s with %d workers into %s",
        config.start, config.end, config.step, config.uri,
        config.workers, config.dest_dir,
    )

    # ─── queue ───────────────────────────────────────────────────────────
    queue = TargetQueue(maxsize=config.queue_maxsize)

    async with FetchClient(
        request_timeout=config.req_timeout,
        max_connections=config.workers,
        transport=transport,
    ) as client:

        producer = asyncio.create_task(
            produce_targets(queue, config, log),
            name="target-generator",
        )

        worker_tasks = [
            asyncio.create_task(
                fetch_worker(
                    i, queue, client, config.dest_dir, config.chunk_size,
                    metrics, log,
                ),
                name=f"fetcher-{i}",
            )
            for i in range(config.workers)
        ]

        # ─── join ────────────────────────────────────────────────────
        log.debug("Waiting on the workers to finish their jobs")
        handled = await asyncio.gather(*worker_tasks)
        produced = await producer

    log.info(
        "Completed. Targets: %d  Saved: %d  Failures: %d",
        produced, metrics.targets_saved, metrics.failed,
    )
    log.debug("Targets handled per worker: %s", handled)
    txt, _ = metrics.summary()
    log.info("\n%s", txt)
