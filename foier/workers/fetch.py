"""Worker that downloads targets and writes each response body to disk."""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from time import perf_counter

import aiofiles
import httpx

from foier.clients.http import FetchClient
from foier.models import Target
from foier.telemetry.metrics import Metrics
from foier.work_queue import TargetQueue

logger = logging.getLogger(__name__)


async def fetch_target(
    target: Target,
    client: FetchClient,
    dest_dir: Path,
    chunk_size: int,
    metrics: Metrics,
    log: logging.Logger | None = None,
) -> bool:
    """Fetch one target and save its body as ``dest_dir / target.name``.

    Every failure is logged and swallowed; the return value only says whether
    the file was written completely. A body that fails mid-copy leaves the
    partial file in place.
    """
    log = log or logger
    start = perf_counter()
    path = dest_dir / target.name

    async with contextlib.AsyncExitStack() as stack:
        try:
            resp = await stack.enter_async_context(client.get(target.uri, log))
        except httpx.RequestError as exc:
            # intermittent network failures are expected, keep them quiet
            metrics.inc("fetch_failed")
            metrics.record_error(exc)
            log.debug("Error fetching %s: %s", target.uri, exc)
            return False

        try:
            fd = await aiofiles.open(path, "wb")
        except OSError as exc:
            metrics.inc("create_failed")
            metrics.record_error(exc)
            log.error("Error creating file %s: %s", target.name, exc)
            return False

        n_bytes = 0
        try:
            try:
                async for chunk in resp.aiter_bytes(chunk_size):
                    await fd.write(chunk)
                    n_bytes += len(chunk)
            finally:
                await fd.close()
        except (httpx.HTTPError, OSError) as exc:
            metrics.inc("write_failed")
            metrics.add_bytes(n_bytes)
            metrics.record_error(exc)
            log.error(
                "Error writing file %s after %d bytes: %s", target.name, n_bytes, exc
            )
            return False

    duration = perf_counter() - start
    metrics.inc("targets_saved")
    metrics.add_bytes(n_bytes)
    metrics.observe_fetch(duration)
    log.debug(
        "Wrote %d bytes for file %s (HTTP %d, %.3fs)",
        n_bytes, target.name, resp.status_code, duration,
    )
    return True


async def fetch_worker(
    wid: int,
    queue: TargetQueue,
    client: FetchClient,
    dest_dir: Path,
    chunk_size: int,
    metrics: Metrics,
    log: logging.Logger | None = None,
) -> int:
    """
    Drain ``queue`` until it is closed and empty, fetching and saving one
    target at a time. Returns the number of targets this worker handled,
    whatever their outcome. Never raises for a per-target failure, so the
    coordinator can always join it.
    """
    log = log or logger
    handled = 0
    async for target in queue:
        metrics.inc("targets_total")
        try:
            await fetch_target(target, client, dest_dir, chunk_size, metrics, log)
        except Exception as exc:
            metrics.inc("unexpected_failed")
            metrics.record_error(exc)
            log.exception(
                "Worker %d: target %s failed unexpectedly: %s", wid, target.uri, exc
            )
        handled += 1

    log.debug("Worker %d: target queue is closed and empty; returning", wid)
    return handled
