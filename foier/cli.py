"""Command line interface for running a scrape."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from foier.config import initialize_environment
from foier.constants import (
    DEFAULT_END,
    DEFAULT_START,
    DEFAULT_STEP,
    DEFAULT_URI,
    DEFAULT_WORKERS,
)
from foier.exceptions import ConfigError
from foier.logging_setup import configure_logging
from foier.pipeline import run_scrape

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the command line interface."""
    p = argparse.ArgumentParser(
        description="Download a numeric range of documents from one URL pattern"
    )
    p.add_argument("-d", "--debug", action="store_true", default=None,
                   help="Use debug mode")
    p.add_argument("-u", "--uri", default=None,
                   help=f"URI to use for fetching (default: {DEFAULT_URI})")
    p.add_argument("-s", "--start", type=int, default=None,
                   help=f"Starting ID (default: {DEFAULT_START})")
    p.add_argument("-e", "--end", type=int, default=None,
                   help=f"End ID, inclusive (default: {DEFAULT_END})")
    p.add_argument("-i", "--increment", dest="step", type=int, default=None,
                   help=f"Increment between steps (default: {DEFAULT_STEP})")
    p.add_argument("--suffix", default=None,
                   help="Suffix of the file you're downloading")
    p.add_argument("-w", "--workers", type=int, default=None,
                   help=f"How many workers to use (default: {DEFAULT_WORKERS})")
    p.add_argument("-o", "--dest-dir", type=Path, default=None,
                   help="Directory the files are written to (default: data)")
    p.add_argument("--timeout", dest="req_timeout", type=float, default=None,
                   help="Per-request timeout in seconds (default: none)")
    p.add_argument("--chunk-size", type=int, default=None,
                   help="Bytes read from the network per chunk")
    p.add_argument("--queue-maxsize", type=int, default=None,
                   help="Bound on pending targets (default: 0, unbounded)")
    p.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ERROR). Defaults to $LOG_LEVEL or INFO.",
    )
    return p


async def main(argv: Sequence[str] | None = None) -> None:
    """Run a scrape using command line arguments."""
    parser = build_parser()
    args = parser.parse_args(argv)

    overrides = vars(args)
    log_level = overrides.pop("log_level")
    try:
        config = await initialize_environment(**overrides)
    except ConfigError as exc:
        parser.error(str(exc))

    configure_logging(log_level, debug=config.debug)
    logger.debug("Logging level: %s",
                 logging.getLevelName(logging.getLogger().level))

    # the run itself assumes the output directory exists
    config.dest_dir.mkdir(parents=True, exist_ok=True)

    await run_scrape(config)


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.warning("Interrupted; partial results left in place")
        sys.exit(130)
