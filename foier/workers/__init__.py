"""Async worker implementations used by the scrape pipeline."""

from __future__ import annotations

from .fetch import fetch_target, fetch_worker

__all__ = [
    "fetch_target",
    "fetch_worker",
]
