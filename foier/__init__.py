"""Public package exports for the :mod:`foier` library."""

from __future__ import annotations

__all__ = [
    "pipeline",
    "config",
    "generator",
    "work_queue",
    "workers",
    "clients",
    "telemetry",
    "constants",
    "exceptions",
    "models",
    "logging_setup",
]
