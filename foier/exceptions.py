"""
Custom exceptions raised by foier.
"""

from __future__ import annotations


class FoierError(Exception):
    """Base exception for all application-specific errors."""


class ConfigError(FoierError, ValueError):
    """Raised when a run configuration is invalid."""


class QueueClosedError(FoierError, RuntimeError):
    """Raised when a closed target queue is written to or closed again."""
