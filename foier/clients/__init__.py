from __future__ import annotations

from .http import FetchClient

__all__ = ["FetchClient"]
