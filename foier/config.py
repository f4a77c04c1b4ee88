"""Environment-based configuration loading for a scrape run."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from foier.constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DEST_DIR,
    DEFAULT_END,
    DEFAULT_START,
    DEFAULT_STEP,
    DEFAULT_URI,
    DEFAULT_WORKERS,
)
from foier.exceptions import ConfigError


@dataclass(frozen=True)
class Config:
    """Settings for one run over an ID range."""
    # Targets
    uri: str = DEFAULT_URI
    start: int = DEFAULT_START
    end: int = DEFAULT_END
    step: int = DEFAULT_STEP
    suffix: str = ""

    # Workers
    workers: int = DEFAULT_WORKERS
    queue_maxsize: int = 0  # 0 == unbounded

    # HTTP / output
    dest_dir: Path = field(default_factory=lambda: Path(DEFAULT_DEST_DIR))
    req_timeout: float | None = None  # None == wait forever
    chunk_size: int = DEFAULT_CHUNK_SIZE

    debug: bool = False

    def __post_init__(self) -> None:
        if self.step <= 0:
            raise ConfigError(f"step must be > 0, got {self.step}")
        if self.workers <= 0:
            raise ConfigError(f"workers must be > 0, got {self.workers}")
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be > 0, got {self.chunk_size}")
        if self.queue_maxsize < 0:
            raise ConfigError(
                f"queue_maxsize must be >= 0, got {self.queue_maxsize}")
        if self.req_timeout is not None and self.req_timeout <= 0:
            raise ConfigError(
                f"req_timeout must be > 0 when set, got {self.req_timeout}")
        if not isinstance(self.dest_dir, Path):
            object.__setattr__(self, "dest_dir", Path(self.dest_dir))


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _float_env(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


async def initialize_environment(**overrides: Any) -> Config:
    """Load environment variables and build a :class:`Config` instance.

    Every field can be set through a ``FOIER_*`` variable (a ``.env`` file in
    the working directory is honoured). Keyword ``overrides`` that are not
    ``None`` take precedence over the environment, which is how the command
    line flags are applied.

    Raises
    ------
    ConfigError
        If a variable cannot be parsed or the resulting values are invalid.
    """
    load_dotenv()

    values: dict[str, Any] = dict(
        uri=os.getenv("FOIER_URI", DEFAULT_URI),
        start=_int_env("FOIER_START", DEFAULT_START),
        end=_int_env("FOIER_END", DEFAULT_END),
        step=_int_env("FOIER_STEP", DEFAULT_STEP),
        suffix=os.getenv("FOIER_SUFFIX", ""),
        workers=_int_env("FOIER_WORKERS", DEFAULT_WORKERS),
        queue_maxsize=_int_env("FOIER_QUEUE_MAXSIZE", 0),
        dest_dir=Path(os.getenv("FOIER_DEST_DIR", DEFAULT_DEST_DIR)),
        req_timeout=_float_env("FOIER_REQ_TIMEOUT"),
        chunk_size=_int_env("FOIER_CHUNK_SIZE", DEFAULT_CHUNK_SIZE),
        debug=bool(_int_env("FOIER_DEBUG", 0)),
    )

    unknown = set(overrides) - set(values)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")
    values.update({k: v for k, v in overrides.items() if v is not None})

    return Config(**values)
