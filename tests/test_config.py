"""Configuration validation and environment loading."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from foier.config import Config, initialize_environment
from foier.constants import DEFAULT_URI
from foier.exceptions import ConfigError

ENV_KEYS = [
    "FOIER_URI", "FOIER_START", "FOIER_END", "FOIER_STEP", "FOIER_SUFFIX",
    "FOIER_WORKERS", "FOIER_DEST_DIR", "FOIER_REQ_TIMEOUT", "FOIER_CHUNK_SIZE",
    "FOIER_QUEUE_MAXSIZE", "FOIER_DEBUG",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_match_original_tool() -> None:
    config = asyncio.run(initialize_environment())
    assert config.uri == DEFAULT_URI
    assert (config.start, config.end, config.step) == (0, 7000, 1)
    assert config.suffix == ""
    assert config.workers == 5
    assert config.dest_dir == Path("data")
    assert config.req_timeout is None
    assert config.queue_maxsize == 0
    assert config.debug is False


def test_environment_values_are_parsed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOIER_URI", "https://example.test/?id=")
    monkeypatch.setenv("FOIER_START", "10")
    monkeypatch.setenv("FOIER_END", "20")
    monkeypatch.setenv("FOIER_STEP", "2")
    monkeypatch.setenv("FOIER_WORKERS", "3")
    monkeypatch.setenv("FOIER_REQ_TIMEOUT", "7.5")
    monkeypatch.setenv("FOIER_DEBUG", "1")

    config = asyncio.run(initialize_environment())

    assert config.uri == "https://example.test/?id="
    assert (config.start, config.end, config.step) == (10, 20, 2)
    assert config.workers == 3
    assert config.req_timeout == 7.5
    assert config.debug is True


def test_overrides_win_and_none_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOIER_WORKERS", "3")
    monkeypatch.setenv("FOIER_SUFFIX", ".pdf")

    config = asyncio.run(initialize_environment(workers=9, suffix=None))

    assert config.workers == 9
    assert config.suffix == ".pdf"


def test_unknown_override_is_rejected() -> None:
    with pytest.raises(ConfigError, match="Unknown configuration keys"):
        asyncio.run(initialize_environment(retries=3))


def test_bad_integer_in_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FOIER_END", "lots")
    with pytest.raises(ConfigError, match="FOIER_END"):
        asyncio.run(initialize_environment())


@pytest.mark.parametrize(
    "kwargs",
    [
        {"step": 0},
        {"step": -1},
        {"workers": 0},
        {"chunk_size": 0},
        {"queue_maxsize": -1},
        {"req_timeout": 0},
    ],
)
def test_invalid_values_raise(kwargs: dict) -> None:
    with pytest.raises(ConfigError):
        Config(**kwargs)


def test_start_after_end_is_allowed() -> None:
    config = Config(start=5, end=1)
    assert config.start > config.end


def test_dest_dir_string_is_coerced() -> None:
    assert Config(dest_dir="out").dest_dir == Path("out")  # type: ignore[arg-type]


def test_config_is_frozen() -> None:
    config = Config()
    with pytest.raises(AttributeError):
        config.workers = 2  # type: ignore[misc]
