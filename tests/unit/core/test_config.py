"""Unit tests for core config parsing."""

from __future__ import annotations

import os

import pytest

from core.config import LogrouteConfig
from core.errors import LogrouteConfigError


def test_from_env_uses_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fall back to the built-in directories and gzip suffix."""
    for name in (
        "LOGROUTE_INPUT_DIR",
        "LOGROUTE_OUTPUT_DIR",
        "LOGROUTE_INPUT_SUFFIX",
        "LOGROUTE_MAX_WORKERS",
        "LOGROUTE_COMPRESSION_LEVEL",
        "LOGROUTE_ABORT_ON_WRITE_ERROR",
    ):
        monkeypatch.delenv(name, raising=False)

    config = LogrouteConfig.from_env()

    assert (
        config.input_dir.name == "dev"
        and config.output_dir.name == "corrected"
        and config.input_suffix == ".gz"
        and config.max_workers is None
        and config.compression_level == 6
        and config.abort_on_write_error is False
    )


def test_from_env_reads_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve every setting from environment."""
    monkeypatch.setenv("LOGROUTE_INPUT_DIR", "./.tmp-in")
    monkeypatch.setenv("LOGROUTE_OUTPUT_DIR", "./.tmp-out")
    monkeypatch.setenv("LOGROUTE_INPUT_SUFFIX", ".ndjson.gz")
    monkeypatch.setenv("LOGROUTE_MAX_WORKERS", "3")
    monkeypatch.setenv("LOGROUTE_COMPRESSION_LEVEL", "1")
    monkeypatch.setenv("LOGROUTE_ABORT_ON_WRITE_ERROR", "yes")

    config = LogrouteConfig.from_env()

    assert (
        config.input_dir.name == ".tmp-in"
        and config.output_dir.name == ".tmp-out"
        and config.input_suffix == ".ndjson.gz"
        and config.max_workers == 3
        and config.compression_level == 1
        and config.abort_on_write_error is True
    )


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("LOGROUTE_MAX_WORKERS", "zero"),
        ("LOGROUTE_MAX_WORKERS", "0"),
        ("LOGROUTE_COMPRESSION_LEVEL", "10"),
        ("LOGROUTE_COMPRESSION_LEVEL", "fast"),
        ("LOGROUTE_ABORT_ON_WRITE_ERROR", "maybe"),
        ("LOGROUTE_INPUT_SUFFIX", "   "),
    ],
)
def test_from_env_raises_for_invalid_values(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    """Config should reject malformed environment values."""
    monkeypatch.setenv(name, value)

    with pytest.raises(LogrouteConfigError):
        LogrouteConfig.from_env()

    assert os.getenv(name) == value
