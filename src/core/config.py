"""Runtime configuration model for Logroute.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_INPUT_DIR,
    DEFAULT_INPUT_SUFFIX,
    DEFAULT_OUTPUT_DIR,
    MAX_COMPRESSION_LEVEL,
    MIN_COMPRESSION_LEVEL,
)
from core.errors import LogrouteConfigError

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off", ""})


@dataclass(frozen=True)
class LogrouteConfig:
    """Validated runtime configuration.

    Attributes:
        input_dir: Directory scanned (non-recursively) for input files.
        output_dir: Root directory for partitioned output files.
        input_suffix: File name suffix that marks eligible input files.
        max_workers: Worker thread count; CPU count when None.
        compression_level: Gzip level for output files, 0-9.
        abort_on_write_error: Stop the whole job on the first write failure.
    """

    input_dir: Path
    output_dir: Path
    input_suffix: str = DEFAULT_INPUT_SUFFIX
    max_workers: int | None = None
    compression_level: int = DEFAULT_COMPRESSION_LEVEL
    abort_on_write_error: bool = False

    @classmethod
    def from_env(cls) -> "LogrouteConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            LogrouteConfigError: If environment values are invalid.
        """
        input_dir_value = os.getenv("LOGROUTE_INPUT_DIR", str(DEFAULT_INPUT_DIR))
        output_dir_value = os.getenv("LOGROUTE_OUTPUT_DIR", str(DEFAULT_OUTPUT_DIR))
        input_suffix = parse_input_suffix(
            os.getenv("LOGROUTE_INPUT_SUFFIX", DEFAULT_INPUT_SUFFIX), "LOGROUTE_INPUT_SUFFIX"
        )
        max_workers_value = os.getenv("LOGROUTE_MAX_WORKERS")
        max_workers = (
            parse_max_workers(max_workers_value, "LOGROUTE_MAX_WORKERS")
            if max_workers_value
            else None
        )
        compression_level = parse_compression_level(
            os.getenv("LOGROUTE_COMPRESSION_LEVEL", str(DEFAULT_COMPRESSION_LEVEL)),
            "LOGROUTE_COMPRESSION_LEVEL",
        )
        abort_on_write_error = _parse_flag(
            os.getenv("LOGROUTE_ABORT_ON_WRITE_ERROR", "false"),
            "LOGROUTE_ABORT_ON_WRITE_ERROR",
        )
        return cls(
            input_dir=Path(input_dir_value).expanduser().resolve(),
            output_dir=Path(output_dir_value).expanduser().resolve(),
            input_suffix=input_suffix,
            max_workers=max_workers,
            compression_level=compression_level,
            abort_on_write_error=abort_on_write_error,
        )


def parse_input_suffix(raw_value: str, source_name: str) -> str:
    """Validate an input suffix value.

    Args:
        raw_value: Raw suffix text.
        source_name: Variable or option name used in error messages.

    Returns:
        Stripped, non-empty suffix.

    Raises:
        LogrouteConfigError: If suffix is empty.
    """
    suffix = raw_value.strip()
    if not suffix:
        raise LogrouteConfigError(
            f"Invalid {source_name} value: expected a non-empty file name suffix. "
            "Set it to a suffix such as '.gz'."
        )
    return suffix


def parse_max_workers(raw_value: object, source_name: str) -> int:
    """Parse a positive worker count.

    Args:
        raw_value: Raw integer or string value.
        source_name: Variable or option name used in error messages.

    Returns:
        Parsed worker count.

    Raises:
        LogrouteConfigError: If value is not a positive integer.
    """
    worker_count = _parse_int(raw_value, source_name)
    if worker_count < 1:
        raise LogrouteConfigError(
            f"Invalid {source_name} value: expected a positive integer, got {worker_count}. "
            "Set it to 1 or more, or leave it unset to use the CPU count."
        )
    return worker_count


def parse_compression_level(raw_value: object, source_name: str) -> int:
    """Parse a gzip compression level.

    Args:
        raw_value: Raw integer or string value.
        source_name: Variable or option name used in error messages.

    Returns:
        Parsed compression level.

    Raises:
        LogrouteConfigError: If value is outside the gzip level range.
    """
    level = _parse_int(raw_value, source_name)
    if not MIN_COMPRESSION_LEVEL <= level <= MAX_COMPRESSION_LEVEL:
        raise LogrouteConfigError(
            f"Invalid {source_name} value: expected {MIN_COMPRESSION_LEVEL}-"
            f"{MAX_COMPRESSION_LEVEL}, got {level}."
        )
    return level


def _parse_int(raw_value: object, source_name: str) -> int:
    if isinstance(raw_value, bool):
        raise LogrouteConfigError(
            f"Invalid {source_name} value: expected integer, got boolean."
        )
    if isinstance(raw_value, int):
        return raw_value
    try:
        return int(str(raw_value).strip())
    except ValueError as error:
        raise LogrouteConfigError(
            f"Invalid {source_name} value: expected integer, got '{raw_value}'. "
            f"Set {source_name} to a numeric value."
        ) from error


def _parse_flag(raw_value: str, source_name: str) -> bool:
    normalized_value = raw_value.strip().lower()
    if normalized_value in _TRUE_WORDS:
        return True
    if normalized_value in _FALSE_WORDS:
        return False
    raise LogrouteConfigError(
        f"Invalid {source_name} value: expected true/false, got '{raw_value}'."
    )
