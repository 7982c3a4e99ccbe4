"""Timestamp normalization transform.

This module rewrites a record's ``timestamp`` field to epoch milliseconds
taken from the leading comma segment of its ``raw`` field. It fails open:
records with a missing or malformed raw value are left untouched.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
import re
from typing import Protocol

from core.constants import (
    MILLIS_PER_SECOND,
    RAW_FIELD_DELIMITER,
    RAW_FIELD_NAME,
    TIMESTAMP_FIELD_NAME,
)
from core.errors import LogrouteTimestampError
from core.types import RecordDocument, TimestampOutcome

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_SIGNED_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class EpochConverter(Protocol):
    """Callable converting epoch seconds into epoch milliseconds."""

    def __call__(self, epoch_seconds: int) -> int:
        ...


def epoch_seconds_to_millis(epoch_seconds: int) -> int:
    """Convert UTC epoch seconds to epoch milliseconds.

    Args:
        epoch_seconds: Whole seconds since the Unix epoch.

    Returns:
        ``epoch_seconds * 1000``.

    Raises:
        LogrouteTimestampError: If the value is not a representable datetime.
    """
    try:
        _EPOCH + timedelta(seconds=epoch_seconds)
    except (OverflowError, ValueError) as error:
        raise LogrouteTimestampError(
            f"Epoch seconds {epoch_seconds} is outside the supported datetime range."
        ) from error
    return epoch_seconds * MILLIS_PER_SECOND


def normalize_timestamp(
    record: RecordDocument,
    converter: EpochConverter = epoch_seconds_to_millis,
) -> TimestampOutcome:
    """Set ``timestamp`` from the epoch seconds embedded in ``raw``.

    The record is mutated in place only on success.

    Args:
        record: Decoded record document.
        converter: Epoch seconds to milliseconds conversion.

    Returns:
        Outcome describing whether the timestamp was written.
    """
    raw_value = record.get(RAW_FIELD_NAME) if isinstance(record, dict) else None
    if not isinstance(raw_value, str):
        return "missing_raw"
    candidate, delimiter, _ = raw_value.partition(RAW_FIELD_DELIMITER)
    if not delimiter or _SIGNED_INTEGER_PATTERN.fullmatch(candidate) is None:
        return "unparseable"
    try:
        epoch_millis = converter(int(candidate))
    except LogrouteTimestampError:
        return "out_of_range"
    record[TIMESTAMP_FIELD_NAME] = epoch_millis
    return "normalized"
