"""Unit tests for timestamp normalization transform."""

from __future__ import annotations

import pytest

from core.errors import LogrouteTimestampError
from transforms.timestamp_normalization import epoch_seconds_to_millis, normalize_timestamp


@pytest.mark.parametrize(
    "epoch_seconds",
    [0, 1, -1, 1700000000, 253402300799, -62135596800],
)
def test_normalize_timestamp_writes_exact_millis(epoch_seconds: int) -> None:
    """Valid epoch seconds should become exactly seconds * 1000."""
    record = {"raw": f"{epoch_seconds},host=a,x"}

    outcome = normalize_timestamp(record)

    assert outcome == "normalized" and record["timestamp"] == epoch_seconds * 1000


def test_normalize_timestamp_overwrites_existing_value_in_place() -> None:
    """An existing timestamp field should be overwritten without reordering keys."""
    record = {"timestamp": "2023-11-14", "raw": "+1700000000,x", "other": 1}

    normalize_timestamp(record)

    assert list(record) == ["timestamp", "raw", "other"] and record["timestamp"] == 1700000000000


@pytest.mark.parametrize(
    ("record", "expected_outcome"),
    [
        ({}, "missing_raw"),
        ({"raw": None}, "missing_raw"),
        ({"raw": 1700000000}, "missing_raw"),
        ({"raw": ["1700000000", "x"]}, "missing_raw"),
        ({"raw": "bad"}, "unparseable"),
        ({"raw": "1700000000"}, "unparseable"),
        ({"raw": "17000.5,x"}, "unparseable"),
        ({"raw": " 1700000000,x"}, "unparseable"),
        ({"raw": "1_700_000_000,x"}, "unparseable"),
        ({"raw": ",1700000000"}, "unparseable"),
        ({"raw": "99999999999999,x"}, "out_of_range"),
        ({"raw": "-99999999999999,x"}, "out_of_range"),
    ],
)
def test_normalize_timestamp_fails_open(record: dict, expected_outcome: str) -> None:
    """Malformed or missing raw values should leave the record unchanged."""
    original = dict(record)

    outcome = normalize_timestamp(record)

    assert outcome == expected_outcome and record == original


def test_normalize_timestamp_ignores_non_mapping_records() -> None:
    """Non-object JSON documents should be passed through untouched."""
    record = ["1700000000,x"]

    outcome = normalize_timestamp(record)

    assert outcome == "missing_raw" and record == ["1700000000,x"]


def test_normalize_timestamp_uses_injected_converter() -> None:
    """A custom converter should decide the written value."""
    record = {"raw": "42,x"}

    normalize_timestamp(record, converter=lambda seconds: seconds + 1)

    assert record["timestamp"] == 43


def test_normalize_timestamp_reports_converter_failure() -> None:
    """A converter failure should keep the record and report out_of_range."""

    def failing_converter(epoch_seconds: int) -> int:
        raise LogrouteTimestampError(f"ambiguous {epoch_seconds}")

    record = {"raw": "1700000000,x", "cimcompliance": "cim"}

    outcome = normalize_timestamp(record, converter=failing_converter)

    assert outcome == "out_of_range" and "timestamp" not in record


def test_epoch_seconds_to_millis_rejects_out_of_range_values() -> None:
    """Conversion should fail beyond the supported datetime range."""
    with pytest.raises(LogrouteTimestampError):
        epoch_seconds_to_millis(253402300800)

    assert epoch_seconds_to_millis(253402300799) == 253402300799000
