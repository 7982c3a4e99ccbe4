"""Line-level JSON record codec.

This module turns one NDJSON line into a mutable record document and
serializes records back into compact single-line JSON text.
"""

from __future__ import annotations

import json
import math

from core.constants import RECORD_ENCODING
from core.errors import LogrouteDecodeError, LogrouteWriteError
from core.types import RecordDocument


def decode_record(line: bytes | str) -> RecordDocument:
    """Parse one input line into a record document.

    Args:
        line: Raw line bytes or text, without the line terminator.

    Returns:
        Decoded JSON value, usually a mapping.

    Raises:
        LogrouteDecodeError: If the line is not valid UTF-8 JSON text.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode(RECORD_ENCODING)
        except UnicodeDecodeError as error:
            raise LogrouteDecodeError(
                f"Line is not valid UTF-8 at byte {error.start}: {error.reason}."
            ) from error
    try:
        return json.loads(line, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except json.JSONDecodeError as error:
        raise LogrouteDecodeError(
            f"Line is not valid JSON at column {error.colno}: {error.msg}."
        ) from error
    except ValueError as error:
        raise LogrouteDecodeError(
            f"Line holds a number JSON output cannot carry: {error}."
        ) from error


def encode_record(record: RecordDocument) -> bytes:
    """Serialize a record into compact single-line UTF-8 JSON.

    Args:
        record: Record document to serialize.

    Returns:
        JSON bytes with insertion-ordered keys and no extra whitespace.

    Raises:
        LogrouteWriteError: If the record holds values JSON cannot represent.
    """
    try:
        text = json.dumps(record, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as error:
        raise LogrouteWriteError(f"Failed to serialize record: {error}.") from error
    try:
        return text.encode(RECORD_ENCODING)
    except UnicodeEncodeError:
        # Lone surrogates from \uXXXX escapes only survive as escapes.
        return json.dumps(record, ensure_ascii=True, separators=(",", ":")).encode("ascii")


def _reject_constant(constant: str) -> RecordDocument:
    raise json.JSONDecodeError(f"Non-standard JSON constant {constant}", constant, 0)


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number {text} overflows a double")
    return value
