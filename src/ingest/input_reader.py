"""Gzip source readers for ingestion.

This module opens compressed NDJSON input files and streams their lines.
Header problems surface when the file is opened; corruption later in the
stream surfaces while iterating.
"""

from __future__ import annotations

import gzip
from pathlib import Path
from typing import Iterator
import zlib

from core.errors import LogrouteIngestError

_STREAM_ERRORS = (OSError, EOFError, zlib.error)


def open_gzip_source(source_path: Path) -> gzip.GzipFile:
    """Open a gzip input file and validate its header.

    Args:
        source_path: Path to a gzip-compressed NDJSON file.

    Returns:
        Open decompressing reader positioned at the first byte.

    Raises:
        LogrouteIngestError: If the file is missing, unreadable, or not gzip.
    """
    try:
        stream = gzip.open(source_path, "rb")
    except OSError as error:
        raise LogrouteIngestError(
            f"Failed to open input file {source_path}: {error.strerror or error}. "
            "Check that the file exists and is readable."
        ) from error
    try:
        stream.peek(1)
    except _STREAM_ERRORS as error:
        stream.close()
        raise LogrouteIngestError(
            f"Failed to decompress input file {source_path}: {error}. "
            "Provide a valid gzip-compressed file."
        ) from error
    return stream


def iter_source_lines(stream: gzip.GzipFile, source_path: Path) -> Iterator[tuple[int, bytes]]:
    """Yield numbered lines from an open gzip reader.

    Args:
        stream: Reader returned by ``open_gzip_source``.
        source_path: Input path used in error messages.

    Yields:
        One-based line number and line bytes without the line terminator.

    Raises:
        LogrouteIngestError: If the compressed stream is truncated or corrupt.
    """
    line_number = 0
    while True:
        try:
            line = stream.readline()
        except _STREAM_ERRORS as error:
            raise LogrouteIngestError(
                f"Failed to read input file {source_path} after line {line_number}: {error}. "
                "The compressed stream is truncated or corrupt."
            ) from error
        if not line:
            return
        line_number += 1
        yield line_number, line.rstrip(b"\r\n")
