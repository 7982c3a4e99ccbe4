"""Per-file pool of compressed output sinks.

This module owns the gzip writers a single file pipeline run opens.
Each destination path is opened exactly once, truncating any file left
by an earlier run, and every sink is finalized together at the end.
A pool belongs to one pipeline run and is never shared across threads.
"""

from __future__ import annotations

from dataclasses import dataclass
import gzip
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from core.constants import DEFAULT_COMPRESSION_LEVEL, RECORD_LINE_TERMINATOR
from core.errors import LogrouteStoreError, LogrouteWriteError
from core.logging_config import get_logger
from core.types import RecordDocument
from ingest.record_decoder import encode_record

_LOGGER = get_logger(__name__)
_LINE_TERMINATOR_BYTES = RECORD_LINE_TERMINATOR.encode("ascii")


@dataclass
class _Sink:
    """Open output file and the gzip encoder wrapping it."""

    path: Path
    file_handle: BinaryIO
    encoder: gzip.GzipFile
    records_written: int = 0


class SinkPool:
    """Registry of gzip output streams keyed by destination path."""

    def __init__(self, compression_level: int = DEFAULT_COMPRESSION_LEVEL) -> None:
        self._compression_level = compression_level
        self._sinks: dict[Path, _Sink] = {}

    def __enter__(self) -> "SinkPool":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.finalize_all()
            return
        try:
            self.finalize_all()
        except LogrouteStoreError as error:
            _LOGGER.error("sink_finalize_failed", error=str(error))

    @property
    def destinations(self) -> tuple[Path, ...]:
        """Return registered destination paths in open order."""
        return tuple(self._sinks)

    def get_or_create(self, destination_path: Path) -> gzip.GzipFile:
        """Return the gzip stream for a destination, opening it on first use.

        Args:
            destination_path: Output file path.

        Returns:
            Writable gzip stream for the destination.

        Raises:
            LogrouteStoreError: If the directory or file cannot be created.
        """
        sink = self._sinks.get(destination_path)
        if sink is None:
            sink = self._open_sink(destination_path)
            self._sinks[destination_path] = sink
        return sink.encoder

    def write_record(self, stream: gzip.GzipFile, record: RecordDocument) -> None:
        """Append one record as a JSON line to a sink stream.

        Args:
            stream: Stream returned by ``get_or_create``.
            record: Record document to serialize.

        Raises:
            LogrouteWriteError: If serialization or the write fails.
        """
        payload = encode_record(record) + _LINE_TERMINATOR_BYTES
        try:
            stream.write(payload)
        except (OSError, ValueError) as error:
            raise LogrouteWriteError(
                f"Failed to write record to {stream.name}: {error}."
            ) from error
        sink = self._sinks.get(Path(stream.name))
        if sink is not None:
            sink.records_written += 1

    def finalize_all(self) -> tuple[Path, ...]:
        """Flush and close every open sink, writing gzip trailers.

        Every sink is attempted even when an earlier one fails.

        Returns:
            Destination paths finalized successfully.

        Raises:
            LogrouteStoreError: If any sink failed to close cleanly.
        """
        finalized_paths: list[Path] = []
        failures: list[str] = []
        for path, sink in self._sinks.items():
            try:
                sink.encoder.close()
                sink.file_handle.close()
            except OSError as error:
                failures.append(f"{path}: {error}")
                continue
            finalized_paths.append(path)
            _LOGGER.info(
                "destination_finalized",
                destination=str(path),
                records_written=sink.records_written,
            )
        self._sinks.clear()
        if failures:
            raise LogrouteStoreError(
                f"Failed to finalize {len(failures)} output file(s): {'; '.join(failures)}. "
                "Output files listed here may be truncated."
            )
        return tuple(finalized_paths)

    def _open_sink(self, destination_path: Path) -> _Sink:
        try:
            destination_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise LogrouteStoreError(
                f"Failed to create output directory {destination_path.parent}: {error}. "
                "Check permissions on the output root."
            ) from error
        try:
            file_handle = destination_path.open("wb")
        except OSError as error:
            raise LogrouteStoreError(
                f"Failed to create output file {destination_path}: {error}. "
                "Check permissions on the output directory."
            ) from error
        encoder = gzip.GzipFile(
            filename=str(destination_path),
            fileobj=file_handle,
            mode="wb",
            compresslevel=self._compression_level,
            mtime=0,
        )
        return _Sink(path=destination_path, file_handle=file_handle, encoder=encoder)
