"""Per-file rewrite and partition pipeline.

This module streams one gzip NDJSON input file through decode, timestamp
normalization, and compliance routing, appending each record to the
compressed sink for its partition. Runs move through the stages
opening, streaming, finalizing, and done; a file-level failure aborts
only the file being processed.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
import gzip
from pathlib import Path

from core.config import LogrouteConfig
from core.constants import RAW_FIELD_DELIMITER, RAW_FIELD_NAME
from core.errors import (
    LogrouteDecodeError,
    LogrouteError,
    LogrouteIngestError,
    LogrouteStoreError,
    LogrouteWriteError,
)
from core.logging_config import get_logger
from core.types import FileRunResult, FileRunStatus, PipelineStage, RecordDocument
from ingest.input_reader import iter_source_lines, open_gzip_source
from ingest.record_decoder import decode_record
from store.output_layout import build_destination_path
from store.sink_pool import SinkPool
from transforms.partition_routing import route_partition
from transforms.timestamp_normalization import (
    EpochConverter,
    epoch_seconds_to_millis,
    normalize_timestamp,
)

_LOGGER = get_logger(__name__)
_FILE_FATAL_ERRORS = (LogrouteIngestError, LogrouteStoreError, LogrouteWriteError)


@dataclass
class _RunCounters:
    """Mutable per-run tallies folded into the final result."""

    lines_read: int = 0
    records_written: int = 0
    decode_failures: int = 0
    timestamps_normalized: int = 0
    timestamps_skipped: int = 0
    timestamp_anomalies: int = 0
    partition_counts: Counter[str] = field(default_factory=Counter)


class FilePipeline:
    """Single-threaded pipeline run for one input file.

    All state, including the sink pool, is owned by the instance, so
    separate files can run on separate threads without coordination.
    """

    def __init__(
        self,
        source_path: Path,
        config: LogrouteConfig,
        converter: EpochConverter = epoch_seconds_to_millis,
    ) -> None:
        self._source_path = source_path
        self._config = config
        self._converter = converter
        self._stage: PipelineStage = "opening"
        self._counters = _RunCounters()

    @property
    def stage(self) -> PipelineStage:
        """Return the current pipeline stage."""
        return self._stage

    def run(self) -> FileRunResult:
        """Process the input file and return its result.

        Returns:
            Completed or aborted file result with record counts.

        Raises:
            LogrouteWriteError: If a write fails and the config requests
                aborting the whole job on write failures.
        """
        _LOGGER.info("file_processing_started", source_path=str(self._source_path))
        try:
            stream = open_gzip_source(self._source_path)
        except LogrouteIngestError as error:
            return self._aborted_result(error, "opening", ())
        pool = SinkPool(self._config.compression_level)
        failure: LogrouteError | None = None
        failed_stage: PipelineStage = "streaming"
        try:
            with stream:
                self._stage = "streaming"
                self._stream_records(stream, pool)
        except _FILE_FATAL_ERRORS as error:
            failure = error
        finally:
            destinations = pool.destinations
            finalize_error = self._finalize(pool)
        if failure is None and finalize_error is not None:
            failure, failed_stage = finalize_error, "finalizing"
        elif finalize_error is not None:
            _LOGGER.error(
                "sink_finalize_failed",
                source_path=str(self._source_path),
                error=str(finalize_error),
            )
        if failure is None:
            return self._completed_result(destinations)
        result = self._aborted_result(failure, failed_stage, destinations)
        if isinstance(failure, LogrouteWriteError) and self._config.abort_on_write_error:
            raise failure
        return result

    def _finalize(self, pool: SinkPool) -> LogrouteStoreError | None:
        self._stage = "finalizing"
        try:
            pool.finalize_all()
        except LogrouteStoreError as error:
            return error
        finally:
            self._stage = "done"
        return None

    def _stream_records(self, stream: gzip.GzipFile, pool: SinkPool) -> None:
        for line_number, line in iter_source_lines(stream, self._source_path):
            self._counters.lines_read += 1
            try:
                record = decode_record(line)
            except LogrouteDecodeError as error:
                self._skip_line(line_number, error)
                continue
            self._normalize_record(line_number, record)
            partition = route_partition(record)
            destination = build_destination_path(
                self._config.output_dir,
                partition,
                self._source_path,
                self._config.input_suffix,
            )
            sink = pool.get_or_create(destination)
            pool.write_record(sink, record)
            self._counters.records_written += 1
            self._counters.partition_counts[partition] += 1

    def _skip_line(self, line_number: int, error: LogrouteDecodeError) -> None:
        self._counters.decode_failures += 1
        _LOGGER.warning(
            "record_decode_failed",
            source_path=str(self._source_path),
            line_number=line_number,
            error=str(error),
        )

    def _normalize_record(self, line_number: int, record: RecordDocument) -> None:
        outcome = normalize_timestamp(record, self._converter)
        if outcome == "normalized":
            self._counters.timestamps_normalized += 1
        elif outcome == "out_of_range":
            self._counters.timestamp_anomalies += 1
            _LOGGER.warning(
                "timestamp_out_of_range",
                source_path=str(self._source_path),
                line_number=line_number,
                raw_prefix=_raw_prefix(record),
            )
        else:
            self._counters.timestamps_skipped += 1

    def _completed_result(self, destinations: tuple[Path, ...]) -> FileRunResult:
        result = self._build_result("completed", None, destinations, None)
        _LOGGER.info(
            "file_completed",
            source_path=str(self._source_path),
            lines_read=result.lines_read,
            records_written=result.records_written,
            decode_failures=result.decode_failures,
            timestamps_normalized=result.timestamps_normalized,
            timestamps_skipped=result.timestamps_skipped,
            timestamp_anomalies=result.timestamp_anomalies,
            partition_counts=dict(result.partition_counts),
        )
        return result

    def _aborted_result(
        self,
        error: LogrouteError,
        failed_stage: PipelineStage,
        destinations: tuple[Path, ...],
    ) -> FileRunResult:
        self._stage = "done"
        result = self._build_result("aborted", failed_stage, destinations, str(error))
        _LOGGER.error(
            "file_aborted",
            source_path=str(self._source_path),
            failed_stage=failed_stage,
            error_type=type(error).__name__,
            error=str(error),
            lines_read=result.lines_read,
            records_written=result.records_written,
        )
        return result

    def _build_result(
        self,
        status: FileRunStatus,
        failed_stage: PipelineStage | None,
        destinations: tuple[Path, ...],
        error: str | None,
    ) -> FileRunResult:
        counters = self._counters
        return FileRunResult(
            source_path=self._source_path,
            status=status,
            failed_stage=failed_stage,
            lines_read=counters.lines_read,
            records_written=counters.records_written,
            decode_failures=counters.decode_failures,
            timestamps_normalized=counters.timestamps_normalized,
            timestamps_skipped=counters.timestamps_skipped,
            timestamp_anomalies=counters.timestamp_anomalies,
            destinations=destinations,
            partition_counts=dict(counters.partition_counts),
            error=error,
        )


def process_file(
    source_path: Path,
    config: LogrouteConfig,
    converter: EpochConverter = epoch_seconds_to_millis,
) -> FileRunResult:
    """Run the rewrite and partition pipeline over one input file.

    Args:
        source_path: Gzip NDJSON input file.
        config: Runtime configuration.
        converter: Epoch seconds to milliseconds conversion.

    Returns:
        Per-file result; file-level failures are reported, not raised.

    Raises:
        LogrouteWriteError: Only when ``config.abort_on_write_error`` is set.
    """
    return FilePipeline(source_path, config, converter).run()


def _raw_prefix(record: RecordDocument) -> str:
    """Return the leading segment of ``raw`` for diagnostics."""
    raw_value = record.get(RAW_FIELD_NAME, "") if isinstance(record, dict) else ""
    return str(raw_value).partition(RAW_FIELD_DELIMITER)[0][:64]
