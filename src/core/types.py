"""Shared typed models.

This module defines the record, partition, and result models used by the
decoder, transforms, sink pool, pipeline, and dispatcher layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Mapping

RecordDocument = Any
"""One decoded JSON line; usually a ``dict`` but any JSON value is accepted."""

Partition = Literal["cim", "non_cim"]

TimestampOutcome = Literal["normalized", "missing_raw", "unparseable", "out_of_range"]

FileRunStatus = Literal["completed", "aborted"]
PipelineStage = Literal["opening", "streaming", "finalizing", "done"]


@dataclass(frozen=True)
class FileRunResult:
    """Outcome of one file pipeline run.

    Attributes:
        source_path: Input file that was processed.
        status: ``completed`` or ``aborted``.
        failed_stage: Pipeline stage that aborted the run, if any.
        lines_read: Number of lines read from the input stream.
        records_written: Number of records appended to output sinks.
        decode_failures: Lines skipped because they were not valid JSON.
        timestamps_normalized: Records whose timestamp was rewritten.
        timestamps_skipped: Records kept as-is because ``raw`` was missing
            or did not start with an integer.
        timestamp_anomalies: Records kept without a normalized timestamp
            because the epoch value was out of range.
        destinations: Output files finalized by this run, in open order.
        partition_counts: Records written per partition.
        error: Failure message when the run aborted.
    """

    source_path: Path
    status: FileRunStatus
    failed_stage: PipelineStage | None = None
    lines_read: int = 0
    records_written: int = 0
    decode_failures: int = 0
    timestamps_normalized: int = 0
    timestamps_skipped: int = 0
    timestamp_anomalies: int = 0
    destinations: tuple[Path, ...] = ()
    partition_counts: Mapping[str, int] = field(default_factory=dict)
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return whether the file ran to completion."""
        return self.status == "completed"


@dataclass(frozen=True)
class DispatchSummary:
    """Aggregate outcome of one partition job.

    Attributes:
        files_discovered: Eligible input files found by discovery.
        files_completed: Files whose pipeline completed.
        files_aborted: Files whose pipeline aborted.
        records_written: Total records written across all files.
        decode_failures: Total skipped lines across all files.
        timestamp_anomalies: Total out-of-range timestamps across all files.
        results: Per-file results ordered by input path.
    """

    files_discovered: int
    files_completed: int
    files_aborted: int
    records_written: int
    decode_failures: int
    timestamp_anomalies: int
    results: tuple[FileRunResult, ...] = ()

    @classmethod
    def from_results(
        cls,
        files_discovered: int,
        results: list[FileRunResult],
    ) -> "DispatchSummary":
        """Aggregate per-file results into one summary.

        Args:
            files_discovered: Number of files handed to the dispatcher.
            results: Per-file results in any order.

        Returns:
            Summary with results sorted by source path.
        """
        ordered_results = tuple(sorted(results, key=lambda item: str(item.source_path)))
        return cls(
            files_discovered=files_discovered,
            files_completed=sum(1 for item in ordered_results if item.succeeded),
            files_aborted=sum(1 for item in ordered_results if not item.succeeded),
            records_written=sum(item.records_written for item in ordered_results),
            decode_failures=sum(item.decode_failures for item in ordered_results),
            timestamp_anomalies=sum(item.timestamp_anomalies for item in ordered_results),
            results=ordered_results,
        )
