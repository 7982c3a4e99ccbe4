"""Input discovery and parallel dispatch.

This module finds eligible input files and fans their pipelines out over a
fixed-size thread pool, joining every task before reporting a summary.
Each task owns all of its state; a failure in one file never cancels the
others unless the job is configured to abort on write failures.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor, as_completed
import os
from pathlib import Path
from typing import Callable

from core.config import LogrouteConfig
from core.errors import LogrouteIngestError, LogrouteWriteError
from core.logging_config import get_logger
from core.types import DispatchSummary, FileRunResult
from ingest.pipeline import process_file

_LOGGER = get_logger(__name__)

FileProcessor = Callable[[Path, LogrouteConfig], FileRunResult]


def discover_input_files(input_dir: Path, input_suffix: str) -> list[Path]:
    """List eligible input files directly under a directory.

    Args:
        input_dir: Directory to scan; subdirectories are not descended.
        input_suffix: Required file name suffix, e.g. ``.gz``.

    Returns:
        Regular files whose name ends with the suffix, sorted by name.

    Raises:
        LogrouteIngestError: If the directory is missing or unreadable.
    """
    if not input_dir.is_dir():
        raise LogrouteIngestError(
            f"Input directory {input_dir} does not exist or is not a directory. "
            "Set LOGROUTE_INPUT_DIR or pass --input-dir."
        )
    try:
        entries = list(input_dir.iterdir())
    except OSError as error:
        raise LogrouteIngestError(
            f"Failed to list input directory {input_dir}: {error}. Check directory permissions."
        ) from error
    eligible = [path for path in entries if path.name.endswith(input_suffix) and path.is_file()]
    return sorted(eligible, key=lambda path: path.name)


def dispatch_files(
    files: list[Path],
    config: LogrouteConfig,
    processor: FileProcessor = process_file,
) -> DispatchSummary:
    """Run the file pipeline over every file on a worker thread pool.

    Args:
        files: Input files to process.
        config: Runtime configuration.
        processor: Per-file pipeline entry point.

    Returns:
        Aggregate summary of every file result.

    Raises:
        LogrouteWriteError: If a write fails and ``config.abort_on_write_error``
            is set; files not yet started are cancelled.
    """
    worker_count = resolve_worker_count(config)
    _LOGGER.info("files_discovered", file_count=len(files), worker_count=worker_count)
    results: list[FileRunResult] = []
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="logroute") as executor:
        futures = {executor.submit(processor, path, config): path for path in files}
        for future in as_completed(futures):
            results.append(_collect_result(future, futures, config))
    summary = DispatchSummary.from_results(len(files), results)
    _LOGGER.info(
        "all_files_processed",
        files_discovered=summary.files_discovered,
        files_completed=summary.files_completed,
        files_aborted=summary.files_aborted,
        records_written=summary.records_written,
        decode_failures=summary.decode_failures,
        timestamp_anomalies=summary.timestamp_anomalies,
    )
    return summary


def run_partition_job(config: LogrouteConfig) -> DispatchSummary:
    """Discover input files and process them all.

    Args:
        config: Runtime configuration.

    Returns:
        Aggregate summary of the job.

    Raises:
        LogrouteIngestError: If the input directory cannot be listed.
        LogrouteWriteError: If a write fails and ``config.abort_on_write_error`` is set.
    """
    _LOGGER.info(
        "partition_job_started",
        input_dir=str(config.input_dir),
        output_dir=str(config.output_dir),
        input_suffix=config.input_suffix,
    )
    files = discover_input_files(config.input_dir, config.input_suffix)
    return dispatch_files(files, config)


def resolve_worker_count(config: LogrouteConfig) -> int:
    """Return the configured worker count, defaulting to the CPU count."""
    return config.max_workers or os.cpu_count() or 1


def _collect_result(
    future: Future[FileRunResult],
    futures: dict[Future[FileRunResult], Path],
    config: LogrouteConfig,
) -> FileRunResult:
    source_path = futures[future]
    try:
        return future.result()
    except LogrouteWriteError as error:
        if config.abort_on_write_error:
            cancelled = sum(1 for pending in futures if pending.cancel())
            _LOGGER.error(
                "partition_job_aborted",
                source_path=str(source_path),
                error=str(error),
                cancelled_files=cancelled,
            )
            raise
        return _failed_result(source_path, error)
    except Exception as error:
        return _failed_result(source_path, error)


def _failed_result(source_path: Path, error: Exception) -> FileRunResult:
    """Record a task that raised instead of returning a result."""
    _LOGGER.error(
        "file_failed",
        source_path=str(source_path),
        error_type=type(error).__name__,
        error=str(error),
    )
    return FileRunResult(source_path=source_path, status="aborted", error=str(error))
