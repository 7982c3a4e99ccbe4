"""Python SDK for partition jobs.

This module exposes a small client that binds a runtime configuration to
the discovery, dispatch, and single-file pipeline entry points.
"""

from __future__ import annotations

from pathlib import Path

from core.config import LogrouteConfig
from core.types import DispatchSummary, FileRunResult
from ingest.dispatcher import discover_input_files, run_partition_job
from ingest.pipeline import process_file


class LogrouteClient:
    """Primary SDK entry point for partition workflows."""

    def __init__(self, config: LogrouteConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration; read from env if omitted.
        """
        self._config = config or LogrouteConfig.from_env()

    @property
    def config(self) -> LogrouteConfig:
        """Return the bound runtime configuration."""
        return self._config

    def discover(self) -> list[Path]:
        """List eligible input files without processing them.

        Returns:
            Sorted eligible input paths.

        Raises:
            LogrouteIngestError: If the input directory cannot be listed.
        """
        return discover_input_files(self._config.input_dir, self._config.input_suffix)

    def run(self) -> DispatchSummary:
        """Process every eligible input file.

        Returns:
            Aggregate job summary.

        Raises:
            LogrouteIngestError: If the input directory cannot be listed.
            LogrouteWriteError: If a write fails and the job aborts on write errors.
        """
        return run_partition_job(self._config)

    def process_file(self, source_path: str | Path) -> FileRunResult:
        """Process a single input file into the configured output directory."""
        return process_file(Path(source_path), self._config)
