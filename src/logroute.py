"""Public SDK surface for Logroute.

This module provides a stable import path for library users.
It re-exports the client, configuration, and typed result models.
"""

from __future__ import annotations

from core.config import LogrouteConfig
from core.types import DispatchSummary, FileRunResult, Partition
from ingest.client import LogrouteClient
from ingest.dispatcher import discover_input_files, dispatch_files, run_partition_job
from ingest.pipeline import FilePipeline, process_file
from transforms.partition_routing import route_partition
from transforms.timestamp_normalization import epoch_seconds_to_millis, normalize_timestamp

__all__ = [
    "DispatchSummary",
    "FilePipeline",
    "FileRunResult",
    "LogrouteClient",
    "LogrouteConfig",
    "Partition",
    "discover_input_files",
    "dispatch_files",
    "epoch_seconds_to_millis",
    "normalize_timestamp",
    "process_file",
    "route_partition",
    "run_partition_job",
]
