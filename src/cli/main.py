"""Logroute CLI entry points.
This module exposes the partition job and input discovery commands.
It maps argparse options onto runtime configuration and SDK calls.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
import sys
from typing import Any, Sequence

from core.config import (
    LogrouteConfig,
    parse_compression_level,
    parse_input_suffix,
    parse_max_workers,
)
from core.errors import LogrouteError
from core.job_spec import load_job_spec
from ingest.client import LogrouteClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="logroute",
        description="Normalize timestamps and partition gzip NDJSON logs by CIM compliance",
    )
    parser.add_argument("--config", help="YAML job file; overrides LOGROUTE_* variables")
    parser.add_argument("--input-dir", help="Override LOGROUTE_INPUT_DIR")
    parser.add_argument("--output-dir", help="Override LOGROUTE_OUTPUT_DIR")
    parser.add_argument("--input-suffix", help="Override LOGROUTE_INPUT_SUFFIX")
    parser.add_argument("--max-workers", type=int, help="Override LOGROUTE_MAX_WORKERS")
    parser.add_argument(
        "--compression-level",
        type=int,
        help="Override LOGROUTE_COMPRESSION_LEVEL (0-9)",
    )
    parser.add_argument(
        "--abort-on-write-error",
        action="store_true",
        default=None,
        help="Stop the whole job on the first output write failure",
    )
    subparsers = parser.add_subparsers(dest="command")
    _add_run_command(subparsers)
    _add_discover_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Logroute CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    command = args.command or "run"
    try:
        client = LogrouteClient(build_config(args))
        if command == "run":
            return _run_partition_command(client)
        if command == "discover":
            return _run_discover_command(client)
    except LogrouteError as error:
        print(f"logroute: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {command}")
    return 2


def build_config(args: argparse.Namespace) -> LogrouteConfig:
    """Resolve configuration from env, optional job file, and CLI flags.

    Args:
        args: Parsed CLI args.

    Returns:
        Validated runtime configuration.

    Raises:
        LogrouteConfigError: If any layer holds an invalid value.
    """
    config = LogrouteConfig.from_env()
    if args.config:
        config = load_job_spec(args.config).apply_to(config)
    overrides: dict[str, Any] = {}
    if args.input_dir:
        overrides["input_dir"] = Path(args.input_dir).expanduser().resolve()
    if args.output_dir:
        overrides["output_dir"] = Path(args.output_dir).expanduser().resolve()
    if args.input_suffix is not None:
        overrides["input_suffix"] = parse_input_suffix(args.input_suffix, "--input-suffix")
    if args.max_workers is not None:
        overrides["max_workers"] = parse_max_workers(args.max_workers, "--max-workers")
    if args.compression_level is not None:
        overrides["compression_level"] = parse_compression_level(
            args.compression_level, "--compression-level"
        )
    if args.abort_on_write_error:
        overrides["abort_on_write_error"] = True
    return replace(config, **overrides)


def _run_partition_command(client: LogrouteClient) -> int:
    """Handle run command.

    Args:
        client: SDK client.

    Returns:
        Exit code; per-file failures do not change it.
    """
    summary = client.run()
    print(
        f"files={summary.files_discovered}\t"
        f"completed={summary.files_completed}\t"
        f"aborted={summary.files_aborted}\t"
        f"records={summary.records_written}\t"
        f"skipped_lines={summary.decode_failures}\t"
        f"timestamp_anomalies={summary.timestamp_anomalies}"
    )
    return 0


def _run_discover_command(client: LogrouteClient) -> int:
    """Handle discover command.

    Args:
        client: SDK client.

    Returns:
        Exit code.
    """
    for path in client.discover():
        print(path)
    return 0


def _add_run_command(subparsers: Any) -> None:
    """Register run subcommand."""
    subparsers.add_parser("run", help="Normalize and partition every input file (default)")


def _add_discover_command(subparsers: Any) -> None:
    """Register discover subcommand."""
    subparsers.add_parser("discover", help="List eligible input files without processing")
