"""Deterministic output paths for partitioned files."""

from __future__ import annotations

from pathlib import Path

from core.constants import DEFAULT_INPUT_SUFFIX, OUTPUT_NAME_MARKER
from core.types import Partition


def build_destination_path(
    output_dir: Path,
    partition: Partition,
    source_path: Path,
    input_suffix: str = DEFAULT_INPUT_SUFFIX,
) -> Path:
    """Return the output file path for one input file and partition.

    ``<output_dir>/<partition>/<name without suffix>_processed<suffix>``,
    so ``a.gz`` becomes ``a_processed.gz``.

    Args:
        output_dir: Root output directory.
        partition: Target partition name.
        source_path: Input file path.
        input_suffix: Suffix that marked the input file as eligible.

    Returns:
        Destination file path.
    """
    return output_dir / partition / build_output_name(source_path.name, input_suffix)


def build_output_name(source_name: str, input_suffix: str = DEFAULT_INPUT_SUFFIX) -> str:
    """Insert the processed marker before the input suffix of a file name."""
    if input_suffix and source_name.endswith(input_suffix):
        stem = source_name[: -len(input_suffix)]
        return f"{stem}{OUTPUT_NAME_MARKER}{input_suffix}"
    return f"{source_name}{OUTPUT_NAME_MARKER}{DEFAULT_INPUT_SUFFIX}"
