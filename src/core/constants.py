"""Core constants used across Logroute modules.

This module centralizes field names, partition names, and defaults.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_INPUT_DIR = Path("./dev")
DEFAULT_OUTPUT_DIR = Path("./corrected")
DEFAULT_INPUT_SUFFIX = ".gz"
DEFAULT_COMPRESSION_LEVEL = 6
MIN_COMPRESSION_LEVEL = 0
MAX_COMPRESSION_LEVEL = 9
OUTPUT_NAME_MARKER = "_processed"
RAW_FIELD_NAME = "raw"
RAW_FIELD_DELIMITER = ","
TIMESTAMP_FIELD_NAME = "timestamp"
COMPLIANCE_FIELD_NAME = "cimcompliance"
CIM_COMPLIANCE_VALUE = "cim"
CIM_PARTITION = "cim"
NON_CIM_PARTITION = "non_cim"
MILLIS_PER_SECOND = 1000
RECORD_ENCODING = "utf-8"
RECORD_LINE_TERMINATOR = "\n"
JOB_SPEC_VERSION = 1
