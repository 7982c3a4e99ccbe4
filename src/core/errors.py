"""Logroute exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each error type maps to one failure scope of the partition job:
process, file, record, or field.
"""

from __future__ import annotations


class LogrouteError(Exception):
    """Base exception for all Logroute failures."""


class LogrouteConfigError(LogrouteError):
    """Raised for invalid runtime configuration or job files."""


class LogrouteIngestError(LogrouteError):
    """Raised when an input file or input directory cannot be read."""


class LogrouteDecodeError(LogrouteError):
    """Raised when one input line is not valid JSON text."""


class LogrouteTimestampError(LogrouteError):
    """Raised when epoch seconds cannot be represented as a UTC datetime."""


class LogrouteStoreError(LogrouteError):
    """Raised when an output directory or output file cannot be created."""


class LogrouteWriteError(LogrouteError):
    """Raised when a record cannot be serialized or appended to a sink."""
