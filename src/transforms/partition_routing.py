"""Compliance partition routing transform."""

from __future__ import annotations

from core.constants import (
    CIM_COMPLIANCE_VALUE,
    CIM_PARTITION,
    COMPLIANCE_FIELD_NAME,
    NON_CIM_PARTITION,
)
from core.types import Partition, RecordDocument


def route_partition(record: RecordDocument) -> Partition:
    """Return ``cim`` when ``cimcompliance`` is exactly ``"cim"``, else ``non_cim``."""
    if not isinstance(record, dict):
        return NON_CIM_PARTITION
    compliance_value = record.get(COMPLIANCE_FIELD_NAME)
    if isinstance(compliance_value, str) and compliance_value == CIM_COMPLIANCE_VALUE:
        return CIM_PARTITION
    return NON_CIM_PARTITION
