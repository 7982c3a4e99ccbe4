"""Output storage layer.

This module owns partitioned output paths and the compressed sinks
a file pipeline run writes records into.
"""
