"""Log ingestion and partitioning.

This package reads gzip NDJSON inputs, rewrites each record,
and dispatches per-file pipelines across worker threads.
"""
