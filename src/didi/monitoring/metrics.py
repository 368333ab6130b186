"""Prometheus metrics for the DIDI codec."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import (
    Counter,
    Histogram,
    generate_latest,
)

from didi.utils.logging import get_logger

logger = get_logger(__name__)

# Counters
FILES_WRITTEN = Counter(
    "didi_files_written_total", "Number of DIDI containers written"
)
BYTES_WRITTEN = Counter(
    "didi_bytes_written_total", "Total bytes written to DIDI containers"
)
READS = Counter(
    "didi_reads_total",
    "DIDI container reads",
    ["mode"],
)
ERRORS = Counter(
    "didi_errors_total",
    "DIDI operations that raised",
    ["operation", "error"],
)

# Histograms
OPERATION_DURATION = Histogram(
    "didi_operation_duration_seconds",
    "Duration of DIDI write/read/sniff operations",
    ["operation"],
)


@contextmanager
def track_operation(operation: str) -> Iterator[None]:
    """Time a block and count it as an error if it raises."""
    start = time.perf_counter()
    try:
        yield
    except Exception as exc:
        ERRORS.labels(operation=operation, error=type(exc).__name__).inc()
        logger.warning(
            "didi_operation_failed",
            operation=operation,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise
    finally:
        OPERATION_DURATION.labels(operation=operation).observe(
            time.perf_counter() - start
        )


__all__ = [
    "FILES_WRITTEN",
    "BYTES_WRITTEN",
    "READS",
    "ERRORS",
    "OPERATION_DURATION",
    "generate_latest",
    "track_operation",
]
