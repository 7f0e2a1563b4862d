"""Prometheus metrics for adapter operations and graceful degradations."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, Histogram, generate_latest

from index_adapter.errors import ErrorKind


if TYPE_CHECKING:
    from collections.abc import Generator


OPERATION_LATENCY = Histogram(
    "index_adapter_operation_latency_seconds",
    "Latency of segment, highlight and document mapping calls",
    ["operation"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0),
)

DEGRADED_OPERATIONS = Counter(
    "index_adapter_degraded_total",
    "Operations that fell back to a degraded result",
    ["operation", "kind"],
)


@contextmanager
def track_latency(operation: str) -> Generator[None, None, None]:
    """Observe the wall time of the wrapped block."""
    start = time.perf_counter()
    try:
        yield
    finally:
        OPERATION_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)


def record_degradation(operation: str, kind: ErrorKind) -> None:
    DEGRADED_OPERATIONS.labels(operation=operation, kind=kind.value).inc()


def get_metrics() -> bytes:
    """Return the Prometheus exposition for the default registry."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
