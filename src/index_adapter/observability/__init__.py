"""Observability module for logging, tracing, and metrics."""

from index_adapter.observability.context import get_trace_context, set_trace_context, trace_context
from index_adapter.observability.logging import JsonFormatter, configure_logging
from index_adapter.observability.metrics import (
    DEGRADED_OPERATIONS,
    OPERATION_LATENCY,
    get_metrics,
    get_metrics_content_type,
    record_degradation,
    track_latency,
)
from index_adapter.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "DEGRADED_OPERATIONS",
    "OPERATION_LATENCY",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "record_degradation",
    "set_trace_context",
    "trace_context",
    "track_latency",
]
