"""Trace ids attached to log records.

The active OpenTelemetry span wins when there is one; otherwise a random
trace/span pair is kept per execution context so log lines from one call
still correlate.
"""

from __future__ import annotations

from contextvars import ContextVar
from uuid import uuid4

from opentelemetry import trace


trace_context: ContextVar[dict | None] = ContextVar("index_adapter_trace_context", default=None)


def get_trace_context() -> dict:
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return {"trace_id": format(span_context.trace_id, "032x"), "span_id": format(span_context.span_id, "016x")}
    ctx = trace_context.get()
    if ctx is None or not ctx.get("trace_id"):
        ctx = {"trace_id": uuid4().hex, "span_id": uuid4().hex[:16]}
        trace_context.set(ctx)
    return ctx


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def update_span_id(span_id: str) -> None:
    """Replace span_id, keeping the current trace_id."""
    ctx = trace_context.get() or {}
    trace_context.set({**ctx, "span_id": span_id})
