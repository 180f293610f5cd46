"""OpenTelemetry tracing helpers for todo-mcp.

Provides a thin wrapper around the OpenTelemetry API so the rest of the
codebase can call ``get_tracer()`` without caring whether the SDK is
installed.  Without a configured SDK the API hands out no-op tracers.

Usage::

    from todo_mcp.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("mcp.tools.call") as span:
        span.set_attribute(ATTR_TOOL_NAME, "todo_list")

To export spans, call :func:`configure_telemetry` once at startup
(requires the ``otel`` extra: ``pip install todo-mcp[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys used throughout todo-mcp instrumentation
# ---------------------------------------------------------------------------

ATTR_CONNECTION_ID = "todo_mcp.connection.id"
ATTR_METHOD = "todo_mcp.method"
ATTR_REQUEST_ID = "todo_mcp.request.id"
ATTR_ERROR_CODE = "todo_mcp.error.code"
ATTR_TOOL_NAME = "todo_mcp.tool.name"
ATTR_ACTION_TYPE = "todo_mcp.action.type"

_INSTRUMENTATION_NAME = "todo_mcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(*, service_name: str = "todo-mcp", otlp_endpoint: str | None = None) -> None:
    """Install an SDK tracer provider (requires ``todo-mcp[otel]``).

    Spans go to *otlp_endpoint* over OTLP/gRPC, batched, when it is set;
    otherwise each span is printed to stdout as it ends.

    Raises:
        ImportError: If the SDK, or the OTLP exporter when an endpoint is
            given, is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import (  # pyright: ignore[reportMissingImports]
            BatchSpanProcessor,
            SimpleSpanProcessor,
        )
    except ImportError as exc:
        msg = "opentelemetry-sdk is required for tracing. Install it with: pip install todo-mcp[otel]"
        raise ImportError(msg) from exc

    provider = TracerProvider(resource=Resource.create({"service.name": service_name}))
    exporter = _span_exporter(otlp_endpoint)
    processor = BatchSpanProcessor(exporter) if otlp_endpoint else SimpleSpanProcessor(exporter)
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def _span_exporter(otlp_endpoint: str | None) -> Any:
    if not otlp_endpoint:
        from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

        return ConsoleSpanExporter()
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (  # pyright: ignore[reportMissingImports]
            OTLPSpanExporter,
        )
    except ImportError as exc:
        msg = "opentelemetry-exporter-otlp is required for OTLP export. Install it with: pip install todo-mcp[otel]"
        raise ImportError(msg) from exc
    return OTLPSpanExporter(endpoint=otlp_endpoint)
