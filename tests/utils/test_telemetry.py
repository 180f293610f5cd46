"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from todo_mcp.utils.telemetry import (
    _INSTRUMENTATION_NAME,
    ATTR_TOOL_NAME,
    _span_exporter,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("test.module"), trace.Tracer)

    def test_default_name(self) -> None:
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span(self) -> None:
        """Without an SDK configured, spans accept attributes and do nothing."""
        with get_tracer("test.noop").start_as_current_span("mcp.request") as span:
            span.set_attribute(ATTR_TOOL_NAME, "todo_list")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        with patch.dict("sys.modules", {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None}):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(otlp_endpoint="http://localhost:4317")

    def test_console_exporter_without_endpoint(self) -> None:
        try:
            from opentelemetry.sdk.trace.export import ConsoleSpanExporter
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        assert isinstance(_span_exporter(None), ConsoleSpanExporter)


class TestAttributeConstants:
    def test_namespaced(self) -> None:
        assert ATTR_TOOL_NAME.startswith("todo_mcp.")

    def test_instrumentation_name(self) -> None:
        assert _INSTRUMENTATION_NAME == "todo_mcp"
