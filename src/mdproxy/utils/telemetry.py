"""OpenTelemetry tracing helpers for mdproxy.

Wraps the OpenTelemetry API so modules can call ``get_tracer()`` without
caring whether the SDK is installed. Without a configured SDK the API
hands back no-op tracers.

Usage::

    from mdproxy.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("mdproxy.fetch") as span:
        span.set_attribute("key", "value")

Call :func:`configure_telemetry` once at startup to export spans (requires
the ``otel`` extra: ``pip install mdproxy[otel]``).
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

ATTR_TOOL_NAME = "mdproxy.tool.name"
ATTR_TOOL_KIND = "mdproxy.tool.kind"
ATTR_RPC_METHOD = "mdproxy.rpc.method"
ATTR_PROFILE = "mdproxy.profile"

OTLP_ENDPOINT_ENV = "MDPROXY_OTLP_ENDPOINT"

_INSTRUMENTATION_NAME = "mdproxy"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "mdproxy",
    otlp_endpoint: str | None = None,
) -> None:
    """Configure OpenTelemetry tracing (requires ``mdproxy[otel]``).

    Spans are exported via OTLP/gRPC when *otlp_endpoint* is set. There is
    no console exporter: stdout carries JSON-RPC frames only.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
        from opentelemetry.sdk.trace.export import BatchSpanProcessor  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install mdproxy[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})  # pyright: ignore[reportUnknownVariableType,reportUnknownMemberType]
    provider = TracerProvider(resource=resource)  # pyright: ignore[reportUnknownVariableType]

    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)

    trace.set_tracer_provider(provider)  # pyright: ignore[reportUnknownArgumentType]


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    """Attach the OTLP gRPC exporter."""
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports,reportUnknownVariableType]
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install mdproxy[otel]"
        )
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
