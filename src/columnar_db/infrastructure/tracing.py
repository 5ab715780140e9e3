"""OpenTelemetry tracing for command execution.

Every command line runs inside one ``command.execute`` span. Without
``setup_tracing`` the global no-op provider is used, so spans cost nothing.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode


COMMAND_SPAN = "command.execute"
DB_SYSTEM = "columnar_db"
MAX_STATEMENT_LENGTH = 256

_tracer: trace.Tracer | None = None


def setup_tracing(
    service_name: str = DB_SYSTEM,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
) -> trace.Tracer:
    """
    Install a tracer provider that exports command spans.

    Args:
        service_name: Name reported as ``service.name``
        otlp_endpoint: OTLP gRPC collector endpoint (e.g. "http://localhost:4317")
        console_export: Also print finished spans to stdout

    Returns:
        The tracer used for command spans
    """
    global _tracer

    from columnar_db import __version__

    provider = TracerProvider(
        resource=Resource.create({"service.name": service_name, "service.version": __version__})
    )
    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    _tracer = trace.get_tracer(service_name)
    return _tracer


def get_tracer() -> trace.Tracer:
    """Get the tracer for command spans."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer(DB_SYSTEM)
    return _tracer


@contextmanager
def command_span(line: str) -> Generator[trace.Span, None, None]:
    """
    Open the span covering one command line.

    Args:
        line: Raw command text, recorded as ``db.statement``

    Yields:
        The active span
    """
    with get_tracer().start_as_current_span(COMMAND_SPAN) as span:
        span.set_attribute("db.system", DB_SYSTEM)
        span.set_attribute("db.statement", line.strip()[:MAX_STATEMENT_LENGTH])
        yield span


def mark_failed(span: trace.Span, error: Exception) -> None:
    """Flag a command span as failed with the error class and message."""
    span.set_attribute("error", type(error).__name__)
    span.set_status(Status(StatusCode.ERROR, str(error)))
