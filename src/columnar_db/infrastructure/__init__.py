"""Infrastructure layer - cross-cutting concerns."""

from columnar_db.infrastructure.config import Config, get_config
from columnar_db.infrastructure.logging import setup_logging, get_logger
from columnar_db.infrastructure.metrics import setup_metrics, get_metrics, MetricsRegistry
from columnar_db.infrastructure.tracing import command_span, get_tracer, mark_failed, setup_tracing

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsRegistry",
    "setup_tracing",
    "get_tracer",
    "command_span",
    "mark_failed",
]
