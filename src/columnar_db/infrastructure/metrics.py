"""Prometheus metrics for the columnar database."""

from __future__ import annotations

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    start_http_server,
)


class MetricsRegistry:
    """Registry of all columnar database metrics."""

    def __init__(self, registry: CollectorRegistry | None = None) -> None:
        """Initialize metrics registry."""
        self._registry = registry or REGISTRY

        # Command metrics
        self.commands_total = Counter(
            "columnar_commands_total",
            "Total number of commands executed",
            ["command", "status"],  # status: success, error
            registry=self._registry,
        )

        self.command_latency_seconds = Histogram(
            "columnar_command_latency_seconds",
            "Command latency in seconds, including record writes",
            ["command"],
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

        # Storage metrics
        self.records_written_total = Counter(
            "columnar_records_written_total",
            "Total whole-table record writes",
            registry=self._registry,
        )

        self.tables = Gauge(
            "columnar_tables",
            "Number of tables in the catalog",
            registry=self._registry,
        )

        self.info = Info(
            "columnar_db",
            "Columnar database information",
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        """The collector registry these metrics are registered in."""
        return self._registry

    def record_command(self, command: str, success: bool, duration: float) -> None:
        """Record the outcome and latency of one command."""
        status = "success" if success else "error"
        self.commands_total.labels(command=command, status=status).inc()
        self.command_latency_seconds.labels(command=command).observe(duration)


# Global metrics registry
_metrics: MetricsRegistry | None = None


def setup_metrics(port: int = 8001, registry: CollectorRegistry | None = None) -> MetricsRegistry:
    """
    Set up Prometheus metrics server.

    Args:
        port: Port for the metrics HTTP server
        registry: Optional custom registry

    Returns:
        The metrics registry
    """
    global _metrics
    _metrics = MetricsRegistry(registry)

    from columnar_db import __version__
    _metrics.info.info({
        "version": __version__,
    })

    start_http_server(port, registry=registry or REGISTRY)

    return _metrics


def get_metrics() -> MetricsRegistry:
    """Get the global metrics registry."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsRegistry()
    return _metrics
