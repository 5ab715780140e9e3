"""Columnar Database - unified entry point for the engine.

This module provides the ColumnarDatabase class that wires the table
store, catalog, command parser and executor together behind a single
``execute(line)`` call.

Usage:
    from columnar_db.application import ColumnarDatabase

    with ColumnarDatabase(data_dir="/path/to/data") as db:
        db.execute("CREATE TABLE users id:int name:string age:int")
        db.execute("INSERT users 1 harsh 25")
        result = db.execute("SELECT * FROM users WHERE id = 1")

Every command runs to completion, including its record write, before
the next one is accepted. A failed command is reported in its result
and does not affect other tables or later commands.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Iterable

from columnar_db.adapters.inbound.command_parser import CommandParser
from columnar_db.adapters.outbound.json_table_store import JsonFileTableStore
from columnar_db.application.executor import CommandExecutor, ExecutionResult
from columnar_db.domain.errors import DatabaseError
from columnar_db.domain.services import Catalog
from columnar_db.infrastructure.config import Config, get_config
from columnar_db.infrastructure.logging import get_logger
from columnar_db.infrastructure.metrics import MetricsRegistry, get_metrics
from columnar_db.infrastructure.tracing import command_span, mark_failed
from columnar_db.ports.outbound import TableStore


logger = get_logger(__name__)


class ColumnarDatabase:
    """Main database object that orchestrates all components.

    Thread Safety:
        None. Exactly one instance should drive a given data directory;
        two instances over the same records are last-writer-wins.
    """

    def __init__(
        self,
        data_dir: str | Path | None = None,
        store: TableStore | None = None,
        config: Config | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the database.

        Args:
            data_dir: Directory for table records. Defaults to the configured one.
            store: Explicit table store; overrides ``data_dir``.
            config: Configuration. Defaults to ``get_config()``.
            metrics: Metrics registry. Defaults to the global registry.
        """
        self._config = config or get_config()
        self._data_dir = Path(data_dir) if data_dir is not None else self._config.storage.data_dir
        self._store = store
        self._metrics = metrics or get_metrics()

        self._catalog: Catalog | None = None
        self._parser: CommandParser | None = None
        self._executor: CommandExecutor | None = None
        self._started = False

    @property
    def data_dir(self) -> Path:
        """Get the data directory path."""
        return self._data_dir

    @property
    def is_started(self) -> bool:
        """Check if the database is started."""
        return self._started

    @property
    def catalog(self) -> Catalog:
        """The live catalog (only while started)."""
        if self._catalog is None:
            raise RuntimeError("Database not started")
        return self._catalog

    def start(self) -> None:
        """Open the store and enumerate the catalog.

        Raises:
            RuntimeError: If already started.
            StorageError: If the records cannot be enumerated.
        """
        if self._started:
            raise RuntimeError("Database already started")

        if self._store is None:
            self._store = JsonFileTableStore(
                self._data_dir,
                sync_mode=self._config.storage.sync_mode,
                indent=self._config.storage.indent,
            )

        self._catalog = Catalog.open(self._store)
        self._parser = CommandParser()
        self._executor = CommandExecutor(self._catalog, self._metrics)
        self._metrics.tables.set(len(self._catalog))

        self._started = True
        logger.info("database_started", data_dir=str(self._data_dir), tables=len(self._catalog))

    def stop(self) -> None:
        """Release components.

        Nothing needs flushing: every mutation was written when it ran.

        Raises:
            RuntimeError: If not started.
        """
        if not self._started:
            raise RuntimeError("Database not started")

        self._catalog = None
        self._parser = None
        self._executor = None
        self._started = False
        logger.info("database_stopped")

    def execute(self, line: str) -> ExecutionResult:
        """Parse and execute one command line.

        Args:
            line: The command text.

        Returns:
            ExecutionResult with the payload, or with ``error`` set if the
            command failed.

        Raises:
            RuntimeError: If the database is not started.
        """
        if not self._started:
            raise RuntimeError("Database not started")

        label = "invalid"
        started_at = time.perf_counter()
        with command_span(line) as span:
            try:
                command = self._parser.parse(line)
                label = command.command_type.value
                span.set_attribute("command", label)
                result = self._executor.execute(command)
            except DatabaseError as e:
                logger.warning(
                    "command_failed",
                    command=label,
                    error=type(e).__name__,
                    detail=e.message,
                )
                mark_failed(span, e)
                result = ExecutionResult(message=e.message, error=e)

        self._metrics.record_command(label, result.success, time.perf_counter() - started_at)
        return result

    def execute_many(self, lines: Iterable[str]) -> list[ExecutionResult]:
        """Execute several command lines in order."""
        return [self.execute(line) for line in lines]

    def get_stats(self) -> dict[str, Any]:
        """Get database statistics.

        Row counts are reported only for tables that load cleanly.
        """
        stats: dict[str, Any] = {
            "started": self._started,
            "data_dir": str(self._data_dir),
        }
        if self._catalog is None:
            return stats

        names = self._catalog.list_names()
        row_counts: dict[str, int] = {}
        for name in names:
            try:
                row_counts[name] = self._catalog.get(name).row_count()
            except DatabaseError as e:
                logger.warning("stats_table_unavailable", table=name, error=e.message)
        stats["tables"] = len(names)
        stats["row_counts"] = row_counts
        return stats

    def __enter__(self) -> ColumnarDatabase:
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
