"""Command executor.

Validates parsed commands against the catalog and table schemas, runs
them, and persists every mutation with a whole-table rewrite before
returning.

Errors raised by the catalog, tables or store propagate unchanged; the
engine façade turns them into per-command results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from columnar_db.adapters.inbound.command_parser import (
    HELP_TEXT,
    Command,
    CountCommand,
    CreateTableCommand,
    DeleteCommand,
    DropTableCommand,
    EqualsPredicate,
    HelpCommand,
    InsertCommand,
    SelectCommand,
    ShowTablesCommand,
)
from columnar_db.domain.entities import Table
from columnar_db.domain.errors import DatabaseError, TypeMismatchError
from columnar_db.domain.services import Catalog
from columnar_db.domain.value_objects import ColumnType, Value, parse_value
from columnar_db.infrastructure.metrics import MetricsRegistry


@dataclass
class Row:
    """A row of data returned by the executor.

    Values are typed (Integer32, Float32, String) and can be accessed by
    column name or position.
    """

    columns: list[str]
    values: list[Value]

    def __getitem__(self, key: str | int) -> Value:
        if isinstance(key, int):
            return self.values[key]
        try:
            idx = self.columns.index(key)
            return self.values[idx]
        except ValueError as e:
            raise KeyError(f"Column '{key}' not found") from e

    def as_dict(self) -> dict[str, Any]:
        """Plain column -> payload mapping."""
        return {c: v.value for c, v in zip(self.columns, self.values)}

    def __repr__(self) -> str:
        pairs = ", ".join(f"{c}={v!r}" for c, v in zip(self.columns, self.values))
        return f"Row({pairs})"


@dataclass
class ExecutionResult:
    """Result of one command.

    Exactly one of the payload fields is meaningful per command kind:
    ``rows``/``columns`` for SELECT, ``tables`` for SHOW TABLES, ``count``
    for COUNT, ``affected_rows`` for INSERT and DELETE. ``error`` is set
    instead when the command failed.
    """

    rows: list[Row] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)
    tables: list[str] = field(default_factory=list)
    count: int | None = None
    affected_rows: int = 0
    message: str = ""
    error: DatabaseError | None = None

    @property
    def success(self) -> bool:
        return self.error is None


class CommandExecutor:
    """Executes parsed commands against a catalog."""

    def __init__(self, catalog: Catalog, metrics: MetricsRegistry | None = None) -> None:
        self._catalog = catalog
        self._metrics = metrics

    def execute(self, command: Command) -> ExecutionResult:
        """Execute a command.

        Raises:
            DatabaseError: Any schema, type, catalog or storage failure.
        """
        if isinstance(command, CreateTableCommand):
            return self._execute_create(command)
        elif isinstance(command, DropTableCommand):
            return self._execute_drop(command)
        elif isinstance(command, ShowTablesCommand):
            names = self._catalog.list_names()
            return ExecutionResult(tables=names, message=f"{len(names)} table(s)")
        elif isinstance(command, InsertCommand):
            return self._execute_insert(command)
        elif isinstance(command, SelectCommand):
            return self._execute_select(command)
        elif isinstance(command, DeleteCommand):
            return self._execute_delete(command)
        elif isinstance(command, CountCommand):
            table = self._catalog.get(command.table_name)
            return ExecutionResult(count=table.row_count())
        elif isinstance(command, HelpCommand):
            return ExecutionResult(message=HELP_TEXT)
        raise TypeError(f"Unsupported command: {command!r}")

    def _execute_create(self, command: CreateTableCommand) -> ExecutionResult:
        specs = [(spec.name, spec.type_token) for spec in command.columns]
        self._catalog.create_table(command.table_name, specs)
        self._record_write()
        self._update_table_gauge()
        return ExecutionResult(message=f"Table '{command.table_name}' created")

    def _execute_drop(self, command: DropTableCommand) -> ExecutionResult:
        self._catalog.drop_table(command.table_name)
        self._update_table_gauge()
        return ExecutionResult(message=f"Table '{command.table_name}' dropped")

    def _execute_insert(self, command: InsertCommand) -> ExecutionResult:
        table = self._catalog.get(command.table_name)
        values = table.parse_row(command.values)
        table.append_row(values)
        self._persist(table)
        return ExecutionResult(affected_rows=1, message="1 row inserted")

    def _execute_select(self, command: SelectCommand) -> ExecutionResult:
        table = self._catalog.get(command.table_name)
        if command.predicate is None:
            indices: list[int] = list(range(table.row_count()))
        else:
            indices = self._matching_indices(table, command.predicate)

        rows = [
            Row(columns=list(table.columns), values=list(table.materialize_row(i)))
            for i in indices
        ]
        return ExecutionResult(
            rows=rows,
            columns=list(table.columns),
            message=f"{len(rows)} row(s)",
        )

    def _execute_delete(self, command: DeleteCommand) -> ExecutionResult:
        table = self._catalog.get(command.table_name)
        indices = self._matching_indices(table, command.predicate)
        removed = table.delete_indices(indices)
        self._persist(table)
        return ExecutionResult(affected_rows=removed, message=f"{removed} row(s) deleted")

    @staticmethod
    def _matching_indices(table: Table, predicate: EqualsPredicate) -> list[int]:
        """Resolve an integer-equality predicate to row indices."""
        column_type = table.column_type(predicate.column)
        if column_type is not ColumnType.INTEGER:
            raise TypeMismatchError(
                f"WHERE only supports int columns; '{predicate.column}' is {column_type.token}"
            )
        try:
            target = parse_value(predicate.literal, ColumnType.INTEGER)
        except TypeMismatchError as e:
            raise TypeMismatchError(f"Only integer search supported: {e.message}") from e
        return list(table.scan_equals(predicate.column, target))

    def _persist(self, table: Table) -> None:
        self._catalog.save(table)
        self._record_write()

    def _record_write(self) -> None:
        if self._metrics is not None:
            self._metrics.records_written_total.inc()

    def _update_table_gauge(self) -> None:
        if self._metrics is not None:
            self._metrics.tables.set(len(self._catalog))
