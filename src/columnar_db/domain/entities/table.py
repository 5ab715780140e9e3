"""Columnar table entity.

A table stores one ordered sequence of values per column. "Row i" is the
tuple formed by index i of every column sequence; there is no separate
row key, so every mutation touches all sequences in lockstep.

Invariants:
    1. ``columns`` and ``fields`` hold the same key set (and so does ``data``).
    2. Every column sequence has the same length.
    3. Every stored value's tag matches its column's declared type.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence

from columnar_db.domain.errors import (
    ArityMismatchError,
    ColumnNotFoundError,
    CorruptRecordError,
    SchemaError,
    TypeMismatchError,
)
from columnar_db.domain.value_objects import (
    ColumnType,
    Value,
    parse_column_type,
    parse_value,
)


_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def validate_identifier(name: str, kind: str) -> None:
    """Ensure a table or column name is a plain identifier.

    Raises:
        SchemaError: If the name is empty or contains other characters.
    """
    if not _IDENTIFIER.fullmatch(name):
        raise SchemaError(f"Invalid {kind} name '{name}'")


@dataclass
class Table:
    """A single table: schema plus column-major storage.

    Attributes:
        name: Unique table name (catalog key).
        fields: Column name -> declared ColumnType.
        columns: Column names in declaration order (positional INSERT order).
        data: Column name -> ordered list of values.
    """

    name: str
    fields: dict[str, ColumnType] = field(default_factory=dict)
    columns: list[str] = field(default_factory=list)
    data: dict[str, list[Value]] = field(default_factory=dict)

    @classmethod
    def create(
        cls,
        name: str,
        specs: Sequence[tuple[str, ColumnType | str]],
    ) -> Table:
        """Create an empty table from ordered ``(column, type)`` specs.

        Args:
            name: Table name.
            specs: Column specs; the type may be a ColumnType or its token.

        Returns:
            A new Table with no rows.

        Raises:
            SchemaError: On an invalid name, no columns, a repeated column
                or an unknown type token.
        """
        validate_identifier(name, "table")
        if not specs:
            raise SchemaError(f"Table '{name}' must declare at least one column")

        table = cls(name=name)
        for column, column_type in specs:
            validate_identifier(column, "column")
            if column in table.fields:
                raise SchemaError(f"Duplicate column '{column}' in table '{name}'")
            if not isinstance(column_type, ColumnType):
                column_type = parse_column_type(column_type)
            table.fields[column] = column_type
            table.columns.append(column)
            table.data[column] = []
        return table

    def column_type(self, column: str) -> ColumnType:
        """Return the declared type of a column.

        Raises:
            ColumnNotFoundError: If the column does not exist.
        """
        try:
            return self.fields[column]
        except KeyError as e:
            raise ColumnNotFoundError(self.name, column) from e

    def row_count(self) -> int:
        """Number of rows (length of any column sequence)."""
        if not self.columns:
            return 0
        return len(self.data[self.columns[0]])

    def parse_row(self, tokens: Sequence[str]) -> list[Value]:
        """Convert raw tokens into values of each positional column's type.

        Raises:
            ArityMismatchError: If the token count differs from the column count.
            TypeMismatchError: If a token does not parse as its column's type.
        """
        self._check_arity(len(tokens))
        values = []
        for column, token in zip(self.columns, tokens):
            try:
                values.append(parse_value(token, self.fields[column]))
            except TypeMismatchError as e:
                raise TypeMismatchError(f"Column '{column}': {e.message}") from e
        return values

    def append_row(self, values: Sequence[Value]) -> None:
        """Append one value to every column.

        All checks run before any column is touched, so a rejected row
        leaves the table unchanged.

        Raises:
            ArityMismatchError: If the value count differs from the column count.
            TypeMismatchError: If a value's tag disagrees with its column.
        """
        self._check_arity(len(values))
        for column, value in zip(self.columns, values):
            expected = self.fields[column]
            if getattr(value, "column_type", None) is not expected:
                raise TypeMismatchError(
                    f"Column '{column}' expects {expected.token}, got {value!r}"
                )

        for column, value in zip(self.columns, values):
            self.data[column].append(value)

    def scan_equals(self, column: str, target: Value) -> Iterator[int]:
        """Lazily yield indices of rows whose ``column`` equals ``target``.

        The column is resolved eagerly; iteration is linear over the
        column's sequence and never mutates the table.

        Raises:
            ColumnNotFoundError: If the column does not exist.
        """
        self.column_type(column)
        return self._scan(self.data[column], target)

    @staticmethod
    def _scan(values: list[Value], target: Value) -> Iterator[int]:
        for index, value in enumerate(values):
            if value == target:
                yield index

    def delete_indices(self, indices: Iterable[int]) -> int:
        """Remove the given row positions from every column.

        Remaining rows keep their relative order. Out-of-range indices
        are ignored.

        Returns:
            Number of rows removed.
        """
        doomed = {i for i in indices if 0 <= i < self.row_count()}
        if not doomed:
            return 0
        for column in self.columns:
            self.data[column] = [
                value for i, value in enumerate(self.data[column]) if i not in doomed
            ]
        return len(doomed)

    def materialize_row(self, index: int) -> tuple[Value, ...]:
        """Return the values at ``index`` in column order."""
        if not 0 <= index < self.row_count():
            raise IndexError(f"Row {index} out of range for table '{self.name}'")
        return tuple(self.data[column][index] for column in self.columns)

    def rows(self) -> Iterator[tuple[Value, ...]]:
        """Iterate all rows in positional order."""
        for index in range(self.row_count()):
            yield self.materialize_row(index)

    def verify(self) -> None:
        """Check the table invariants.

        Raises:
            CorruptRecordError: Naming the first violated invariant.
        """
        if len(set(self.columns)) != len(self.columns):
            raise CorruptRecordError(f"Table '{self.name}': duplicate column names")
        if set(self.columns) != set(self.fields) or set(self.columns) != set(self.data):
            raise CorruptRecordError(
                f"Table '{self.name}': columns, fields and data disagree on column names"
            )
        if not self.columns:
            raise CorruptRecordError(f"Table '{self.name}': no columns declared")

        lengths = {len(self.data[column]) for column in self.columns}
        if len(lengths) > 1:
            raise CorruptRecordError(
                f"Table '{self.name}': column lengths differ {sorted(lengths)}"
            )

        for column in self.columns:
            expected = self.fields[column]
            for index, value in enumerate(self.data[column]):
                if getattr(value, "column_type", None) is not expected:
                    raise CorruptRecordError(
                        f"Table '{self.name}': row {index} of column '{column}' "
                        f"is not {expected.token}"
                    )

    def _check_arity(self, count: int) -> None:
        if count != len(self.columns):
            raise ArityMismatchError(expected=len(self.columns), actual=count)
