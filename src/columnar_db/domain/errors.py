"""Error taxonomy for the columnar database engine.

Every failure a single command can produce is a subclass of
DatabaseError, so callers (REPL, REST API) can report per-command
errors without catching unrelated exceptions.
"""

from __future__ import annotations


class DatabaseError(Exception):
    """Base class for all engine errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(DatabaseError):
    """Command text matches no grammar production.

    Attributes:
        token: The offending token (``<end of line>`` if input ended early).
    """

    END_OF_LINE = "<end of line>"

    def __init__(self, token: str, message: str | None = None) -> None:
        self.token = token
        super().__init__(message or f"Unexpected token '{token}'")


class SchemaError(DatabaseError):
    """Invalid CREATE TABLE specification."""


class TableExistsError(DatabaseError):
    """A table with this name is already tracked by the catalog."""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' already exists")


class TableNotFoundError(DatabaseError):
    """No table with this name is tracked by the catalog."""

    def __init__(self, table_name: str) -> None:
        self.table_name = table_name
        super().__init__(f"Table '{table_name}' does not exist")


class ColumnNotFoundError(DatabaseError):
    """Column is not part of the table schema."""

    def __init__(self, table_name: str, column: str) -> None:
        self.table_name = table_name
        self.column = column
        super().__init__(f"Column '{column}' not found in table '{table_name}'")


class TypeMismatchError(DatabaseError):
    """A value or predicate disagrees with a column's declared type."""


class ArityMismatchError(DatabaseError):
    """INSERT supplied the wrong number of values."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Column count mismatch: expected {expected} values, got {actual}")


class CorruptRecordError(DatabaseError):
    """A persisted record violates the table invariants."""


class StorageError(DatabaseError):
    """The underlying storage medium failed."""
