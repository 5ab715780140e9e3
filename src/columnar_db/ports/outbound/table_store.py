"""Table store port for whole-table persistence.

This outbound port defines the contract for durable table records.
There are no partial updates: a table is always read in full or
rewritten in full, one record per table keyed by table name.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from columnar_db.domain.entities import Table


class TableStore(Protocol):
    """Protocol for persisting tables as self-contained records.

    Thread Safety:
        None. A single engine instance is expected to drive the store;
        concurrent writers are last-writer-wins.
    """

    @abstractmethod
    def save(self, table: Table) -> None:
        """Overwrite the record for ``table.name`` with the full table.

        Raises:
            StorageError: If the write fails.
        """
        ...

    @abstractmethod
    def load(self, name: str) -> Table:
        """Read a record back into a Table, re-validating its invariants.

        Raises:
            TableNotFoundError: If no record exists.
            CorruptRecordError: If the record is malformed.
            StorageError: If the read fails.
        """
        ...

    @abstractmethod
    def delete(self, name: str) -> None:
        """Remove a record.

        Raises:
            TableNotFoundError: If no record exists.
            StorageError: If the removal fails.
        """
        ...

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Return True if a record exists for ``name``."""
        ...

    @abstractmethod
    def list(self) -> list[str]:
        """Return the names of all stored records, sorted."""
        ...
