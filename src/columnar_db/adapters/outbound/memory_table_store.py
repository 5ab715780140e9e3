"""In-memory table store adapter.

A dict-backed implementation of the TableStore port for testing and
development. Records are kept as encoded documents, so a load always
returns a fresh Table and exercises the same codec as the file store.
Data is not persisted across restarts.
"""

from __future__ import annotations

import copy
from typing import Any

from columnar_db.adapters.outbound.record_codec import table_from_record, table_to_record
from columnar_db.domain.entities import Table
from columnar_db.domain.errors import TableNotFoundError


class InMemoryTableStore:
    """In-memory implementation of the TableStore port."""

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._records: dict[str, dict[str, Any]] = {}

    def save(self, table: Table) -> None:
        """Store the encoded table."""
        self._records[table.name] = table_to_record(table)

    def load(self, name: str) -> Table:
        """Decode a stored table."""
        document = self._records.get(name)
        if document is None:
            raise TableNotFoundError(name)
        return table_from_record(copy.deepcopy(document))

    def delete(self, name: str) -> None:
        """Drop a stored table."""
        if self._records.pop(name, None) is None:
            raise TableNotFoundError(name)

    def exists(self, name: str) -> bool:
        """Check whether a table is stored."""
        return name in self._records

    def list(self) -> list[str]:
        """List stored table names, sorted."""
        return sorted(self._records)

    def put_raw(self, name: str, document: dict[str, Any]) -> None:
        """Store a raw document as-is (for simulating foreign or damaged records)."""
        self._records[name] = document
