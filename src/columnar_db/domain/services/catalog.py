"""Catalog of known tables.

The catalog is the single source of truth for which tables exist. It is
backed 1:1 by records in a TableStore: names are enumerated eagerly when
the catalog is opened, and each table is loaded lazily on first access,
then cached. A corrupt record therefore fails only the commands that
touch that table.

The catalog is an ordinary object passed to its users; nothing about it
is process-global, so independent instances can run side by side over
different stores.
"""

from __future__ import annotations

from typing import Sequence

from columnar_db.domain.entities import Table
from columnar_db.domain.errors import StorageError, TableExistsError, TableNotFoundError
from columnar_db.domain.value_objects import ColumnType
from columnar_db.infrastructure.logging import get_logger
from columnar_db.ports.outbound import TableStore


logger = get_logger(__name__)


class Catalog:
    """Mapping of table name to Table, persisted through a TableStore."""

    def __init__(self, store: TableStore, names: Sequence[str] = ()) -> None:
        """Initialize the catalog.

        Args:
            store: Persistence backend for table records.
            names: Names of tables already present in ``store``.
        """
        self._store = store
        self._names: set[str] = set(names)
        self._tables: dict[str, Table] = {}

    @classmethod
    def open(cls, store: TableStore) -> Catalog:
        """Open a catalog over every record currently in ``store``.

        Raises:
            StorageError: If the store cannot be enumerated.
        """
        names = store.list()
        logger.info("catalog_opened", tables=len(names))
        return cls(store, names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def create_table(
        self,
        name: str,
        specs: Sequence[tuple[str, ColumnType | str]],
    ) -> Table:
        """Create, persist and register an empty table.

        Raises:
            TableExistsError: If ``name`` is already tracked.
            SchemaError: If the column specs are invalid.
            StorageError: If the record cannot be written.
        """
        if name in self._names:
            raise TableExistsError(name)

        table = Table.create(name, specs)
        self._store.save(table)
        self._names.add(name)
        self._tables[name] = table
        logger.info("table_created", table=name, columns=table.columns)
        return table

    def drop_table(self, name: str) -> None:
        """Delete a table's record and forget it.

        The table is not loaded first, so corrupt tables can be dropped.

        Raises:
            TableNotFoundError: If ``name`` is not tracked.
            StorageError: If the record cannot be removed.
        """
        if name not in self._names:
            raise TableNotFoundError(name)

        try:
            self._store.delete(name)
        except TableNotFoundError:
            # Record vanished underneath us; still forget the table.
            logger.warning("table_record_missing", table=name)

        self._names.discard(name)
        self._tables.pop(name, None)
        logger.info("table_dropped", table=name)

    def get(self, name: str) -> Table:
        """Return the table, loading it from the store on first access.

        Raises:
            TableNotFoundError: If ``name`` is not tracked.
            CorruptRecordError: If the stored record is invalid.
            StorageError: If the record cannot be read.
        """
        if name not in self._names:
            raise TableNotFoundError(name)

        table = self._tables.get(name)
        if table is None:
            table = self._store.load(name)
            self._tables[name] = table
        return table

    def save(self, table: Table) -> None:
        """Persist a mutated table in full.

        On a failed write the cached copy is evicted, so the next access
        reloads whatever the store actually holds.

        Raises:
            TableNotFoundError: If the table is not tracked.
            StorageError: If the record cannot be written.
        """
        if table.name not in self._names:
            raise TableNotFoundError(table.name)
        try:
            self._store.save(table)
        except StorageError:
            self._tables.pop(table.name, None)
            logger.error("table_save_failed", table=table.name)
            raise

    def list_names(self) -> list[str]:
        """Return known table names in lexicographic order."""
        return sorted(self._names)
