"""File-based table store adapter.

Implements the TableStore port with one pretty-printed JSON file per
table. Every save rewrites the whole file; there is no append path and
no write-ahead log.

Directory structure:
    data_dir/
        users.json
        orders.json

Durability:
    Each save is flushed and, with ``sync_mode="fsync"``, fsync'd before
    returning. Writes truncate in place, so a crash mid-write can leave a
    corrupt record; the next load reports it as CorruptRecordError.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Literal

from columnar_db.adapters.outbound.record_codec import table_from_record, table_to_record
from columnar_db.domain.entities import Table
from columnar_db.domain.errors import CorruptRecordError, StorageError, TableNotFoundError
from columnar_db.infrastructure.logging import get_logger


RECORD_SUFFIX = ".json"

logger = get_logger(__name__)


class JsonFileTableStore:
    """JSON-file implementation of the TableStore port.

    Attributes:
        data_dir: Directory holding one ``<name>.json`` record per table.
    """

    def __init__(
        self,
        data_dir: str | Path,
        sync_mode: Literal["fsync", "none"] = "fsync",
        indent: int = 2,
    ) -> None:
        """Initialize the store, creating ``data_dir`` if needed.

        Raises:
            StorageError: If the directory cannot be created.
        """
        self._data_dir = Path(data_dir)
        self._sync_mode = sync_mode
        self._indent = indent
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create data directory {self._data_dir}: {e}") from e

    @property
    def data_dir(self) -> Path:
        """Root data directory."""
        return self._data_dir

    def _record_path(self, name: str) -> Path | None:
        """Get the record path for a table, or None if the name can't be a file stem."""
        if not name or name in (".", "..") or "/" in name or "\\" in name or "\0" in name:
            return None
        return self._data_dir / f"{name}{RECORD_SUFFIX}"

    def save(self, table: Table) -> None:
        """Overwrite the table's record with its full contents."""
        path = self._record_path(table.name)
        if path is None:
            raise StorageError(f"Table name '{table.name}' cannot be stored as a file")

        document = table_to_record(table)
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=self._indent, ensure_ascii=False)
                f.flush()
                if self._sync_mode == "fsync":
                    os.fsync(f.fileno())
        except OSError as e:
            raise StorageError(f"Failed to write record for '{table.name}': {e}") from e

        logger.debug("record_saved", table=table.name, rows=table.row_count())

    def load(self, name: str) -> Table:
        """Read and validate a table record."""
        path = self._record_path(name)
        if path is None or not path.is_file():
            raise TableNotFoundError(name)

        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except (ValueError, RecursionError) as e:
            # ValueError covers JSONDecodeError, UnicodeDecodeError and oversized int literals
            logger.error("record_corrupt", table=name, reason=str(e))
            raise CorruptRecordError(f"Record for '{name}' is not valid JSON: {e}") from e
        except OSError as e:
            raise StorageError(f"Failed to read record for '{name}': {e}") from e

        try:
            table = table_from_record(document)
        except CorruptRecordError as e:
            logger.error("record_corrupt", table=name, reason=e.message)
            raise

        if table.name != name:
            logger.error("record_corrupt", table=name, reason="name mismatch")
            raise CorruptRecordError(
                f"Record '{path.name}' holds table '{table.name}', expected '{name}'"
            )

        logger.debug("record_loaded", table=name, rows=table.row_count())
        return table

    def delete(self, name: str) -> None:
        """Remove a table record."""
        path = self._record_path(name)
        if path is None:
            raise TableNotFoundError(name)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise TableNotFoundError(name) from e
        except OSError as e:
            raise StorageError(f"Failed to delete record for '{name}': {e}") from e

        logger.debug("record_deleted", table=name)

    def exists(self, name: str) -> bool:
        """Check whether a record exists."""
        path = self._record_path(name)
        return path is not None and path.is_file()

    def list(self) -> list[str]:
        """List stored table names in lexicographic order."""
        try:
            return sorted(
                path.stem
                for path in self._data_dir.glob(f"*{RECORD_SUFFIX}")
                if path.is_file()
            )
        except OSError as e:
            raise StorageError(f"Failed to list records in {self._data_dir}: {e}") from e
