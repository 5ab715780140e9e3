"""Record codec: Table <-> persisted JSON document.

Document layout (one per table):

    {
      "name": "users",
      "fields": {"id": "int", "name": "string"},
      "columns": ["id", "name"],
      "data": {
        "id": [{"Integer32": 1}],
        "name": [{"String": "harsh"}]
      }
    }

Each tagged value is a single-key object: ``{"Integer32": <int>}``,
``{"Float32": <float>}`` or ``{"String": <text>}``.
"""

from __future__ import annotations

from typing import Any

from columnar_db.domain.entities import Table
from columnar_db.domain.errors import CorruptRecordError, DatabaseError
from columnar_db.domain.value_objects import (
    VALUE_TYPES,
    ColumnType,
    Value,
    parse_column_type,
)


_TYPES_BY_TAG = {column_type.tag: column_type for column_type in ColumnType}


def value_to_record(value: Value) -> dict[str, Any]:
    """Encode a value as its single-key tagged object."""
    return {value.column_type.tag: value.value}


def value_from_record(obj: Any) -> Value:
    """Decode a single-key tagged object.

    Raises:
        CorruptRecordError: If the object is not a known, well-typed tag.
    """
    if not isinstance(obj, dict) or len(obj) != 1:
        raise CorruptRecordError(f"Malformed tagged value: {obj!r}")

    (tag, payload), = obj.items()
    column_type = _TYPES_BY_TAG.get(tag)
    if column_type is None:
        raise CorruptRecordError(f"Unknown value tag '{tag}'")
    try:
        return VALUE_TYPES[column_type](payload)
    except DatabaseError as e:
        raise CorruptRecordError(f"Bad {tag} payload: {e.message}") from e


def table_to_record(table: Table) -> dict[str, Any]:
    """Encode a whole table as a JSON-compatible document."""
    return {
        "name": table.name,
        "fields": {column: table.fields[column].token for column in table.columns},
        "columns": list(table.columns),
        "data": {
            column: [value_to_record(value) for value in table.data[column]]
            for column in table.columns
        },
    }


def table_from_record(doc: Any) -> Table:
    """Decode a document into a Table and re-validate its invariants.

    Raises:
        CorruptRecordError: If the document is malformed or violates an invariant.
    """
    if not isinstance(doc, dict):
        raise CorruptRecordError("Record is not a JSON object")

    missing = [key for key in ("name", "fields", "columns", "data") if key not in doc]
    if missing:
        raise CorruptRecordError(f"Record is missing keys: {', '.join(missing)}")

    name, fields, columns, data = doc["name"], doc["fields"], doc["columns"], doc["data"]
    if not isinstance(name, str):
        raise CorruptRecordError("Record 'name' must be a string")
    if not isinstance(fields, dict) or not isinstance(data, dict):
        raise CorruptRecordError(f"Table '{name}': 'fields' and 'data' must be objects")
    if not isinstance(columns, list) or not all(isinstance(c, str) for c in columns):
        raise CorruptRecordError(f"Table '{name}': 'columns' must be a list of strings")

    try:
        typed_fields = {column: parse_column_type(token) for column, token in fields.items()}
    except DatabaseError as e:
        raise CorruptRecordError(f"Table '{name}': {e.message}") from e

    typed_data: dict[str, list[Value]] = {}
    for column, values in data.items():
        if not isinstance(values, list):
            raise CorruptRecordError(f"Table '{name}': data for '{column}' is not a list")
        typed_data[column] = [value_from_record(obj) for obj in values]

    table = Table(name=name, fields=typed_fields, columns=list(columns), data=typed_data)
    table.verify()
    return table
