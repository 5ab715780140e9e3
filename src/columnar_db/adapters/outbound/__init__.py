"""Outbound adapters - implementations of outbound ports.

These adapters implement durable table storage behind the TableStore port.
"""

from columnar_db.adapters.outbound.json_table_store import JsonFileTableStore
from columnar_db.adapters.outbound.memory_table_store import InMemoryTableStore
from columnar_db.adapters.outbound.record_codec import (
    table_from_record,
    table_to_record,
    value_from_record,
    value_to_record,
)

__all__ = [
    "JsonFileTableStore",
    "InMemoryTableStore",
    "table_to_record",
    "table_from_record",
    "value_to_record",
    "value_from_record",
]
