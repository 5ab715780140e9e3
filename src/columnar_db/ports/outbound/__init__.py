"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for external systems that the
engine depends on, such as durable table storage.
"""

from columnar_db.ports.outbound.table_store import TableStore

__all__ = [
    "TableStore",
]
