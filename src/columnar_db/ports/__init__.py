"""Ports layer - interfaces between the domain and the outside world."""

from columnar_db.ports.outbound import TableStore

__all__ = [
    "TableStore",
]
