"""Adapters layer - concrete implementations of port interfaces.

Adapters provide the actual implementations:
- Inbound adapters: Handle incoming requests (command text, REPL, REST)
- Outbound adapters: Implement external dependencies (table records on disk)
"""

from columnar_db.adapters.outbound import (
    InMemoryTableStore,
    JsonFileTableStore,
)

__all__ = [
    # Outbound adapters
    "JsonFileTableStore",
    "InMemoryTableStore",
]
