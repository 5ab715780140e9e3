"""Domain services.

Exports:
    - Catalog: Set of known tables, backed 1:1 by persisted records
"""

from columnar_db.domain.services.catalog import Catalog

__all__ = [
    "Catalog",
]
