"""Domain entities for the columnar database.

Exports:
    - Table: Schema plus column-major storage for one table
    - validate_identifier: Name check shared by tables and columns
"""

from columnar_db.domain.entities.table import Table, validate_identifier

__all__ = [
    "Table",
    "validate_identifier",
]
