"""Application layer for the columnar database.

The application layer orchestrates domain logic to fulfill commands.

Exports:
    - ColumnarDatabase: Main entry point for the database
    - CommandExecutor: Runs parsed commands against the catalog
    - ExecutionResult: Result of one command
    - Row: A materialized row of typed values
"""

from columnar_db.application.database import ColumnarDatabase
from columnar_db.application.executor import CommandExecutor, ExecutionResult, Row

__all__ = [
    "ColumnarDatabase",
    "CommandExecutor",
    "ExecutionResult",
    "Row",
]
