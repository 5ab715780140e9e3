"""Inbound adapters for the columnar database.

Inbound adapters handle incoming requests and convert them to
internal domain operations.

Exports:
    Command Parser:
        - CommandParser: Parser that converts command lines to commands
        - Command and its subclasses: Parsed command forms
        - ParseError: Exception for grammar mismatches

The REPL (``repl``) and REST API (``rest_api``) modules sit on top of the
application layer and are imported directly from their modules.
"""

from columnar_db.adapters.inbound.command_parser import (
    HELP_TEXT,
    ColumnSpec,
    Command,
    CommandParser,
    CommandType,
    CountCommand,
    CreateTableCommand,
    DeleteCommand,
    DropTableCommand,
    EqualsPredicate,
    HelpCommand,
    InsertCommand,
    SelectCommand,
    ShowTablesCommand,
)
from columnar_db.domain.errors import ParseError

__all__ = [
    "CommandParser",
    "ParseError",
    "HELP_TEXT",
    "CommandType",
    "Command",
    "ColumnSpec",
    "EqualsPredicate",
    "CreateTableCommand",
    "DropTableCommand",
    "ShowTablesCommand",
    "InsertCommand",
    "SelectCommand",
    "DeleteCommand",
    "CountCommand",
    "HelpCommand",
]
