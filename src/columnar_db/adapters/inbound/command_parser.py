"""Command parser for the columnar database text protocol.

Each input line is split on whitespace and matched against a fixed set of
productions. Keywords are case-sensitive uppercase.

Supported commands:
    - CREATE TABLE <name> <col:type>...
    - DROP TABLE <name>
    - SHOW TABLES
    - INSERT <table> <v1> <v2> ...
    - SELECT * FROM <table> [WHERE <col> = <int>]
    - DELETE FROM <table> WHERE id = <int>
    - COUNT <table>
    - HELP

The parser only checks shape. Column types, value types and arity are
validated against the schema by the executor.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from columnar_db.domain.errors import ParseError


class CommandType(Enum):
    """Types of commands."""

    CREATE_TABLE = "create_table"
    DROP_TABLE = "drop_table"
    SHOW_TABLES = "show_tables"
    INSERT = "insert"
    SELECT = "select"
    DELETE = "delete"
    COUNT = "count"
    HELP = "help"


@dataclass
class ColumnSpec:
    """``name:type`` pair from CREATE TABLE, type still unresolved."""

    name: str
    type_token: str


@dataclass
class EqualsPredicate:
    """``WHERE <column> = <literal>``; the literal is kept as a raw token."""

    column: str
    literal: str

    def __str__(self) -> str:
        return f"{self.column} = {self.literal}"


@dataclass
class Command:
    """Base class for parsed commands."""

    @property
    def command_type(self) -> CommandType:
        raise NotImplementedError


@dataclass
class CreateTableCommand(Command):
    table_name: str
    columns: list[ColumnSpec] = field(default_factory=list)

    @property
    def command_type(self) -> CommandType:
        return CommandType.CREATE_TABLE


@dataclass
class DropTableCommand(Command):
    table_name: str

    @property
    def command_type(self) -> CommandType:
        return CommandType.DROP_TABLE


@dataclass
class ShowTablesCommand(Command):
    @property
    def command_type(self) -> CommandType:
        return CommandType.SHOW_TABLES


@dataclass
class InsertCommand(Command):
    table_name: str
    values: list[str] = field(default_factory=list)

    @property
    def command_type(self) -> CommandType:
        return CommandType.INSERT


@dataclass
class SelectCommand(Command):
    table_name: str
    predicate: EqualsPredicate | None = None

    @property
    def command_type(self) -> CommandType:
        return CommandType.SELECT


@dataclass
class DeleteCommand(Command):
    table_name: str
    predicate: EqualsPredicate

    @property
    def command_type(self) -> CommandType:
        return CommandType.DELETE


@dataclass
class CountCommand(Command):
    table_name: str

    @property
    def command_type(self) -> CommandType:
        return CommandType.COUNT


@dataclass
class HelpCommand(Command):
    @property
    def command_type(self) -> CommandType:
        return CommandType.HELP


DELETE_KEY_COLUMN = "id"

HELP_TEXT = """\
DDL:
  CREATE TABLE <name> <col:type>...   (type: int | float | string)
  DROP TABLE <name>
  SHOW TABLES

DML:
  INSERT <table> <v1> <v2> ...
  SELECT * FROM <table>
  SELECT * FROM <table> WHERE <col> = <int>
  DELETE FROM <table> WHERE id = <int>
  COUNT <table>

Other:
  HELP
  EXIT"""


class _TokenStream:
    """Cursor over the whitespace tokens of one line."""

    def __init__(self, tokens: list[str]) -> None:
        self._tokens = tokens
        self._pos = 0

    def peek(self) -> str | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def take(self) -> str:
        """Consume any token."""
        token = self.peek()
        if token is None:
            raise ParseError(ParseError.END_OF_LINE, "Unexpected end of command")
        self._pos += 1
        return token

    def expect(self, keyword: str) -> None:
        """Consume a token that must equal ``keyword``."""
        token = self.take()
        if token != keyword:
            raise ParseError(token, f"Expected '{keyword}', got '{token}'")

    def rest(self) -> list[str]:
        """Consume all remaining tokens."""
        remaining = self._tokens[self._pos:]
        self._pos = len(self._tokens)
        return remaining

    def end(self) -> None:
        """Require that the line is fully consumed."""
        token = self.peek()
        if token is not None:
            raise ParseError(token, f"Unexpected trailing token '{token}'")


class CommandParser:
    """Parser for the columnar database command grammar.

    Example:
        >>> parser = CommandParser()
        >>> parser.parse("SELECT * FROM users WHERE id = 1")
        SelectCommand(table_name='users', predicate=EqualsPredicate(column='id', literal='1'))
    """

    def parse(self, line: str) -> Command:
        """Parse one line into a command.

        Args:
            line: Raw command text.

        Returns:
            The parsed command.

        Raises:
            ParseError: If the line matches no production.
        """
        tokens = _TokenStream(line.split())
        keyword = tokens.peek()
        if keyword is None:
            raise ParseError(ParseError.END_OF_LINE, "Empty command")

        handler = self._handlers.get(keyword)
        if handler is None:
            raise ParseError(keyword, f"Unknown command '{keyword}'")

        tokens.take()
        command = handler(self, tokens)
        tokens.end()
        return command

    def _parse_create(self, tokens: _TokenStream) -> Command:
        tokens.expect("TABLE")
        table_name = tokens.take()
        columns = [self._parse_column_spec(token) for token in tokens.rest()]
        return CreateTableCommand(table_name=table_name, columns=columns)

    @staticmethod
    def _parse_column_spec(token: str) -> ColumnSpec:
        parts = token.split(":")
        if len(parts) != 2 or not parts[0] or not parts[1]:
            raise ParseError(
                token, f"Column '{token}' format is invalid. Use name:type"
            )
        return ColumnSpec(name=parts[0], type_token=parts[1])

    def _parse_drop(self, tokens: _TokenStream) -> Command:
        tokens.expect("TABLE")
        return DropTableCommand(table_name=tokens.take())

    def _parse_show(self, tokens: _TokenStream) -> Command:
        tokens.expect("TABLES")
        return ShowTablesCommand()

    def _parse_insert(self, tokens: _TokenStream) -> Command:
        table_name = tokens.take()
        return InsertCommand(table_name=table_name, values=tokens.rest())

    def _parse_select(self, tokens: _TokenStream) -> Command:
        tokens.expect("*")
        tokens.expect("FROM")
        table_name = tokens.take()
        if tokens.peek() is None:
            return SelectCommand(table_name=table_name)
        return SelectCommand(table_name=table_name, predicate=self._parse_where(tokens))

    def _parse_delete(self, tokens: _TokenStream) -> Command:
        tokens.expect("FROM")
        table_name = tokens.take()
        predicate = self._parse_where(tokens)
        if predicate.column != DELETE_KEY_COLUMN:
            raise ParseError(
                predicate.column,
                f"DELETE only supports WHERE {DELETE_KEY_COLUMN} = <int>",
            )
        return DeleteCommand(table_name=table_name, predicate=predicate)

    @staticmethod
    def _parse_where(tokens: _TokenStream) -> EqualsPredicate:
        tokens.expect("WHERE")
        column = tokens.take()
        tokens.expect("=")
        return EqualsPredicate(column=column, literal=tokens.take())

    def _parse_count(self, tokens: _TokenStream) -> Command:
        return CountCommand(table_name=tokens.take())

    def _parse_help(self, tokens: _TokenStream) -> Command:
        return HelpCommand()

    _handlers = {
        "CREATE": _parse_create,
        "DROP": _parse_drop,
        "SHOW": _parse_show,
        "INSERT": _parse_insert,
        "SELECT": _parse_select,
        "DELETE": _parse_delete,
        "COUNT": _parse_count,
        "HELP": _parse_help,
    }
