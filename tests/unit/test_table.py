"""Unit tests for the columnar Table entity."""

from __future__ import annotations

import pytest

from columnar_db.domain.entities import Table
from columnar_db.domain.errors import (
    ArityMismatchError,
    ColumnNotFoundError,
    CorruptRecordError,
    SchemaError,
    TypeMismatchError,
)
from columnar_db.domain.value_objects import ColumnType, Float32, Integer32, String


def _column_lengths(table: Table) -> set[int]:
    return {len(table.data[column]) for column in table.columns}


@pytest.mark.unit
class TestTableCreate:
    """Tests for Table.create."""

    def test_create_users(self) -> None:
        """Schema and empty storage are set from the specs."""
        table = Table.create("users", [("id", "int"), ("name", "string"), ("age", "int")])

        assert table.name == "users"
        assert table.columns == ["id", "name", "age"]
        assert table.fields == {
            "id": ColumnType.INTEGER,
            "name": ColumnType.TEXT,
            "age": ColumnType.INTEGER,
        }
        assert table.data == {"id": [], "name": [], "age": []}
        assert table.row_count() == 0

    def test_create_accepts_column_types(self) -> None:
        """ColumnType members work as type specs."""
        table = Table.create("m", [("x", ColumnType.FLOAT)])
        assert table.fields["x"] is ColumnType.FLOAT

    def test_duplicate_column(self) -> None:
        """Duplicate column names are rejected."""
        with pytest.raises(SchemaError, match="Duplicate column 'id'"):
            Table.create("t", [("id", "int"), ("id", "string")])

    def test_unknown_type(self) -> None:
        """Unknown column types are rejected."""
        with pytest.raises(SchemaError, match="Unknown column type 'bool'"):
            Table.create("t", [("flag", "bool")])

    def test_no_columns(self) -> None:
        """A table needs at least one column."""
        with pytest.raises(SchemaError, match="at least one column"):
            Table.create("t", [])

    @pytest.mark.parametrize("name", ["../etc", "a/b", "1abc", "has-dash", ""])
    def test_invalid_table_name(self, name: str) -> None:
        """Table names must be identifiers."""
        with pytest.raises(SchemaError):
            Table.create(name, [("id", "int")])

    def test_invalid_column_name(self) -> None:
        """Column names must be identifiers."""
        with pytest.raises(SchemaError):
            Table.create("t", [("bad.name", "int")])


@pytest.mark.unit
class TestTableMutation:
    """Tests for append_row, parse_row and delete_indices."""

    @pytest.fixture
    def table(self) -> Table:
        return Table.create("users", [("id", "int"), ("name", "string"), ("score", "float")])

    def test_append_row(self, table: Table) -> None:
        """append_row adds one value to every column."""
        table.append_row([Integer32(1), String("harsh"), Float32(9.5)])

        assert table.row_count() == 1
        assert table.materialize_row(0) == (Integer32(1), String("harsh"), Float32(9.5))

    def test_append_wrong_arity(self, table: Table) -> None:
        """append_row needs one value per column."""
        with pytest.raises(ArityMismatchError) as exc_info:
            table.append_row([Integer32(1), String("x")])

        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2
        assert table.row_count() == 0

    def test_append_wrong_tag_leaves_table_unchanged(self, table: Table) -> None:
        """A late type error must not leave earlier columns appended."""
        with pytest.raises(TypeMismatchError):
            table.append_row([Integer32(1), String("x"), Integer32(3)])

        assert table.row_count() == 0
        assert _column_lengths(table) == {0}

    def test_parse_row(self, table: Table) -> None:
        """parse_row converts tokens by column type."""
        values = table.parse_row(["7", "amy", "1.25"])
        assert values == [Integer32(7), String("amy"), Float32(1.25)]

    def test_parse_row_type_mismatch_names_column(self, table: Table) -> None:
        """Type errors name the failing column."""
        with pytest.raises(TypeMismatchError, match="Column 'id'"):
            table.parse_row(["seven", "amy", "1.25"])

    def test_parse_row_arity(self, table: Table) -> None:
        """parse_row needs one token per column."""
        with pytest.raises(ArityMismatchError):
            table.parse_row(["1", "a", "1.0", "extra"])

    def test_delete_indices_keeps_alignment(self, table: Table) -> None:
        """Deleting keeps the columns aligned."""
        for i in range(5):
            table.append_row([Integer32(i), String(f"n{i}"), Float32(i)])

        removed = table.delete_indices([1, 3])

        assert removed == 2
        assert _column_lengths(table) == {3}
        assert [row[0] for row in table.rows()] == [Integer32(0), Integer32(2), Integer32(4)]
        assert [row[1] for row in table.rows()] == [String("n0"), String("n2"), String("n4")]

    def test_delete_ignores_out_of_range(self, table: Table) -> None:
        """Out of range indices are ignored."""
        table.append_row([Integer32(1), String("a"), Float32(1)])
        assert table.delete_indices([5, -1]) == 0
        assert table.row_count() == 1

    def test_materialize_out_of_range(self, table: Table) -> None:
        """Materializing a missing row raises."""
        with pytest.raises(IndexError):
            table.materialize_row(0)


@pytest.mark.unit
class TestTableScan:
    """Tests for scan_equals."""

    @pytest.fixture
    def table(self) -> Table:
        table = Table.create("t", [("id", "int"), ("name", "string")])
        for i, name in [(1, "a"), (2, "b"), (1, "c"), (3, "d")]:
            table.append_row([Integer32(i), String(name)])
        return table

    def test_scan_finds_all_matches(self, table: Table) -> None:
        """Every matching index is yielded."""
        assert list(table.scan_equals("id", Integer32(1))) == [0, 2]

    def test_scan_no_match(self, table: Table) -> None:
        """No match yields nothing."""
        assert list(table.scan_equals("id", Integer32(99))) == []

    def test_scan_is_lazy(self, table: Table) -> None:
        """Scanning yields indices lazily."""
        scan = table.scan_equals("id", Integer32(1))
        assert next(scan) == 0

    def test_scan_is_repeatable(self, table: Table) -> None:
        """A scan can be run again."""
        first = list(table.scan_equals("id", Integer32(1)))
        second = list(table.scan_equals("id", Integer32(1)))
        assert first == second

    def test_scan_compares_tags(self, table: Table) -> None:
        """Text "1" never matches integer 1."""
        assert list(table.scan_equals("id", String("1"))) == []

    def test_scan_unknown_column_raises_eagerly(self, table: Table) -> None:
        """Unknown columns fail before iteration."""
        with pytest.raises(ColumnNotFoundError):
            table.scan_equals("missing", Integer32(1))


@pytest.mark.unit
class TestTableVerify:
    """Tests for invariant checking."""

    def test_valid_table(self) -> None:
        """A consistent table verifies."""
        table = Table.create("t", [("id", "int")])
        table.append_row([Integer32(1)])
        table.verify()

    def test_key_sets_disagree(self) -> None:
        """fields and columns must name the same set."""
        table = Table(
            name="t",
            fields={"id": ColumnType.INTEGER},
            columns=["id", "name"],
            data={"id": [], "name": []},
        )
        with pytest.raises(CorruptRecordError, match="disagree"):
            table.verify()

    def test_ragged_columns(self) -> None:
        """All columns must have the same length."""
        table = Table(
            name="t",
            fields={"a": ColumnType.INTEGER, "b": ColumnType.INTEGER},
            columns=["a", "b"],
            data={"a": [Integer32(1)], "b": []},
        )
        with pytest.raises(CorruptRecordError, match="lengths differ"):
            table.verify()

    def test_mixed_types(self) -> None:
        """Values must match their column type."""
        table = Table(
            name="t",
            fields={"a": ColumnType.INTEGER},
            columns=["a"],
            data={"a": [Integer32(1), String("x")]},
        )
        with pytest.raises(CorruptRecordError, match="row 1 of column 'a'"):
            table.verify()

    def test_duplicate_columns(self) -> None:
        """Column names must be unique."""
        table = Table(
            name="t",
            fields={"a": ColumnType.INTEGER},
            columns=["a", "a"],
            data={"a": []},
        )
        with pytest.raises(CorruptRecordError, match="duplicate"):
            table.verify()
