"""Unit tests for the table record codec."""

from __future__ import annotations

from typing import Any

import pytest

from columnar_db.adapters.outbound import (
    table_from_record,
    table_to_record,
    value_from_record,
    value_to_record,
)
from columnar_db.domain.entities import Table
from columnar_db.domain.errors import CorruptRecordError
from columnar_db.domain.value_objects import Float32, Integer32, String


def _users_record() -> dict[str, Any]:
    return {
        "name": "users",
        "fields": {"id": "int", "name": "string", "age": "int"},
        "columns": ["id", "name", "age"],
        "data": {
            "id": [{"Integer32": 1}],
            "name": [{"String": "harsh"}],
            "age": [{"Integer32": 25}],
        },
    }


@pytest.mark.unit
class TestValueCodec:
    """Tests for tagged value encoding."""

    def test_encode(self) -> None:
        """Each value type encodes under its own tag."""
        assert value_to_record(Integer32(1)) == {"Integer32": 1}
        assert value_to_record(Float32(2.5)) == {"Float32": 2.5}
        assert value_to_record(String("x")) == {"String": "x"}

    def test_decode(self) -> None:
        """Each tag decodes to its value type."""
        assert value_from_record({"Integer32": -3}) == Integer32(-3)
        assert value_from_record({"Float32": 0.1}) == Float32(0.1)
        assert value_from_record({"String": "hi"}) == String("hi")

    @pytest.mark.parametrize(
        "obj",
        [
            {"Boolean": True},
            {"Integer32": "1"},
            {"Integer32": 1.5},
            {"Integer32": 2**40},
            {"Float32": 10**400},
            {"String": 5},
            {"Integer32": 1, "String": "x"},
            {},
            [1],
            7,
        ],
    )
    def test_decode_rejects_malformed(self, obj: Any) -> None:
        """Malformed tagged values are corrupt."""
        with pytest.raises(CorruptRecordError):
            value_from_record(obj)


@pytest.mark.unit
class TestTableCodec:
    """Tests for whole-table encoding."""

    def test_encode_layout(self) -> None:
        """Keys and nesting match the persisted record format."""
        table = Table.create("users", [("id", "int"), ("name", "string"), ("age", "int")])
        table.append_row([Integer32(1), String("harsh"), Integer32(25)])

        record = table_to_record(table)

        assert record == _users_record()
        assert list(record) == ["name", "fields", "columns", "data"]

    def test_decode(self) -> None:
        """A full record decodes to a table."""
        table = table_from_record(_users_record())

        assert table.columns == ["id", "name", "age"]
        assert table.materialize_row(0) == (Integer32(1), String("harsh"), Integer32(25))

    def test_round_trip(self) -> None:
        """Encoding then decoding gives back the table."""
        table = Table.create("m", [("x", "float"), ("y", "string"), ("z", "int")])
        for i in range(3):
            table.append_row([Float32(i / 3), String(f"s{i}"), Integer32(-i)])

        assert table_from_record(table_to_record(table)) == table

    def test_decode_field_order_independent_of_columns(self) -> None:
        """Records from writers with unordered field maps still load."""
        record = _users_record()
        record["fields"] = {"age": "int", "id": "int", "name": "string"}

        table = table_from_record(record)

        assert table.columns == ["id", "name", "age"]

    @pytest.mark.parametrize("missing", ["name", "fields", "columns", "data"])
    def test_missing_key(self, missing: str) -> None:
        """A record missing a top-level key names it."""
        record = _users_record()
        del record[missing]
        with pytest.raises(CorruptRecordError, match=missing):
            table_from_record(record)

    def test_unknown_field_type(self) -> None:
        """Unknown column types are corrupt."""
        record = _users_record()
        record["fields"]["age"] = "bigint"
        with pytest.raises(CorruptRecordError):
            table_from_record(record)

    def test_tag_disagrees_with_field(self) -> None:
        """Value tags must match the declared column type."""
        record = _users_record()
        record["data"]["age"] = [{"String": "25"}]
        with pytest.raises(CorruptRecordError):
            table_from_record(record)

    def test_ragged_data(self) -> None:
        """Columns of different lengths are corrupt."""
        record = _users_record()
        record["data"]["age"] = []
        with pytest.raises(CorruptRecordError):
            table_from_record(record)

    def test_not_an_object(self) -> None:
        """The record must be a JSON object."""
        with pytest.raises(CorruptRecordError):
            table_from_record(["users"])
