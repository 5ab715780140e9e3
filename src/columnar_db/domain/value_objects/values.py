"""Typed scalar values and declarable column types.

A stored value is one of three frozen variants, each bound to exactly one
ColumnType. Equality is tag-and-payload equality: ``Integer32(1)`` never
equals ``Float32(1.0)`` or ``String("1")``.

Float32 payloads are rounded to IEEE-754 single precision on construction
and kept as the shortest decimal that maps back to the same single, so
persisted records carry ``0.1`` rather than ``0.10000000149011612``.
"""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Union

from columnar_db.domain.errors import SchemaError, TypeMismatchError


INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")
_FLOAT_LITERAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


class ColumnType(Enum):
    """Declarable column types, keyed by their declaration token."""

    INTEGER = "int"
    FLOAT = "float"
    TEXT = "string"

    @property
    def token(self) -> str:
        """Token used in CREATE TABLE specs and persisted ``fields``."""
        return self.value

    @property
    def tag(self) -> str:
        """Wire tag of values stored under this type."""
        return _TAGS[self]


_TAGS = {
    ColumnType.INTEGER: "Integer32",
    ColumnType.FLOAT: "Float32",
    ColumnType.TEXT: "String",
}


def parse_column_type(token: str) -> ColumnType:
    """Resolve a declaration token (``int``, ``float``, ``string``).

    Raises:
        SchemaError: If the token names no known type.
    """
    try:
        return ColumnType(token)
    except ValueError as e:
        raise SchemaError(
            f"Unknown column type '{token}' (expected one of: int, float, string)"
        ) from e


def _to_float32(value: float) -> float:
    if not math.isfinite(value):
        raise TypeMismatchError(f"Float32 value must be finite, got {value!r}")
    try:
        packed = struct.pack(">f", value)
    except OverflowError as e:
        raise TypeMismatchError(f"Value {value!r} is out of Float32 range") from e

    single = struct.unpack(">f", packed)[0]
    if not math.isfinite(single):
        raise TypeMismatchError(f"Value {value!r} is out of Float32 range")

    # Shortest decimal that rounds to the same single
    for digits in range(1, 10):
        candidate = float(f"{single:.{digits}g}")
        if struct.pack(">f", candidate) == packed:
            return candidate
    return single


@dataclass(frozen=True, slots=True)
class Integer32:
    """Signed 32-bit integer value."""

    value: int

    column_type: ClassVar[ColumnType] = ColumnType.INTEGER

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeMismatchError(f"Integer32 requires an int, got {self.value!r}")
        if not INT32_MIN <= self.value <= INT32_MAX:
            raise TypeMismatchError(f"Value {self.value} is out of Integer32 range")

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True, slots=True)
class Float32:
    """Single-precision floating point value."""

    value: float

    column_type: ClassVar[ColumnType] = ColumnType.FLOAT

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeMismatchError(f"Float32 requires a float, got {self.value!r}")
        try:
            as_float = float(self.value)
        except OverflowError as e:
            raise TypeMismatchError("Integer payload is out of Float32 range") from e
        object.__setattr__(self, "value", _to_float32(as_float))

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True, slots=True)
class String:
    """Text value."""

    value: str

    column_type: ClassVar[ColumnType] = ColumnType.TEXT

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise TypeMismatchError(f"String requires a str, got {self.value!r}")

    def __str__(self) -> str:
        return self.value


Value = Union[Integer32, Float32, String]
"""Closed union of storable scalar values."""

VALUE_TYPES: dict[ColumnType, type[Integer32] | type[Float32] | type[String]] = {
    ColumnType.INTEGER: Integer32,
    ColumnType.FLOAT: Float32,
    ColumnType.TEXT: String,
}


def parse_value(token: str, column_type: ColumnType) -> Value:
    """Build a Value of ``column_type`` from a raw command token.

    Text parsing never fails. Integer tokens are an optional sign followed
    by ASCII digits; float tokens are decimal literals with an optional
    fraction and exponent.

    Raises:
        TypeMismatchError: If the token is not a literal of the target type.
    """
    if column_type is ColumnType.TEXT:
        return String(token)

    if column_type is ColumnType.INTEGER:
        if not _INTEGER_LITERAL.fullmatch(token):
            raise TypeMismatchError(f"Expected an int value, got '{token}'")
        return Integer32(int(token))

    if not _FLOAT_LITERAL.fullmatch(token):
        raise TypeMismatchError(f"Expected a float value, got '{token}'")
    return Float32(float(token))
