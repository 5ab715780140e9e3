"""Value objects for the columnar database domain.

Exports:
    - ColumnType: Declarable column types (int, float, string)
    - Integer32, Float32, String: Tagged scalar value variants
    - Value: Union of the value variants
    - parse_value, parse_column_type: Token constructors
"""

from columnar_db.domain.value_objects.values import (
    INT32_MAX,
    INT32_MIN,
    VALUE_TYPES,
    ColumnType,
    Float32,
    Integer32,
    String,
    Value,
    parse_column_type,
    parse_value,
)

__all__ = [
    "ColumnType",
    "Integer32",
    "Float32",
    "String",
    "Value",
    "VALUE_TYPES",
    "INT32_MIN",
    "INT32_MAX",
    "parse_value",
    "parse_column_type",
]
