from typing import Union
import enum


# ============================================================================
# ENUMS
# ============================================================================

class ColumnType(str, enum.Enum):
    """Declared type tag of a table column"""
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    BINARY = "BINARY"
    DATE = "DATE"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"

    # Links
    OBJECT = "OBJECT"  # single link, value is the target row index
    LIST = "LIST"      # ordered list of links into target_table

    # Scalar value lists
    INTEGER_LIST = "INTEGER_LIST"
    BOOLEAN_LIST = "BOOLEAN_LIST"
    STRING_LIST = "STRING_LIST"
    BINARY_LIST = "BINARY_LIST"
    DATE_LIST = "DATE_LIST"
    FLOAT_LIST = "FLOAT_LIST"
    DOUBLE_LIST = "DOUBLE_LIST"

    # Legacy storage types
    UNSUPPORTED_TABLE = "UNSUPPORTED_TABLE"
    UNSUPPORTED_MIXED = "UNSUPPORTED_MIXED"
    UNSUPPORTED_DATE = "UNSUPPORTED_DATE"


# A column type is either a known tag or the raw name of a type the
# store reported but this package does not know.
ColumnTypeLike = Union[ColumnType, str]

SCALAR_LIST_TYPES = frozenset({
    ColumnType.INTEGER_LIST,
    ColumnType.BOOLEAN_LIST,
    ColumnType.STRING_LIST,
    ColumnType.BINARY_LIST,
    ColumnType.DATE_LIST,
    ColumnType.FLOAT_LIST,
    ColumnType.DOUBLE_LIST,
})


def resolve_column_type(value: ColumnTypeLike) -> ColumnTypeLike:
    """
    Map a type name onto the ColumnType enum.

    Unknown names are returned unchanged so they can be reported as
    unsupported instead of failing the export.
    """
    if isinstance(value, ColumnType):
        return value
    try:
        return ColumnType(str(value).upper())
    except ValueError:
        return str(value)


def column_type_name(value: ColumnTypeLike) -> str:
    """Name of a column type as written into exported values"""
    if isinstance(value, ColumnType):
        return value.value
    return str(value)
