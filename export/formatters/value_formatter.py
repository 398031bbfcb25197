"""
Convert typed column values into their canonical JSON form
"""

from typing import Any, Optional, Union
from datetime import date, datetime, time
import math

from models.base import ColumnType, ColumnTypeLike, SCALAR_LIST_TYPES, column_type_name
from models.row import LinkList
from schemas.table import ColumnSpec
from export.formatters.date_formatter import StrftimeDateFormatter, epoch_millis

DEFAULT_NULL_VALUE = "[null]"

JSONScalar = Union[str, int, float, bool]

NAN = "NaN"
POSITIVE_INFINITY = "Infinity"
NEGATIVE_INFINITY = "-Infinity"


class ValueFormatter:
    """
    Format a single column value according to its declared type.

    Handles:
    - Null values (replaced by the configured null sentinel)
    - Non-finite floats (written as "NaN" / "Infinity" / "-Infinity")
    - Dates ("<formatted date> (<epoch millis>)")
    - Links (target row index) and link lists ("<table>{id,id}")
    - Scalar lists ("<TYPE>{v,v}")
    - Unknown types (diagnostic marker, never an error)

    Every result is a single JSON scalar so each column maps to exactly
    one key in the row object.
    """

    def __init__(self, null_value: str = DEFAULT_NULL_VALUE, date_formatter=None):
        self.null_value = null_value
        self.date_formatter = date_formatter or StrftimeDateFormatter()

    def format_column(self, column: ColumnSpec, value: Any) -> JSONScalar:
        """Format a value using its column spec"""
        return self.format(column.column_type, value, target_table=column.target_table)

    def format(
        self,
        column_type: ColumnTypeLike,
        value: Any,
        target_table: Optional[str] = None
    ) -> JSONScalar:
        """
        Format a raw value.

        Args:
            column_type: Declared type of the column
            value: Raw value, None meaning null
            target_table: Linked table (LIST columns)

        Returns:
            JSON-serializable scalar
        """
        if column_type in (ColumnType.INTEGER, ColumnType.BOOLEAN, ColumnType.STRING):
            return self.null_value if value is None else value

        elif column_type == ColumnType.BINARY:
            return self.null_value if value is None else str(bytes(value))

        elif column_type in (ColumnType.FLOAT, ColumnType.DOUBLE):
            return self.null_value if value is None else self._format_float(value)

        elif column_type in (ColumnType.DATE, ColumnType.UNSUPPORTED_DATE):
            return self.null_value if value is None else self.format_date(value)

        elif column_type == ColumnType.OBJECT:
            return self.null_value if value is None else int(value)

        elif column_type == ColumnType.LIST:
            # Link lists are never null; a missing list is an empty one
            return self.format_link_list(value, target_table)

        elif column_type in SCALAR_LIST_TYPES:
            return self.null_value if value is None else self.format_value_list(value, column_type)

        else:
            return f"Unknown column type: {column_type_name(column_type)}"

    def format_date(self, value: Union[datetime, date]) -> str:
        value = _as_datetime(value)
        return f"{self.date_formatter.format(value)} ({epoch_millis(value)})"

    @staticmethod
    def format_link_list(value: Any, target_table: Optional[str] = None) -> str:
        """Render a list of links as "<targetTable>{id0,id1,...}" """
        if isinstance(value, LinkList):
            table = value.target_table
            row_ids = value.row_ids
        else:
            table = target_table
            row_ids = value or []

        return f"{table or ''}{{{','.join(str(int(i)) for i in row_ids)}}}"

    @staticmethod
    def format_value_list(values: Any, column_type: ColumnTypeLike) -> str:
        """Render a scalar list as "<TYPE_NAME>{v0,v1,...}" """
        items = ",".join(_scalar_text(v) for v in values)
        return f"{column_type_name(column_type)}{{{items}}}"

    @staticmethod
    def _format_float(value: Any) -> Union[str, float]:
        number = float(value)
        if math.isnan(number):
            return NAN
        if number == math.inf:
            return POSITIVE_INFINITY
        if number == -math.inf:
            return NEGATIVE_INFINITY
        return number


def _as_datetime(value: Union[datetime, date]) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time())


def _scalar_text(value: Any) -> str:
    """Default string form of one element of a scalar list"""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return NAN
        if math.isinf(value):
            return POSITIVE_INFINITY if value > 0 else NEGATIVE_INFINITY
        return repr(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (bytes, bytearray)):
        return str(bytes(value))
    return str(value)
