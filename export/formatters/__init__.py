from export.formatters.value_formatter import ValueFormatter, DEFAULT_NULL_VALUE
from export.formatters.date_formatter import StrftimeDateFormatter, LONG_DATETIME_FORMAT

__all__ = [
    "ValueFormatter",
    "DEFAULT_NULL_VALUE",
    "StrftimeDateFormatter",
    "LONG_DATETIME_FORMAT",
]
