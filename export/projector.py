"""
Project store rows into ordered JSON objects
"""

from typing import Any, Dict
from models.row import Row
from schemas.table import TableSchema, INDEX_KEY
from export.formatters.value_formatter import ValueFormatter


class RowProjector:
    """
    Build the JSON object of one row.

    The synthetic "index" key always comes first, followed by every schema
    column in declared order. Dict insertion order carries the key order
    through to the encoded JSON.
    """

    def __init__(self, formatter: ValueFormatter):
        self.formatter = formatter

    def project(self, row: Row, schema: TableSchema) -> Dict[str, Any]:
        obj: Dict[str, Any] = {INDEX_KEY: row.index}
        for column in schema.columns:
            obj[column.name] = self.formatter.format_column(column, row.get(column.name))
        return obj
