"""
Serialize the rows of one table as a JSON array
"""

from typing import Any, Dict, Iterable, Iterator, List, TextIO
import json
import logging

from models.row import Row
from schemas.table import TableSchema
from export.projector import RowProjector
from core.exceptions import SerializationError

logger = logging.getLogger(__name__)


def dumps(value: Any) -> str:
    """
    Compact JSON encoding shared by every output mode.

    Non-finite floats never reach the encoder (the formatter replaces them
    with strings), so allow_nan=False turns any leak into an error.
    """
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


class TableSerializer:
    """
    Serialize a table in one of two modes with identical output.

    Modes:
    - Materialized: serialize() returns the list of row objects
    - Streaming: write() encodes each row and writes it to a sink as soon
      as it is projected, holding no more than one row in memory
    """

    def __init__(self, projector: RowProjector):
        self.projector = projector

    def serialize(self, schema: TableSchema, rows: Iterable[Row]) -> List[Dict[str, Any]]:
        """Project every row in cursor order"""
        return [self.projector.project(row, schema) for row in rows]

    def iter_json_rows(self, schema: TableSchema, rows: Iterable[Row]) -> Iterator[str]:
        """Yield the encoded JSON text of each row"""
        for row in rows:
            obj = self.projector.project(row, schema)
            try:
                yield dumps(obj)
            except (TypeError, ValueError) as e:
                raise SerializationError(
                    "Row could not be encoded as JSON",
                    context={
                        "table_name": schema.name,
                        "row_index": row.index
                    },
                    original_exception=e
                )

    def write(self, schema: TableSchema, rows: Iterable[Row], sink: TextIO) -> int:
        """
        Stream a table as a JSON array.

        Rows are separated by a single comma with no trailing comma.

        Returns:
            Number of rows written
        """
        count = 0
        sink.write("[")
        for text in self.iter_json_rows(schema, rows):
            if count:
                sink.write(",")
            sink.write(text)
            count += 1
        sink.write("]")

        logger.debug(f"Streamed {count} rows from {schema.name}")
        return count
