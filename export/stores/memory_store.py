"""
In-memory store with snapshot isolation
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple
import logging

from export.base import DataStore, StoreSnapshot
from models.row import Row
from schemas.table import TableSchema
from core.exceptions import (
    ConfigurationError,
    ResourceAcquisitionError,
    RowAccessError,
    SchemaResolutionError
)

logger = logging.getLogger(__name__)


class MemoryStore(DataStore):
    """
    Store tables in memory.

    Supports:
    - Tables with a declared schema, or without one (schema resolution fails)
    - Snapshots that keep observing the rows present when they were opened
    - Counting open snapshots, to check resource release
    """

    def __init__(self):
        self._tables: Dict[str, Tuple[Optional[TableSchema], List[Row]]] = {}
        self.open_snapshots = 0
        self.snapshots_opened = 0
        self.closed = False

    def add_table(
        self,
        schema_or_name,
        rows: Optional[Sequence[Any]] = None
    ) -> "MemoryStore":
        """
        Register a table.

        Args:
            schema_or_name: TableSchema, or a bare table name for a table
                whose schema cannot be resolved
            rows: Row objects, or value mappings indexed by position
        """
        if isinstance(schema_or_name, TableSchema):
            name, schema = schema_or_name.name, schema_or_name
        else:
            name, schema = str(schema_or_name), None

        if name in self._tables:
            raise ConfigurationError(
                "Table already registered",
                context={"table_name": name}
            )

        self._tables[name] = (schema, [])
        for row in rows or []:
            self.insert(name, row)
        return self

    def insert(self, table_name: str, row: Any) -> Row:
        """Append a row; mappings get the next positional index"""
        if table_name not in self._tables:
            raise ConfigurationError(
                "Unknown table",
                context={"table_name": table_name}
            )
        rows = self._tables[table_name][1]
        if not isinstance(row, Row):
            row = Row(index=len(rows), values=row)
        rows.append(row)
        return row

    def close(self):
        """Close the store; new snapshots can no longer be opened"""
        self.closed = True

    def open_snapshot(self) -> "MemorySnapshot":
        if self.closed:
            raise ResourceAcquisitionError(
                "Store is closed",
                context={"store": self.describe()}
            )

        # Freeze row lists; later inserts are invisible to this snapshot
        tables = {
            name: (schema, tuple(rows))
            for name, (schema, rows) in self._tables.items()
        }
        self.open_snapshots += 1
        self.snapshots_opened += 1
        logger.debug(f"Opened snapshot of {len(tables)} tables")
        return MemorySnapshot(self, tables)

    def _snapshot_released(self):
        self.open_snapshots -= 1


class MemorySnapshot(StoreSnapshot):
    """Frozen view of a MemoryStore"""

    def __init__(self, store: MemoryStore, tables: Mapping[str, Tuple[Optional[TableSchema], Tuple[Row, ...]]]):
        super().__init__()
        self._store = store
        self._tables = tables

    def table_names(self) -> List[str]:
        return list(self._tables)

    def get_schema(self, table_name: str) -> TableSchema:
        schema = self._tables.get(table_name, (None, ()))[0]
        if schema is None:
            raise SchemaResolutionError(
                "No schema declared for table",
                context={"table_name": table_name}
            )
        return schema

    def iter_rows(self, schema: TableSchema) -> Iterator[Row]:
        self._check_open(schema.name)
        if schema.name not in self._tables:
            raise RowAccessError(
                "Unknown table",
                context={"table_name": schema.name}
            )
        for row in self._tables[schema.name][1]:
            self._check_open(schema.name)
            yield row

    def get_row(self, table_name: str, index: int) -> Row:
        self._check_open(table_name)
        for row in self._tables.get(table_name, (None, ()))[1]:
            if row.index == index:
                return row
        raise RowAccessError(
            "Row not found",
            context={"table_name": table_name, "row_index": index}
        )

    def _check_open(self, table_name: str):
        if self.closed:
            raise RowAccessError(
                "Snapshot is closed",
                context={"table_name": table_name}
            )

    def _release(self):
        self._store._snapshot_released()
