"""
Relational store read through SQLAlchemy reflection
"""

from typing import Any, Dict, Iterator, List, Optional
from datetime import date, datetime, time
from decimal import Decimal
import json
import logging

from sqlalchemy import MetaData, Table, inspect, select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import NoSuchTableError, SQLAlchemyError
from sqlalchemy.types import (
    Boolean, Date, DateTime, Float, Integer, LargeBinary, Numeric, REAL, String, TypeEngine
)

from export.base import DataStore, StoreSnapshot
from models.base import ColumnType, ColumnTypeLike, SCALAR_LIST_TYPES
from models.row import Row
from schemas.table import ColumnSpec, TableSchema
from core.exceptions import (
    ResourceAcquisitionError,
    RowAccessError,
    SchemaResolutionError
)

logger = logging.getLogger(__name__)


def map_sql_type(sql_type: TypeEngine) -> ColumnTypeLike:
    """
    Map a reflected SQL type onto a column type tag.

    Types with no mapping keep their SQL name and are exported as
    unsupported markers.
    """
    if isinstance(sql_type, Boolean):
        return ColumnType.BOOLEAN
    if isinstance(sql_type, Integer):
        return ColumnType.INTEGER
    if isinstance(sql_type, LargeBinary):
        return ColumnType.BINARY
    if isinstance(sql_type, REAL):
        return ColumnType.FLOAT
    if isinstance(sql_type, (Float, Numeric)):
        return ColumnType.DOUBLE
    if isinstance(sql_type, (DateTime, Date)):
        return ColumnType.DATE
    if isinstance(sql_type, String):
        return ColumnType.STRING
    return str(getattr(sql_type, "__visit_name__", type(sql_type).__name__)).upper()


class _ResolvedTable:
    """Schema plus the reflected table it reads from"""

    def __init__(self, schema: TableSchema, table: Table, index_column: Optional[str]):
        self.schema = schema
        self.table = table
        self.index_column = index_column


class SQLAlchemyStore(DataStore):
    """
    Export tables of a relational database.

    Schema resolution:
    - Columns are reflected and mapped with map_sql_type()
    - A single-column foreign key becomes an OBJECT link to its table
    - A single integer primary key becomes the row index and is not
      exported as a column
    - schema_overrides declares tables explicitly, e.g. link lists or
      scalar lists stored as JSON arrays
    """

    def __init__(self, engine: Engine, schema_overrides: Optional[Dict[str, TableSchema]] = None):
        self.engine = engine
        self.schema_overrides = dict(schema_overrides or {})

    def describe(self) -> str:
        return f"SQLAlchemyStore({self.engine.url.render_as_string(hide_password=True)})"

    def open_snapshot(self) -> "SQLAlchemySnapshot":
        try:
            connection = self.engine.connect()
        except SQLAlchemyError as e:
            raise ResourceAcquisitionError(
                "Failed to connect to database",
                context={"store": self.describe()},
                original_exception=e
            )

        try:
            transaction = connection.begin()
        except SQLAlchemyError as e:
            connection.close()
            raise ResourceAcquisitionError(
                "Failed to begin read transaction",
                context={"store": self.describe()},
                original_exception=e
            )

        logger.debug(f"Opened snapshot of {self.describe()}")
        return SQLAlchemySnapshot(connection, transaction, self.schema_overrides)


class SQLAlchemySnapshot(StoreSnapshot):
    """One connection and read transaction; schemas resolved once each"""

    def __init__(self, connection: Connection, transaction, schema_overrides: Dict[str, TableSchema]):
        super().__init__()
        self.connection = connection
        self.transaction = transaction
        self.schema_overrides = schema_overrides
        self._metadata = MetaData()
        self._resolved: Dict[str, _ResolvedTable] = {}

    def table_names(self) -> List[str]:
        try:
            return inspect(self.connection).get_table_names()
        except SQLAlchemyError as e:
            raise RowAccessError(
                "Failed to enumerate tables",
                original_exception=e
            )

    def get_schema(self, table_name: str) -> TableSchema:
        return self._resolve(table_name).schema

    def iter_rows(self, schema: TableSchema) -> Iterator[Row]:
        resolved = self._resolve(schema.name)
        table = resolved.table
        stmt = select(*[table.c[name] for name in self._selected_columns(resolved, schema)])
        if resolved.index_column:
            stmt = stmt.order_by(table.c[resolved.index_column])

        try:
            result = self.connection.execute(stmt)
            for position, record in enumerate(result.mappings()):
                yield self._to_row(resolved, schema, record, position)
        except SQLAlchemyError as e:
            raise RowAccessError(
                "Failed to read rows",
                context={"table_name": schema.name},
                original_exception=e
            )

    def get_row(self, table_name: str, index: int) -> Row:
        resolved = self._resolve(table_name)
        table = resolved.table
        stmt = select(*[table.c[name] for name in self._selected_columns(resolved, resolved.schema)])
        if resolved.index_column:
            stmt = stmt.where(table.c[resolved.index_column] == index)
        else:
            stmt = stmt.offset(index).limit(1)

        try:
            record = self.connection.execute(stmt).mappings().first()
        except SQLAlchemyError as e:
            raise RowAccessError(
                "Failed to read row",
                context={"table_name": table_name, "row_index": index},
                original_exception=e
            )

        if record is None:
            raise RowAccessError(
                "Row not found",
                context={"table_name": table_name, "row_index": index}
            )
        return self._to_row(resolved, resolved.schema, record, index)

    def _release(self):
        try:
            self.transaction.rollback()
        finally:
            self.connection.close()
        logger.debug("Released database snapshot")

    # --------------------------------------------------
    # Schema resolution
    # --------------------------------------------------

    def _resolve(self, table_name: str) -> _ResolvedTable:
        if table_name in self._resolved:
            return self._resolved[table_name]

        try:
            table = Table(table_name, self._metadata, autoload_with=self.connection)
        except NoSuchTableError as e:
            raise SchemaResolutionError(
                "Table does not exist",
                context={"table_name": table_name},
                original_exception=e
            )
        except SQLAlchemyError as e:
            raise SchemaResolutionError(
                "Failed to reflect table",
                context={"table_name": table_name},
                original_exception=e
            )

        index_column = self._index_column(table)
        override = self.schema_overrides.get(table_name)
        if override is not None:
            for column in override.columns:
                if column.name not in table.c:
                    raise SchemaResolutionError(
                        "Declared column missing from table",
                        context={"table_name": table_name, "column_name": column.name}
                    )
            schema = override
        else:
            schema = self._reflect_schema(table, index_column)

        resolved = _ResolvedTable(schema, table, index_column)
        self._resolved[table_name] = resolved
        logger.debug(f"Resolved schema of {table_name}: {schema.column_names}")
        return resolved

    @staticmethod
    def _index_column(table: Table) -> Optional[str]:
        pk = list(table.primary_key.columns)
        if len(pk) == 1 and isinstance(pk[0].type, Integer):
            return pk[0].name
        return None

    @classmethod
    def _link_targets(cls, table: Table) -> Dict[str, str]:
        """
        Foreign key columns that can be exported as OBJECT links.

        A link value must be the target row's index, so only single-column
        keys referring to the target's single integer primary key qualify.
        Other foreign keys keep their scalar type.
        """
        links = {}
        for constraint in table.foreign_key_constraints:
            if len(constraint.elements) != 1:
                continue
            fk = constraint.elements[0]
            try:
                referred = fk.column
            except SQLAlchemyError:
                # Referred table could not be reflected
                continue
            if cls._index_column(referred.table) == referred.name:
                links[fk.parent.name] = referred.table.name
        return links

    @classmethod
    def _reflect_schema(cls, table: Table, index_column: Optional[str]) -> TableSchema:
        links = cls._link_targets(table)

        columns = []
        for column in table.columns:
            if column.name == index_column:
                continue
            if column.name in links:
                columns.append(ColumnSpec(
                    name=column.name,
                    column_type=ColumnType.OBJECT,
                    target_table=links[column.name]
                ))
            else:
                columns.append(ColumnSpec(name=column.name, column_type=map_sql_type(column.type)))

        try:
            return TableSchema(name=table.name, columns=columns)
        except ValueError as e:
            raise SchemaResolutionError(
                "Reflected columns do not form a valid schema",
                context={"table_name": table.name},
                original_exception=e
            )

    # --------------------------------------------------
    # Row conversion
    # --------------------------------------------------

    @staticmethod
    def _selected_columns(resolved: _ResolvedTable, schema: TableSchema) -> List[str]:
        names = list(schema.column_names)
        if resolved.index_column and resolved.index_column not in names:
            names.insert(0, resolved.index_column)
        return names

    def _to_row(self, resolved: _ResolvedTable, schema: TableSchema, record, position: int) -> Row:
        index = record[resolved.index_column] if resolved.index_column else position
        values = {
            column.name: _convert_value(column.column_type, record[column.name])
            for column in schema.columns
        }
        return Row(index=index, values=values)


def _convert_value(column_type: ColumnTypeLike, value: Any) -> Any:
    """Bring a database value into the raw form the formatter expects"""
    if value is None:
        return None

    if column_type == ColumnType.LIST or column_type in SCALAR_LIST_TYPES:
        if isinstance(value, (str, bytes)):
            value = json.loads(value)
        return value

    if column_type in (ColumnType.DATE, ColumnType.UNSUPPORTED_DATE):
        if isinstance(value, str):
            return datetime.fromisoformat(value)
        if isinstance(value, date) and not isinstance(value, datetime):
            return datetime.combine(value, time())
        return value

    if column_type in (ColumnType.FLOAT, ColumnType.DOUBLE) and isinstance(value, Decimal):
        return float(value)

    if column_type == ColumnType.BOOLEAN and isinstance(value, int):
        return bool(value)

    if column_type == ColumnType.BINARY and isinstance(value, (memoryview, bytearray)):
        return bytes(value)

    return value
