"""
Pydantic schemas for table definitions and export options.

Schemas:
    table: Column and table schemas (ColumnSpec, TableSchema)
    options: Export runtime options (ExportOptions)

Usage:
    from schemas import TableSchema, ColumnSpec, ExportOptions

Example:
    schema = TableSchema(
        name="class_Person",
        columns=[
            ColumnSpec(name="name", column_type="STRING"),
            ColumnSpec(name="age", column_type="INTEGER"),
        ]
    )
    assert schema.column_names == ["name", "age"]

Validation:
    - Column type names are mapped onto ColumnType; unknown names are kept
      and exported as "Unknown column type" markers
    - Column names are unique and may not be "index"
    - LIST columns must name their target table
"""

from schemas.table import ColumnSpec, TableSchema, INDEX_KEY
from schemas.options import ExportOptions

__all__ = [
    "ColumnSpec",
    "TableSchema",
    "INDEX_KEY",
    "ExportOptions",
]
