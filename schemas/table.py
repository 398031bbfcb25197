"""
Pydantic schemas describing the columns of an exported table
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List, Union
from models.base import ColumnType, resolve_column_type

# Synthetic key injected first into every exported row
INDEX_KEY = "index"


class ColumnSpec(BaseModel):
    """
    One column of a table schema.

    Ensures:
    - Type names are mapped onto ColumnType (unknown names are kept as strings)
    - Link lists name the table they point into
    """

    name: str = Field(..., min_length=1)
    column_type: Union[ColumnType, str]
    target_table: Optional[str] = None  # Linked table for OBJECT / LIST

    @validator("column_type", pre=True)
    def coerce_column_type(cls, v):
        """Accept enum members or type names"""
        return resolve_column_type(v)

    @validator("target_table", always=True)
    def require_link_target(cls, v, values):
        """LIST columns render their target table name, so it must be known"""
        if values.get("column_type") == ColumnType.LIST and not v:
            raise ValueError("LIST columns require a target_table")
        return v


class TableSchema(BaseModel):
    """
    Ordered column schema of one table.

    Column order is the order rows are exported in; names are unique and
    never collide with the synthetic index key.
    """

    name: str = Field(..., min_length=1)
    columns: List[ColumnSpec] = Field(default_factory=list)

    @validator("columns")
    def check_column_names(cls, v):
        """Reject duplicate names and the reserved index key"""
        seen = set()
        for column in v:
            if column.name == INDEX_KEY:
                raise ValueError(f"Column name '{INDEX_KEY}' is reserved for the row index")
            if column.name in seen:
                raise ValueError(f"Duplicate column name: {column.name}")
            seen.add(column.name)
        return v

    @property
    def column_names(self) -> List[str]:
        return [c.name for c in self.columns]

    def column(self, name: str) -> Optional[ColumnSpec]:
        for c in self.columns:
            if c.name == name:
                return c
        return None
