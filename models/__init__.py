"""
Data model of the stores being exported.

This package defines the store-side types the serializer consumes:

Models:
    base: Column type tags (ColumnType) and helpers for scalar/link lists
    row: Row views and link-list values handed out by store snapshots

Usage:
    from models import ColumnType, Row, LinkList

Example:
    row = Row(index=0, values={"name": "Alice", "dogs": LinkList("class_Dog", [3, 4])})
    assert row.get("name") == "Alice"
    assert row.is_null("age")

Null Handling:
    A raw value of None is the null marker for every column type.
    Link lists are never reported as null; a missing list is exported
    as an empty one.
"""

from models.base import ColumnType, SCALAR_LIST_TYPES
from models.row import Row, LinkList

__all__ = [
    "ColumnType",
    "SCALAR_LIST_TYPES",
    "Row",
    "LinkList",
]
