"""
Read-only row views handed out by store snapshots
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence


class LinkList:
    """
    Ordered list of links from one row into rows of another table.

    Attributes:
        target_table: Name of the table the ids point into
        row_ids: Target row indexes, in storage order
    """

    __slots__ = ("target_table", "row_ids")

    def __init__(self, target_table: str, row_ids: Optional[Sequence[int]] = None):
        self.target_table = target_table
        self.row_ids: List[int] = list(row_ids or [])

    def __len__(self) -> int:
        return len(self.row_ids)

    def __iter__(self):
        return iter(self.row_ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkList):
            return NotImplemented
        return self.target_table == other.target_table and self.row_ids == other.row_ids

    def __repr__(self) -> str:
        return f"LinkList({self.target_table!r}, {self.row_ids!r})"


class Row:
    """
    One row of a table inside a snapshot.

    `index` is the row identifier (stable within the snapshot); `values`
    maps column names to raw values, None meaning null.
    """

    __slots__ = ("index", "_values")

    def __init__(self, index: int, values: Mapping[str, Any]):
        self.index = index
        self._values: Dict[str, Any] = dict(values)

    def get(self, column_name: str) -> Any:
        """Raw value of a column (None when null or absent)"""
        return self._values.get(column_name)

    def is_null(self, column_name: str) -> bool:
        return self._values.get(column_name) is None

    def __repr__(self) -> str:
        return f"Row(index={self.index!r}, values={self._values!r})"
