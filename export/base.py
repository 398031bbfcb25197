"""
Abstract store collaborator consumed by the export pipeline
"""

from abc import ABC, abstractmethod
from typing import Iterator, List
from models.row import Row
from schemas.table import TableSchema


class StoreSnapshot(ABC):
    """
    Consistent, read-only view of a store.

    Every table and row read through one snapshot observes the same
    version of the data. A snapshot is released exactly once with close();
    it can be used as a context manager.
    """

    def __init__(self):
        self.closed = False

    @abstractmethod
    def table_names(self) -> List[str]:
        """Names of all tables, in the store's enumeration order"""
        pass

    @abstractmethod
    def get_schema(self, table_name: str) -> TableSchema:
        """
        Resolve the column schema of a table.

        Raises:
            SchemaResolutionError: If the table has no resolvable schema
        """
        pass

    @abstractmethod
    def iter_rows(self, schema: TableSchema) -> Iterator[Row]:
        """Lazily iterate the rows of a table in storage order"""
        pass

    @abstractmethod
    def get_row(self, table_name: str, index: int) -> Row:
        """
        Fetch a single row by its identifier.

        Raises:
            RowAccessError: If no such row exists
        """
        pass

    def close(self):
        """Release the snapshot; further calls are no-ops"""
        if self.closed:
            return
        self.closed = True
        self._release()

    def _release(self):
        """Hook for subclasses holding resources"""
        pass

    def __enter__(self) -> "StoreSnapshot":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class DataStore(ABC):
    """
    Abstract base class for all exportable stores.

    Responsibilities:
    - Snapshot acquisition (one per export call)
    - Table enumeration and schema declaration (via the snapshot)
    """

    @abstractmethod
    def open_snapshot(self) -> StoreSnapshot:
        """
        Acquire a consistent snapshot of the store.

        Raises:
            ResourceAcquisitionError: If the store cannot be opened
        """
        pass

    def describe(self) -> str:
        """Short description used in logs and error context"""
        return self.__class__.__name__
