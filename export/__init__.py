"""
Export pipeline components for turning a tabular store into JSON.

This package contains all components of the export path:

Modules:
    base: Store collaborator contract (DataStore, StoreSnapshot)
    projector: Row -> ordered JSON object
    serializer: Table -> JSON array (materialized or streaming)
    runner: Export orchestrator (document, stream or file output)

Subpackages:
    formatters: Value and date formatting per column type
    stores: Store implementations (in-memory, SQLAlchemy)

Architecture:
    ExportRunner -> TableSerializer (per table) -> RowProjector (per row)
    -> ValueFormatter (per column) -> JSON scalar

    One store snapshot is opened per export and released on every exit
    path; all tables are read from that snapshot.

Usage:
    from export import ExportRunner
    from export.stores import SQLAlchemyStore
    from core.database import get_engine

Example:
    runner = ExportRunner(SQLAlchemyStore(get_engine()))

    # Whole document in memory
    document = runner.export_all()

    # Or stream straight into a file
    stats = runner.export_to_file("export.json")
    print(f"Exported {stats['rows_exported']} rows")

Error Handling:
    Null values, non-finite numbers and unknown column types become
    sentinel strings in the output. Store and I/O failures raise
    exceptions from core.exceptions and abort the export.
"""

from export.base import DataStore, StoreSnapshot
from export.projector import RowProjector
from export.serializer import TableSerializer, dumps
from export.runner import ExportRunner

__all__ = [
    "DataStore",
    "StoreSnapshot",
    "RowProjector",
    "TableSerializer",
    "dumps",
    "ExportRunner",
]
