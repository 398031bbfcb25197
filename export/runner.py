# ============================================================================
# File: export/runner.py
# Description: Export orchestrator for in-memory, stream and file output
# ============================================================================
"""
Export Runner - Orchestrates the export of a store to JSON.

This module provides the export entry points with:
- One consistent snapshot per export, released on every exit path
- Table selection by name (prefix match by default)
- Materialized (in-memory document) and streaming (sink / file) output
  with byte-identical JSON
- Detailed error context and logging
"""

from typing import Any, Callable, Dict, Iterator, List, Optional, TextIO, Tuple
from pathlib import Path
import logging

from export.base import DataStore, StoreSnapshot
from export.formatters.date_formatter import StrftimeDateFormatter
from export.formatters.value_formatter import ValueFormatter
from export.projector import RowProjector
from export.serializer import TableSerializer, dumps
from schemas.options import ExportOptions
from schemas.table import TableSchema
from core.exceptions import (
    ExportException,
    ResourceAcquisitionError,
    SchemaResolutionError,
    ExportWriteError,
    SerializationError
)

logger = logging.getLogger(__name__)

TableFilter = Callable[[str], bool]


class _GuardedSink:
    """Wrap a text sink so write failures surface as ExportWriteError"""

    def __init__(self, sink: TextIO, path: Optional[str] = None):
        self.sink = sink
        self.path = path
        self.table_name: Optional[str] = None

    def write(self, text: str):
        try:
            self.sink.write(text)
        except (OSError, ValueError) as e:
            # ValueError: the sink was closed under us
            raise ExportWriteError(
                "Failed to write export output",
                context={
                    "path": self.path,
                    "table_name": self.table_name
                },
                original_exception=e
            )


class ExportRunner:
    """
    Export Orchestrator

    Responsibilities:
    - Acquire and release the store snapshot
    - Select tables and resolve their schemas once per export
    - Drive the table serializer in materialized or streaming mode
    - Record export statistics
    """

    def __init__(
        self,
        store: DataStore,
        options: Optional[ExportOptions] = None,
        date_formatter=None,
        table_filter: Optional[TableFilter] = None
    ):
        self.store = store
        self.options = options or ExportOptions.from_settings()

        if date_formatter is None and self.options.date_format:
            date_formatter = StrftimeDateFormatter(self.options.date_format)

        self.formatter = ValueFormatter(
            null_value=self.options.null_value,
            date_formatter=date_formatter
        )
        self.serializer = TableSerializer(RowProjector(self.formatter))
        self.table_filter = table_filter or self.has_table_prefix

    def has_table_prefix(self, table_name: str) -> bool:
        """Default filter: user tables carry the configured prefix"""
        return table_name.startswith(self.options.table_prefix)

    # --------------------------------------------------
    # Materialized mode
    # --------------------------------------------------

    def export_all(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Export every selected table into one in-memory document.

        Returns:
            Mapping of table name to its list of row objects, in the
            store's table order

        Raises:
            ResourceAcquisitionError: If the snapshot cannot be opened
            SchemaResolutionError: If a schema cannot be resolved (strict mode)
            ExportException: For other export failures
        """
        logger.info(f"Starting in-memory export of {self.store.describe()}")
        snapshot = self._open_snapshot()
        document: Dict[str, List[Dict[str, Any]]] = {}

        try:
            for table_name, schema in self._selected_tables(snapshot):
                if schema is None:
                    document[table_name] = []
                else:
                    document[table_name] = self.serializer.serialize(
                        schema, snapshot.iter_rows(schema)
                    )
                logger.info(f"Exported {len(document[table_name])} rows from {table_name}")

        except Exception as e:
            self._raise_failure(e)

        finally:
            snapshot.close()

        logger.info(f"Export completed: {len(document)} tables")
        return document

    def export_json(self) -> str:
        """Export the in-memory document as compact JSON text"""
        document = self.export_all()
        try:
            return dumps(document)
        except (TypeError, ValueError) as e:
            self._raise_failure(SerializationError(
                "Document could not be encoded as JSON",
                context={"tables": list(document)},
                original_exception=e
            ))

    # --------------------------------------------------
    # Streaming mode
    # --------------------------------------------------

    def export_to_stream(self, sink: TextIO) -> Dict[str, Any]:
        """
        Stream the export document into a text sink.

        The sink is written incrementally and is not closed.

        Returns:
            Dictionary with export statistics
        """
        logger.info(f"Starting streaming export of {self.store.describe()}")
        snapshot = self._open_snapshot()

        try:
            stats = self._stream(snapshot, _GuardedSink(sink))

        except Exception as e:
            self._raise_failure(e)

        finally:
            snapshot.close()

        return stats

    def export_to_file(self, path: str) -> Dict[str, Any]:
        """
        Stream the export document into a file opened in append mode.

        The caller must supply a fresh or empty file to get a single valid
        JSON document. The file is closed on every exit path.

        Returns:
            Dictionary with export statistics, including the path
        """
        path = str(Path(path))
        logger.info(f"Starting file export of {self.store.describe()} to {path}")
        snapshot = self._open_snapshot()

        try:
            try:
                handle = open(path, "a", encoding="utf-8")
            except OSError as e:
                raise ExportWriteError(
                    "Failed to open export file",
                    context={"path": path},
                    original_exception=e
                )

            try:
                with handle:
                    stats = self._stream(snapshot, _GuardedSink(handle, path=path))
            except OSError as e:
                # Raised by the final flush on close
                raise ExportWriteError(
                    "Failed to write export file",
                    context={"path": path},
                    original_exception=e
                )

        except Exception as e:
            self._raise_failure(e)

        finally:
            snapshot.close()

        stats["path"] = path
        return stats

    # --------------------------------------------------
    # Internals
    # --------------------------------------------------

    def _stream(self, snapshot: StoreSnapshot, sink: _GuardedSink) -> Dict[str, Any]:
        """Write "{", one "name":[...] entry per table, then "}" """
        table_counts: Dict[str, int] = {}

        sink.write("{")
        for table_name, schema in self._selected_tables(snapshot):
            sink.table_name = table_name
            if table_counts:
                sink.write(",")
            sink.write(f"{dumps(table_name)}:")

            if schema is None:
                sink.write("[]")
                table_counts[table_name] = 0
            else:
                table_counts[table_name] = self.serializer.write(
                    schema, snapshot.iter_rows(schema), sink
                )
            logger.info(f"Exported {table_counts[table_name]} rows from {table_name}")

        sink.table_name = None
        sink.write("}")

        stats = {
            "status": "success",
            "tables_exported": len(table_counts),
            "rows_exported": sum(table_counts.values()),
            "tables": table_counts
        }
        logger.info(
            f"Export completed: {stats['tables_exported']} tables, "
            f"{stats['rows_exported']} rows"
        )
        return stats

    def _open_snapshot(self) -> StoreSnapshot:
        try:
            return self.store.open_snapshot()
        except ResourceAcquisitionError as e:
            logger.error(
                f"Could not open store: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            raise
        except Exception as e:
            logger.exception("Unexpected error opening store")
            raise ResourceAcquisitionError(
                "Failed to open store snapshot",
                context={"store": self.store.describe()},
                original_exception=e
            )

    def _selected_tables(
        self, snapshot: StoreSnapshot
    ) -> Iterator[Tuple[str, Optional[TableSchema]]]:
        """
        Yield (name, schema) for every table passing the filter.

        The schema is None when it could not be resolved and strict mode is
        off; such tables are exported as empty arrays.
        """
        for table_name in snapshot.table_names():
            if not self.table_filter(table_name):
                logger.debug(f"Skipping table {table_name}")
                continue
            yield table_name, self._resolve_schema(snapshot, table_name)

    def _resolve_schema(self, snapshot: StoreSnapshot, table_name: str) -> Optional[TableSchema]:
        try:
            return snapshot.get_schema(table_name)
        except SchemaResolutionError as e:
            if self.options.strict_schema:
                raise
            logger.warning(
                f"Schema of {table_name} could not be resolved, exporting no rows",
                extra={"error_context": e.to_dict()}
            )
            return None

    def _raise_failure(self, e: Exception):
        """Log an export failure and re-raise it inside the exception hierarchy"""
        if isinstance(e, ExportException):
            logger.error(
                f"Export failed: {e.message}",
                extra={"error_context": e.to_dict()}
            )
            raise e

        logger.exception("Unexpected error during export")
        raise ExportException(
            "Unexpected error during export",
            context={"store": self.store.describe()},
            original_exception=e
        )
