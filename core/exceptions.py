"""
Custom exceptions for the export pipeline with structured error context.

This module provides the exception hierarchy for failures that terminate
an export. Each exception includes context information for debugging
and logging.

Formatting anomalies (null values, non-finite numbers, unknown column
types) are NOT exceptions: they are absorbed into the output as sentinel
strings by the value formatter.

Exception Hierarchy:
    ExportException (base)
    ├── StoreError
    │   ├── ResourceAcquisitionError
    │   ├── SchemaResolutionError
    │   └── RowAccessError
    ├── SerializationError
    ├── ExportWriteError
    └── ConfigurationError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ExportException(Exception):
    """
    Base exception for all export-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (table, path, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        # Add timestamp to context
        self.context["error_timestamp"] = self.timestamp.isoformat()

        # Chain original exception if provided
        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Store Errors
# ============================================================================

class StoreError(ExportException):
    """Base exception for failures of the underlying data store."""
    pass


class ResourceAcquisitionError(StoreError):
    """
    Exception raised when a store snapshot cannot be opened.

    Fatal: no output is produced.

    Context should include:
        - store: Store description (engine URL, store class)
    """
    pass


class SchemaResolutionError(StoreError):
    """
    Exception raised when a table's column schema cannot be resolved.

    Context should include:
        - table_name: Name of the table
        - column_name: Column that could not be resolved (if applicable)
    """
    pass


class RowAccessError(StoreError):
    """
    Exception raised when rows cannot be read from a snapshot.

    Context should include:
        - table_name: Name of the table
        - row_index: Row identifier (if applicable)
    """
    pass


# ============================================================================
# Output Errors
# ============================================================================

class SerializationError(ExportException):
    """
    Exception raised when a projected row cannot be encoded as JSON.

    Context should include:
        - table_name: Name of the table
        - row_index: Row identifier
    """
    pass


class ExportWriteError(ExportException):
    """
    Exception raised when the destination cannot be opened or written.

    Context should include:
        - path: Destination path (file exports)
        - table_name: Table being written when the failure occurred
    """
    pass


class ConfigurationError(ExportException):
    """Invalid export options or table schema definitions."""
    pass
