"""
Core utilities and configuration for the JSON export system.

This package provides foundational components used throughout the export pipeline:

Modules:
    config: Application configuration and environment variable management
    database: SQLAlchemy engine creation for relational stores
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.database import get_engine
    from core.exceptions import ResourceAcquisitionError, ExportWriteError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Open the configured store
    engine = get_engine()
"""

__all__ = [
    "settings",
    "get_engine",
    "setup_logging",
    # Exceptions
    "ExportException",
    "StoreError",
    "ResourceAcquisitionError",
    "SchemaResolutionError",
    "RowAccessError",
    "SerializationError",
    "ExportWriteError",
    "ConfigurationError",
]
