"""
Core utilities and configuration for the name statistics pipeline.

This package provides foundational components used by the parser and the
importer:

Modules:
    config: Pipeline configuration and environment variable management
    database: Store engine and scoped connection management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration and utilities

Usage:
    from core.config import settings
    from core.database import store_connection, build_database_url
    from core.exceptions import ArtifactNotFoundError, SchemaError
    from core.logging import setup_logging

Example:
    # Initialize logging
    setup_logging()

    # Open the store
    async with store_connection(build_database_url("names.db")) as conn:
        # Perform database operations
        pass
"""

__all__ = [
    "settings",
    "store_connection",
    "build_database_url",
    "setup_logging",
    # Exceptions
    "ETLException",
    "ExtractionError",
    "DocumentReadError",
    "ArtifactError",
    "ArtifactNotFoundError",
    "ArtifactFormatError",
    "ArtifactWriteError",
    "LoadError",
    "DatabaseError",
    "SchemaError",
    "ClearTableError",
    "MetadataWriteError",
    "RecordInsertError",
]

from core.config import settings
from core.database import store_connection, build_database_url
from core.logging import setup_logging
from core.exceptions import (
    ETLException,
    ExtractionError,
    DocumentReadError,
    ArtifactError,
    ArtifactNotFoundError,
    ArtifactFormatError,
    ArtifactWriteError,
    LoadError,
    DatabaseError,
    SchemaError,
    ClearTableError,
    MetadataWriteError,
    RecordInsertError,
)
