"""
Custom exceptions for the name statistics pipeline with structured error context.

Each exception carries a context dictionary so failures can be logged with
enough detail to find the offending document, artifact or load stage.

Exception Hierarchy:
    ETLException (base)
    ├── ExtractionError
    │   └── DocumentReadError
    ├── ArtifactError
    │   ├── ArtifactNotFoundError
    │   ├── ArtifactFormatError
    │   └── ArtifactWriteError
    └── LoadError
        ├── DatabaseError
        │   ├── SchemaError
        │   ├── ClearTableError
        │   └── MetadataWriteError
        └── RecordInsertError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ETLException(Exception):
    """
    Base exception for all pipeline errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (path, stage, table, etc.)
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
# Extraction Errors
# ============================================================================

class ExtractionError(ETLException):
    """Base exception for document extraction failures."""
    pass


class DocumentReadError(ExtractionError):
    """
    Raised when a yearly source document exists but cannot be read.

    Context should include:
        - file_path: Path to the document
        - year: Statistics year the document belongs to
    """
    pass


# ============================================================================
# Artifact Errors
# ============================================================================

class ArtifactError(ETLException):
    """Base exception for intermediate artifact failures."""
    pass


class ArtifactNotFoundError(ArtifactError):
    """Raised when the importer runs before the parser produced an artifact."""
    pass


class ArtifactFormatError(ArtifactError):
    """
    Raised when the artifact is not a JSON array of records.

    Context should include:
        - artifact_path: Path to the artifact
    """
    pass


class ArtifactWriteError(ArtifactError):
    """Raised when the parser cannot write its artifact."""
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(ETLException):
    """Base exception for store loading failures."""
    pass


class DatabaseError(LoadError):
    """
    Exception raised when a store-level operation fails.

    Context should include:
        - operation: Type of database operation (CREATE, DELETE, INSERT)
        - table_name: Name of the table
        - stage: Load stage at the time of failure
    """
    pass


class SchemaError(DatabaseError):
    """Schema application failed."""
    pass


class ClearTableError(DatabaseError):
    """Clearing the names table before insert failed."""
    pass


class MetadataWriteError(DatabaseError):
    """Writing the import metadata row failed."""
    pass


class RecordInsertError(LoadError):
    """
    A single artifact entry could not be validated or inserted.

    Context should include:
        - record_index: Position of the entry in the artifact
        - record: The entry as read from the artifact
    """
    pass
