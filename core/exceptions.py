"""
Custom exceptions for the dataset catalog with structured error context.

Every exception carries a message, a context dictionary and (optionally) the
lower-level exception it wraps, so that API handlers and scripts can log or
serialize failures uniformly.

Exception Hierarchy:
    CatalogException (base)
    ├── DatasetValidationError
    ├── ConfigurationError
    ├── RepositoryError
    │   ├── DatasetNotFoundError
    │   ├── DuplicateFilenameError
    │   └── DatabaseError
    │       └── DatabaseConnectionError
    └── DatasetImportError
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class CatalogException(Exception):
    """
    Base exception for all catalog errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (dataset id, filename, etc.)
        original_exception: The original exception that was caught (if any)
    """

    status_code = 500

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
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Validation Errors
# ============================================================================

class DatasetValidationError(CatalogException):
    """
    Raised when dataset input or query parameters are invalid.

    Context should include:
        - field_name: Name of the offending field
        - field_value: Value that failed validation
    """
    status_code = 422


class ConfigurationError(CatalogException):
    """
    Raised when connection settings are unusable (e.g. a database name that
    is not a plain identifier).
    """
    pass


# ============================================================================
# Repository Errors
# ============================================================================

class RepositoryError(CatalogException):
    """Base exception for data-access failures."""
    pass


class DatasetNotFoundError(RepositoryError):
    """
    Raised when a dataset row does not exist.

    Context should include:
        - dataset_id or filename: The key that was looked up
    """
    status_code = 404


class DuplicateFilenameError(RepositoryError):
    """
    Raised when an insert or update violates the unique filename constraint.

    Context should include:
        - filename: The conflicting filename (if known)
        - operation: INSERT or UPDATE
    """
    status_code = 409


class DatabaseError(RepositoryError):
    """
    Raised when any other database operation fails.

    Context should include:
        - operation: Type of database operation (INSERT, SELECT, UPDATE, DELETE)
        - table_name: Name of the table
    """
    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when the database cannot be reached."""
    status_code = 503


# ============================================================================
# Import Errors
# ============================================================================

class DatasetImportError(CatalogException):
    """
    Raised when a bulk import source cannot be read.

    Context should include:
        - file_path: Path to the source file
    """
    status_code = 400
