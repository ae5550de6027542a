"""
Core utilities and configuration for the dataset metadata catalog.

Modules:
    config: Application configuration and environment variable management
    database: Engine, session and table management
    exceptions: Custom exception hierarchy for error handling
    logging: Logging configuration

Usage:
    from core.config import settings
    from core.database import session_scope
    from core.exceptions import DatasetNotFoundError
    from core.logging import setup_logging

Example:
    setup_logging()

    async with session_scope() as session:
        # Perform database operations
        pass
"""

__all__ = [
    "settings",
    "session_scope",
    "setup_logging",
    # Exceptions
    "CatalogException",
    "DatasetValidationError",
    "ConfigurationError",
    "RepositoryError",
    "DatasetNotFoundError",
    "DuplicateFilenameError",
    "DatabaseError",
    "DatabaseConnectionError",
    "DatasetImportError",
]
