"""Custom exception types for domain and API layers."""


class AppError(Exception):
    """Base app exception."""


class ValidationError(AppError):
    """Validation failure for caller input."""


class NotFoundError(AppError):
    """Lookup by id matched no row."""


class StorageError(AppError):
    """Database call failure (connection, constraint, timeout)."""


class PersistenceError(StorageError):
    """Storage failure surfaced by the service layer while writing."""
