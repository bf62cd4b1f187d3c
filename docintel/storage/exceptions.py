class StorageError(Exception):
    """Base exception for storage adapters."""


class StorageWriteError(StorageError):
    """Raised when a record cannot be written."""
