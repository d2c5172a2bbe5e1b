class StorageError(Exception):
    """Base exception for document storage errors."""


class DocumentNotFoundError(StorageError):
    """Raised when a stored-object reference cannot be resolved to a file."""
