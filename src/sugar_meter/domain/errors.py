"""Domain errors."""


class StorageError(RuntimeError):
    """Raised by key-value adapters when the backing store fails."""
