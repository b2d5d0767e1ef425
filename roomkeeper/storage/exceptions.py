"""
Storage error taxonomy.

Everything raised at the byte store / codec boundary derives from
StorageError, so the synchronization engine can catch the whole family
in one place.
"""


class StorageError(Exception):
    """Base class for byte store and codec failures."""

    def __init__(self, key: str, message: str = ""):
        self.key = key
        super().__init__(message or key)


class StorageNotFound(StorageError):
    """A record was read or written before it was created."""

    def __init__(self, key: str):
        super().__init__(key, f"Save record '{key}' does not exist")


class StorageAlreadyExists(StorageError):
    """create() was called on a record that is already present."""

    def __init__(self, key: str):
        super().__init__(key, f"Save record '{key}' already exists")


class DecodeError(StorageError):
    """Record bytes are malformed or don't match the expected shape."""

    def __init__(self, key: str, reason: str):
        self.reason = reason
        super().__init__(key, f"Could not decode '{key}': {reason}")


class StorageIOError(StorageError):
    """The operating system refused a read, write, create or delete."""

    def __init__(self, key: str, reason: str):
        self.reason = reason
        super().__init__(key, f"I/O error on save record '{key}': {reason}")
