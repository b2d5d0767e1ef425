"""
Storage module - the persistence primitives under the save engine.

Provides:
- ByteStore / FileByteStore: named records on disk
- Codec: generic pydantic-backed encode/decode
- StorageError and its subclasses
"""

from roomkeeper.storage.byte_store import ByteStore, FileByteStore
from roomkeeper.storage.codec import Codec
from roomkeeper.storage.exceptions import (
    StorageError,
    StorageNotFound,
    StorageAlreadyExists,
    DecodeError,
    StorageIOError,
)

__all__ = [
    "ByteStore",
    "FileByteStore",
    "Codec",
    "StorageError",
    "StorageNotFound",
    "StorageAlreadyExists",
    "DecodeError",
    "StorageIOError",
]
