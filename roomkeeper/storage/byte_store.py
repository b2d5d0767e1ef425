"""
Byte stores - named records on durable storage.

There is deliberately no in-memory cache: every read and write goes to
disk, so the temp record always matches what the next launch will see.
"""

from __future__ import annotations

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from roomkeeper.storage.exceptions import (
    StorageAlreadyExists,
    StorageIOError,
    StorageNotFound,
)


logger = logging.getLogger(__name__)


class ByteStore(ABC):
    """
    Key -> bytes persistence.

    Contract:
        exists(key)      -> bool
        create(key)      allocate an empty record; StorageAlreadyExists if present
        read(key)        -> bytes; StorageNotFound if absent
        write(key, data) replace contents; StorageNotFound if never created
        delete(key)      idempotent

    Any other OS failure surfaces as StorageIOError.
    """

    @abstractmethod
    def exists(self, key: str) -> bool:
        ...

    @abstractmethod
    def create(self, key: str) -> None:
        ...

    @abstractmethod
    def read(self, key: str) -> bytes:
        ...

    @abstractmethod
    def write(self, key: str, data: bytes) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class FileByteStore(ByteStore):
    """
    One file per record under a root directory.

    Usage:
        store = FileByteStore("game/saves")
        store.create("temp")
        store.write("temp", b"...")
    """

    def __init__(self, root: str | Path, suffix: str = ".dat"):
        self.root = Path(root)
        self.suffix = suffix

    def path_for(self, key: str) -> Path:
        """Path of the file backing ``key``."""
        return self.root / f"{key}{self.suffix}"

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def create(self, key: str) -> None:
        path = self.path_for(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(key, f"cannot create {self.root}: {e}") from e
        try:
            # 'x' fails if the file is already there
            with open(path, 'xb'):
                pass
        except FileExistsError:
            raise StorageAlreadyExists(key) from None
        except OSError as e:
            raise StorageIOError(key, str(e)) from e
        logger.debug(f"Created save record {path}")

    def read(self, key: str) -> bytes:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            raise StorageNotFound(key) from None
        except OSError as e:
            raise StorageIOError(key, str(e)) from e

    def write(self, key: str, data: bytes) -> None:
        """
        Replace the record's contents.

        The bytes go to a sibling temp file first and are swapped in with
        os.replace, so a crash mid-write leaves the old record intact. The
        temp file is removed again if any step fails.
        """
        path = self.path_for(key)
        if not path.is_file():
            raise StorageNotFound(key)

        try:
            tmp = tempfile.NamedTemporaryFile(
                mode="wb",
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            )
        except OSError as e:
            raise StorageIOError(key, str(e)) from e

        tmp_path = Path(tmp.name)
        try:
            with tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageIOError(key, str(e)) from e

    def delete(self, key: str) -> None:
        try:
            self.path_for(key).unlink(missing_ok=True)
        except OSError as e:
            raise StorageIOError(key, str(e)) from e
