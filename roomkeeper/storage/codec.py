"""
Generic codec built on pydantic's TypeAdapter.

Any aggregate pydantic can describe (models, nested dicts and lists,
scalars) round-trips through the same two calls, so new save shapes
need no serialization code of their own.

Usage:
    codec = Codec(SaveDirectory)
    data = codec.encode(directory)
    directory = codec.decode(data)
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from roomkeeper.storage.exceptions import DecodeError


T = TypeVar('T')


class Codec(Generic[T]):
    """Encode values of one type to UTF-8 JSON bytes and back."""

    def __init__(self, value_type: Any):
        self.value_type = value_type
        self._adapter: TypeAdapter[T] = TypeAdapter(value_type)

    def encode(self, value: T) -> bytes:
        """
        Serialize ``value``.

        Output follows field order and dict insertion order, so equal values
        give equal bytes only when their dicts were filled in the same order.
        """
        return self._adapter.dump_json(value)

    def decode(self, data: bytes, key: str = "") -> T:
        """
        Deserialize ``data``.

        Args:
            data: Bytes previously produced by encode
            key: Record name, only used in the error

        Raises:
            DecodeError: If the bytes are empty, not JSON, or don't fit
                the value type
        """
        if not data:
            raise DecodeError(key, "record is empty")
        try:
            return self._adapter.validate_json(data)
        except ValidationError as e:
            raise DecodeError(key, f"{e.error_count()} validation error(s)") from e
        except ValueError as e:
            raise DecodeError(key, str(e)) from e
