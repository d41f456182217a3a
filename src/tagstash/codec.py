"""Entry and list encoding.

An entry is stored as the 3-element sequence ``[value, tags, expires_at]``
and a list as a plain sequence of strings, both run through a pluggable
serializer.
"""

from __future__ import annotations

import json
import pickle
from typing import Any, Protocol, runtime_checkable

from tagstash.errors import DecodeError, EncodeError, InvalidKeyError
from tagstash.keys import validate_keys


@runtime_checkable
class Serializer(Protocol):
    """Turns Python values into bytes and back."""

    def dumps(self, obj: Any) -> bytes:
        """Serialize ``obj``."""
        ...

    def loads(self, data: bytes) -> Any:
        """Deserialize ``data``."""
        ...


class PickleSerializer:
    """Serializer for arbitrary Python values.

    Only point this at folders written by trusted processes: unpickling
    runs code.
    """

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self._protocol = protocol

    def dumps(self, obj: Any) -> bytes:
        return pickle.dumps(obj, protocol=self._protocol)

    def loads(self, data: bytes) -> Any:
        return pickle.loads(data)


class JsonSerializer:
    """Serializer for JSON-compatible values."""

    def dumps(self, obj: Any) -> bytes:
        return json.dumps(obj, separators=(",", ":")).encode("utf-8")

    def loads(self, data: bytes) -> Any:
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)


SERIALIZERS: dict[str, type[PickleSerializer] | type[JsonSerializer]] = {
    "pickle": PickleSerializer,
    "json": JsonSerializer,
}


def get_serializer(name: str) -> Serializer:
    """Look up a serializer by name."""
    try:
        return SERIALIZERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown serializer {name!r}, expected one of {sorted(SERIALIZERS)}"
        ) from None


class EntryCodec:
    """Encodes cache entries and string lists with a serializer."""

    def __init__(self, serializer: Serializer | None = None) -> None:
        self.serializer = serializer if serializer is not None else PickleSerializer()

    def encode(
        self, value: Any, tags: list[str], expires_at: float | None
    ) -> bytes:
        """Encode an entry triple."""
        return self._dumps([value, list(tags), expires_at])

    def decode(self, data: bytes) -> tuple[Any, list[str], float | None]:
        """Decode an entry triple, raising DecodeError on anything unexpected."""
        payload = self._loads(data)
        if not isinstance(payload, (list, tuple)) or len(payload) != 3:
            raise DecodeError("Stored entry is not a 3-element record")

        value, tags, expires_at = payload
        if not isinstance(tags, (list, tuple)):
            raise DecodeError("Stored entry has malformed tags")
        try:
            tags = validate_keys(tags)
        except InvalidKeyError as e:
            raise DecodeError(f"Stored entry has malformed tags: {e}") from e
        if expires_at is not None and (
            isinstance(expires_at, bool) or not isinstance(expires_at, (int, float))
        ):
            raise DecodeError("Stored entry has malformed expiration")

        # A zero timestamp means "no expiration"
        return value, tags, expires_at or None

    def encode_list(self, items: list[str]) -> bytes:
        """Encode an ordered list of strings."""
        return self._dumps(list(items))

    def decode_list(self, data: bytes) -> list[str]:
        """Decode an ordered list of strings."""
        payload = self._loads(data)
        if not isinstance(payload, (list, tuple)) or not all(
            isinstance(item, str) for item in payload
        ):
            raise DecodeError("Stored list is not a list of strings")
        return list(payload)

    def _dumps(self, obj: Any) -> bytes:
        try:
            return self.serializer.dumps(obj)
        except Exception as e:
            raise EncodeError(f"Could not serialize value: {e}") from e

    def _loads(self, data: bytes) -> Any:
        if not data:
            raise DecodeError("Stored data is empty")
        try:
            return self.serializer.loads(data)
        except Exception as e:
            raise DecodeError(f"Could not deserialize stored data: {e}") from e
