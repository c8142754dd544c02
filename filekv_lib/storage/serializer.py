from typing import Protocol
import base64
import binascii
import json

from pydantic import ValidationError

from .base import Entry
from .errors import SerializationError


class Serializer(Protocol):
    """Serialize/deserialize entries for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    """

    def dump(self, entry: Entry) -> bytes: ...

    def load(self, data: bytes) -> Entry: ...


class JSONEntrySerializer:
    """One JSON object per record: ``{"Key": ..., "Value": <base64>}``.

    The value is standard (not URL-safe) base64. A `null` or missing value
    reads back as empty bytes.
    """

    def dump(self, entry: Entry) -> bytes:
        record = {
            "Key": entry.key,
            "Value": base64.b64encode(entry.value).decode("ascii"),
        }
        return (json.dumps(record) + "\n").encode("utf-8")

    def load(self, data: bytes) -> Entry:
        try:
            record = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise SerializationError(f"malformed entry record: {e}") from e
        if not isinstance(record, dict):
            raise SerializationError("malformed entry record: expected an object")

        raw_value = record.get("Value")
        try:
            value = base64.b64decode(raw_value, validate=True) if raw_value else b""
        except (binascii.Error, TypeError, ValueError) as e:
            raise SerializationError(f"malformed entry value: {e}") from e

        try:
            return Entry(key=record.get("Key", ""), value=value)
        except ValidationError as e:
            raise SerializationError(f"malformed entry record: {e}") from e
