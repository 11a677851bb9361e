"""
JSON record serializer, readable from other languages.
"""

import json
from typing import Any

from ..core.types import Record
from ..errors import SerializationError
from .base import Serializer

# Values json.loads gives back exactly as they were dumped
_JSON_SCALARS = (str, int, float, bool, type(None))


class JsonSerializer(Serializer):
    """
    Serializer storing records as UTF-8 JSON objects.

    ``created_at`` is written as an ISO 8601 string. Owner and payload may
    only hold values JSON restores unchanged: strings, numbers, booleans,
    ``None``, lists and dicts with string keys. Anything else (tuples,
    sets, bytes, non-string keys) is refused at pack time instead of being
    silently converted.
    """

    name = "json"

    def __init__(self, sort_keys: bool = False):
        self.sort_keys = sort_keys

    def pack(self, record: Record) -> bytes:
        self._check_lossless(record.owner, "owner")
        self._check_lossless(record.payload, "payload")
        try:
            text = json.dumps(
                record.to_dict(iso_timestamps=True),
                separators=(",", ":"),
                sort_keys=self.sort_keys,
            )
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"Failed to pack record: {e}", serializer=self.name, cause=e
            ) from e
        return text.encode("utf-8")

    def unpack(self, data: bytes) -> Record:
        try:
            return Record.from_dict(json.loads(data))
        except (ValueError, TypeError, KeyError) as e:
            raise SerializationError(
                f"Failed to unpack record: {e}", serializer=self.name, cause=e
            ) from e

    def _check_lossless(self, value: Any, path: str) -> None:
        if isinstance(value, _JSON_SCALARS):
            return
        if isinstance(value, list):
            for i, item in enumerate(value):
                self._check_lossless(item, f"{path}[{i}]")
            return
        if isinstance(value, dict):
            for key, item in value.items():
                if not isinstance(key, str):
                    raise SerializationError(
                        f"Failed to pack record: {path} has non-string key {key!r}",
                        serializer=self.name,
                    )
                self._check_lossless(item, f"{path}[{key!r}]")
            return
        raise SerializationError(
            f"Failed to pack record: {path} holds {type(value).__name__}, "
            f"which JSON cannot restore",
            serializer=self.name,
        )
