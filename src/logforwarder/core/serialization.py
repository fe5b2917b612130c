"""
JSON serialization helpers built on orjson.

Request bodies are produced as bytes without an intermediate ``str``; the
same buffer is signed and sent.
"""

from __future__ import annotations

from typing import Any, Iterable

import orjson

from .errors import ForwarderError


def _default(obj: Any) -> Any:
    """Default serializer hook for unsupported types."""
    if hasattr(obj, "model_dump"):
        return obj.model_dump(by_alias=True, exclude_none=True)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def serialize_batch(entries: Iterable[Any]) -> bytes:
    """Serialize log entries into one JSON array."""
    try:
        return orjson.dumps(list(entries), default=_default)
    except TypeError as e:
        raise ForwarderError("Serialization failed", cause=e) from e


def dumps_compact(value: Any) -> str:
    """Compact, key-sorted JSON text; used for fallback log messages."""
    return orjson.dumps(value, default=_default, option=orjson.OPT_SORT_KEYS).decode()


def loads_lenient(payload: bytes | bytearray | memoryview | str) -> Any:
    """Decode JSON, returning ``None`` when the payload is not valid JSON."""
    try:
        return orjson.loads(payload)
    except orjson.JSONDecodeError:
        return None
