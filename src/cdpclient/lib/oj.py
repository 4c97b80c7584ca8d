"""JSON encoding and decoding backed by orjson."""

from typing import Any

import orjson

JSONDecodeError = orjson.JSONDecodeError


def loads(data: bytes | str) -> Any:
    """Parse a JSON document from text or UTF-8 bytes."""
    return orjson.loads(data)


def dumps(obj: Any) -> bytes:
    """Serialize to UTF-8 encoded JSON bytes."""
    return orjson.dumps(obj)


def dumps_str(obj: Any) -> str:
    """Serialize to a JSON string, for text frames."""
    return orjson.dumps(obj).decode("utf-8")
