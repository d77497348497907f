"""
Lightweight JSON serialization helpers for request bodies.

Provides `to_body` to turn wire/query models into camelCase JSON-ready dicts for the
transport, plus canonical JSON dumps/loads. This module is zero-IO.

Notes:
    - `to_body` drops unset (None) attributes, so absent variants and optional query
      parts never appear on the wire.
    - Bytes values serialize as base64 strings.
    - Use `json_dumps_canonical` for deterministic JSON strings (logging, caching, tests).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

__all__ = [
    "to_body",
    "json_dumps_canonical",
    "json_loads",
]


def to_body(model: BaseModel) -> dict[str, Any]:
    """
    Serialize a model into a camelCase, JSON-ready dict.

    Args:
        model (BaseModel): Wire or query model (Document, StructuredQuery, ...).

    Returns:
        dict[str, Any]: Dict using serialized field names, without None entries.

    Examples:
        >>> from blaze.core.codec import encode
        >>> to_body(encode({"n": 1}))
        {'fields': {'n': {'integerValue': 1}}}
    """
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")


def json_dumps_canonical(obj: Any, default: Callable[[Any], Any] | None = None) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object.
        default (Callable | None): Fallback for values json cannot serialize, as in json.dumps.

    Returns:
        str: JSON string with sort_keys=True, compact separators, and ensure_ascii=False.
    """
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False, default=default
    )


def json_loads(s: str) -> Any:
    """Deserialize a JSON string using the stdlib json module."""
    return json.loads(s)
