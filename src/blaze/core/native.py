"""
Native value tagging for the codec and query builder.

Plain Python values (None, bool, int, float, str, list/tuple, mappings) encode by
shape. Four wire variants have no unambiguous Python shape, so callers must tag
them explicitly with `Extended`:

- bytes      -> bytesValue
- reference  -> referenceValue (a document path string)
- geo_point  -> geoPointValue {latitude, longitude}
- timestamp  -> timestampValue {seconds, nanos}

Untagged strings, mappings, and raw bytes never produce these variants. Decoding
does not re-tag them: the raw wire payload comes back as-is.

The module also defines `NAN`, the marker that turns a `where` condition into an
IS_NAN unary filter.

Examples:
    >>> from blaze.core.native import timestamp, geo_point, ExtendedKind
    >>> timestamp(1700000000).kind is ExtendedKind.TIMESTAMP
    True
    >>> geo_point(52.52, 13.40).value
    (52.52, 13.4)
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Final

__all__ = [
    "ExtendedKind",
    "Extended",
    "NanMarker",
    "NAN",
    "bytes_value",
    "reference",
    "geo_point",
    "timestamp",
    "is_list_value",
    "is_mapping_value",
    "is_nan_marker",
]


class ExtendedKind(Enum):
    """Sub-tag carried by an Extended value."""

    BYTES = "bytes"
    REFERENCE = "reference"
    GEO_POINT = "geo_point"
    TIMESTAMP = "timestamp"


@dataclass(frozen=True)
class Extended:
    """
    Explicitly tagged native value for wire variants without a natural Python shape.

    Attributes:
        kind (ExtendedKind): Which wire variant to produce.
        value (Any): Payload: bytes for BYTES, a path string for REFERENCE,
            a (latitude, longitude) pair for GEO_POINT, and whole seconds for TIMESTAMP.
    """

    kind: ExtendedKind
    value: Any


@dataclass(frozen=True)
class NanMarker:
    """Sentinel type for IS_NAN conditions."""

    def __repr__(self) -> str:
        return "NAN"


NAN: Final[NanMarker] = NanMarker()


def bytes_value(data: bytes) -> Extended:
    """Tag raw bytes for the bytes wire variant."""
    return Extended(ExtendedKind.BYTES, data)


def reference(path: str) -> Extended:
    """Tag a document path for the reference wire variant."""
    return Extended(ExtendedKind.REFERENCE, path)


def geo_point(latitude: float, longitude: float) -> Extended:
    """Tag a latitude/longitude pair for the geo-point wire variant."""
    return Extended(ExtendedKind.GEO_POINT, (latitude, longitude))


def timestamp(seconds: int) -> Extended:
    """
    Tag a POSIX time in whole seconds for the timestamp wire variant.

    Notes:
        Sub-second precision is not supported; the encoded nanos are always 0.
    """
    return Extended(ExtendedKind.TIMESTAMP, seconds)


def is_list_value(value: Any) -> bool:
    """True for list/tuple values (strings and bytes are not lists here)."""
    return isinstance(value, (list, tuple))


def is_mapping_value(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_nan_marker(value: Any) -> bool:
    """True for the NAN sentinel or a float NaN."""
    if isinstance(value, NanMarker):
        return True
    return isinstance(value, float) and math.isnan(value)
