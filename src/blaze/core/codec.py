"""
Bidirectional conversion between native Python values and wire values.

Encoding dispatches on the shape of the native value, in priority order:

1. `Extended` tagged values -> bytes/reference/geoPoint/timestamp variants.
2. list/tuple -> arrayValue (order preserved).
3. Mapping -> mapValue (keys copied verbatim).
4. bool (before numbers, so True never becomes 1).
5. float -> doubleValue.
6. int -> integerValue.
7. str -> stringValue.
8. anything else, including None and untagged bytes -> nullValue.

Decoding inspects the populated variant:

- arrayValue -> list; absent values -> [].
- mapValue -> dict; absent fields -> None (not {}).
- boolean/bytes/double/geoPoint/integer/reference/string/timestamp, first present
  wins -> returned raw. Extended variants are not re-tagged, so a timestamp comes
  back as ``{"seconds": s, "nanos": 0}``.
- anything else -> None.

Both directions are total: neither raises for unexpected input. Decode accepts
WireValue models or raw camelCase mappings as received from the transport.

Examples:
    >>> from blaze.core.codec import encode, decode
    >>> doc = encode({"title": "TAOCP", "volumes": [1, 2, 3], "in_print": True})
    >>> doc.fields["volumes"].array_value.values[0].integer_value
    1
    >>> decode(doc)
    {'title': 'TAOCP', 'volumes': [1, 2, 3], 'in_print': True}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from .native import Extended, ExtendedKind, is_list_value, is_mapping_value
from .typing import JsonDict, NativeValue
from .wire import (
    NULL_VALUE,
    ArrayValue,
    Document,
    GeoPoint,
    MapValue,
    Timestamp,
    WireValue,
)

__all__ = [
    "encode",
    "encode_value",
    "decode",
    "decode_value",
]

# Scalar variants checked on decode, in order; first present wins.
_SCALAR_KEYS: tuple[tuple[str, str], ...] = (
    ("boolean_value", "booleanValue"),
    ("bytes_value", "bytesValue"),
    ("double_value", "doubleValue"),
    ("geo_point_value", "geoPointValue"),
    ("integer_value", "integerValue"),
    ("reference_value", "referenceValue"),
    ("string_value", "stringValue"),
    ("timestamp_value", "timestampValue"),
)


# ============================================================================
# Encode
# ============================================================================


def encode(data: Mapping[str, NativeValue]) -> Document:
    """
    Build a Document from a native mapping.

    Args:
        data (Mapping[str, NativeValue]): Field name -> native value.

    Returns:
        Document: Document whose fields are the encoded values.
    """
    return Document(fields={str(k): encode_value(v) for k, v in data.items()})


def encode_value(value: NativeValue) -> WireValue:
    """
    Encode one native value into a WireValue. Never raises.

    Args:
        value (NativeValue): Plain Python value or an `Extended` tagged value.

    Returns:
        WireValue: Value with exactly one populated variant.

    Examples:
        >>> from blaze.core.native import timestamp
        >>> encode_value(timestamp(1600000000)).timestamp_value
        Timestamp(seconds=1600000000, nanos=0)
        >>> encode_value(None).null_value
        'NULL_VALUE'
    """
    if isinstance(value, Extended):
        return _encode_extended(value)
    if is_list_value(value):
        return WireValue(array_value=ArrayValue(values=[encode_value(v) for v in value]))
    if is_mapping_value(value):
        return WireValue(
            map_value=MapValue(fields={str(k): encode_value(v) for k, v in value.items()})
        )
    if isinstance(value, bool):
        return WireValue(boolean_value=value)
    if isinstance(value, float):
        return WireValue(double_value=value)
    if isinstance(value, int):
        return WireValue(integer_value=value)
    if isinstance(value, str):
        return WireValue(string_value=value)
    return WireValue(null_value=NULL_VALUE)


def _encode_extended(value: Extended) -> WireValue:
    # Payloads that do not fit their tag fall back to null like any unmatched value.
    try:
        if value.kind is ExtendedKind.BYTES:
            return WireValue(bytes_value=value.value)
        if value.kind is ExtendedKind.REFERENCE:
            return WireValue(reference_value=value.value)
        if value.kind is ExtendedKind.GEO_POINT:
            lat, lng = value.value
            return WireValue(geo_point_value=GeoPoint(latitude=lat, longitude=lng))
        if value.kind is ExtendedKind.TIMESTAMP:
            return WireValue(timestamp_value=Timestamp(seconds=int(value.value), nanos=0))
    except (TypeError, ValueError):
        pass
    return WireValue(null_value=NULL_VALUE)


# ============================================================================
# Decode
# ============================================================================


def decode(document: Document | Mapping[str, Any] | None) -> JsonDict:
    """
    Build a native dict from a Document model or a raw document mapping.

    Args:
        document: Document model, or a raw mapping with an optional "fields" key.

    Returns:
        JsonDict: Field name -> decoded value; {} when the document has no fields.
    """
    if isinstance(document, Document):
        fields: Any = document.fields
    elif is_mapping_value(document):
        fields = document.get("fields")
    else:
        fields = None
    if not fields or not is_mapping_value(fields):
        return {}
    return {k: decode_value(v) for k, v in fields.items()}


def decode_value(value: WireValue | Mapping[str, Any] | None) -> NativeValue:
    """
    Decode one wire value into a native value. Never raises.

    Args:
        value: WireValue model or a raw camelCase mapping (e.g. {"stringValue": "x"}).

    Returns:
        NativeValue: Decoded value. Map values with no fields decode to None;
        array values with no elements decode to [].

    Examples:
        >>> decode_value({"arrayValue": {}})
        []
        >>> decode_value({"mapValue": {}}) is None
        True
        >>> decode_value({"timestampValue": {"seconds": 5, "nanos": 0}})
        {'seconds': 5, 'nanos': 0}
    """
    if isinstance(value, WireValue):
        return _decode_model(value)
    if is_mapping_value(value):
        return _decode_raw(value)
    return None


def _decode_model(value: WireValue) -> NativeValue:
    if value.array_value is not None:
        return [decode_value(v) for v in value.array_value.values or []]
    if value.map_value is not None:
        if value.map_value.fields is None:
            return None
        return {k: decode_value(v) for k, v in value.map_value.fields.items()}
    for attr, _ in _SCALAR_KEYS:
        raw = getattr(value, attr)
        if raw is not None:
            return raw.model_dump() if isinstance(raw, BaseModel) else raw
    return None


def _decode_raw(value: Mapping[str, Any]) -> NativeValue:
    array = value.get("arrayValue")
    if array is not None:
        items = array.get("values") if is_mapping_value(array) else None
        if not is_list_value(items):
            return []
        return [decode_value(v) for v in items]
    mapping = value.get("mapValue")
    if mapping is not None:
        fields = mapping.get("fields") if is_mapping_value(mapping) else None
        if not is_mapping_value(fields):
            return None
        return {k: decode_value(v) for k, v in fields.items()}
    for _, key in _SCALAR_KEYS:
        raw = value.get(key)
        if raw is not None:
            return raw
    return None
