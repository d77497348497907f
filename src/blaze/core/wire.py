"""
Pydantic v2 models for the document-store wire protocol: values, documents, and
the response envelopes returned by the transport.

Responsibilities
- Define the tagged WireValue union with exactly one populated variant.
- Define the container models (ArrayValue, MapValue, GeoPoint, Timestamp, Document).
- Define the upstream response envelopes (Empty, ListDocumentsResponse, RunQueryResponse).

Style
- Zero-IO (stdlib + pydantic only).
- Python attribute names are lower_snake; serialized names are camelCase via an alias
  generator, so `WireValue(string_value="x")` dumps as `{"stringValue": "x"}`.
- Value models forbid extra keys. Response envelopes ignore unknown keys (readTime,
  transaction, ...) so new server fields never break parsing.

Notes:
    The codec (blaze.core.codec) produces these models on encode and accepts either
    these models or raw camelCase mappings on decode.

Examples:
    >>> from blaze.core.wire import WireValue
    >>> WireValue(integer_value=7).variant
    'integer_value'
    >>> WireValue(string_value="x").model_dump(by_alias=True, exclude_none=True)
    {'stringValue': 'x'}
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from .errors import SchemaError

__all__ = [
    "WIRE_VARIANTS",
    "NULL_VALUE",
    "GeoPoint",
    "Timestamp",
    "ArrayValue",
    "MapValue",
    "WireValue",
    "Document",
    "Empty",
    "ListDocumentsResponse",
    "RunQueryResponse",
]

NULL_VALUE = "NULL_VALUE"

# Populated-variant attribute names, in declaration order.
WIRE_VARIANTS: tuple[str, ...] = (
    "null_value",
    "boolean_value",
    "integer_value",
    "double_value",
    "string_value",
    "bytes_value",
    "reference_value",
    "geo_point_value",
    "timestamp_value",
    "array_value",
    "map_value",
)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
        ser_json_bytes="base64",
    )


class _Envelope(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# ============================================================================
# Values
# ============================================================================


class GeoPoint(_WireModel):
    """
    Latitude/longitude pair.

    Attributes:
        latitude (float): Degrees latitude.
        longitude (float): Degrees longitude.
    """

    latitude: float
    longitude: float


class Timestamp(_WireModel):
    """
    Point in time as whole seconds plus nanoseconds.

    Attributes:
        seconds (int): Seconds since the POSIX epoch.
        nanos (int): Sub-second component. The codec always writes 0.
    """

    seconds: int
    nanos: int = 0


class ArrayValue(_WireModel):
    """Ordered list of values. `values` is None when the server omits it (empty array)."""

    values: list[WireValue] | None = None


class MapValue(_WireModel):
    """String-keyed values. `fields` is None when the server omits it (empty map)."""

    fields: dict[str, WireValue] | None = None


class WireValue(_WireModel):
    """
    One field's value in the document storage protocol.

    Exactly one variant is populated. The null variant is populated by
    `null_value="NULL_VALUE"`; an absent attribute is None.

    Raises:
        pydantic.ValidationError: Wrapping SchemaError when zero or several variants
            are populated.

    Examples:
        >>> from blaze.core.wire import WireValue, ArrayValue
        >>> WireValue(array_value=ArrayValue()).variant
        'array_value'
    """

    null_value: Literal["NULL_VALUE"] | None = None
    boolean_value: bool | None = None
    integer_value: int | None = None
    double_value: float | None = None
    string_value: str | None = None
    bytes_value: bytes | None = None
    reference_value: str | None = None
    geo_point_value: GeoPoint | None = None
    timestamp_value: Timestamp | None = None
    array_value: ArrayValue | None = None
    map_value: MapValue | None = None

    @model_validator(mode="after")
    def _check_single_variant(self) -> WireValue:
        populated = [name for name in WIRE_VARIANTS if getattr(self, name) is not None]
        if len(populated) != 1:
            raise SchemaError(
                f"WireValue must have exactly one populated variant, got {populated or 'none'}"
            )
        return self

    @property
    def variant(self) -> str:
        """Attribute name of the populated variant."""
        for name in WIRE_VARIANTS:
            if getattr(self, name) is not None:
                return name
        raise SchemaError("WireValue has no populated variant")  # pragma: no cover


ArrayValue.model_rebuild()
MapValue.model_rebuild()
WireValue.model_rebuild()


# ============================================================================
# Documents and response envelopes
# ============================================================================


class Document(_Envelope):
    """
    One stored record.

    Attributes:
        name (str | None): Server-assigned resource path (opaque).
        fields (dict[str, WireValue] | None): Field values; None for a document with no fields.
        create_time (str | None): Server timestamp, passed through untouched.
        update_time (str | None): Server timestamp, passed through untouched.
    """

    model_config = ConfigDict(ser_json_bytes="base64")

    name: str | None = None
    fields: dict[str, WireValue] | None = None
    create_time: str | None = None
    update_time: str | None = None


class Empty(_Envelope):
    """Empty response body (e.g., delete)."""


class ListDocumentsResponse(_Envelope):
    """
    Paged listing of documents.

    Attributes:
        documents (list[Document] | None): Page of documents; None when the page is empty.
        next_page_token (str | None): Token for the following page, passed through as-is.
    """

    documents: list[Document] | None = None
    next_page_token: str | None = None


class RunQueryResponse(_Envelope):
    """
    One element of a streamed query response.

    Attributes:
        document (Document | None): Matching document, absent on progress-only messages.
        read_time (str | None): Server read timestamp.
        skipped_results (int | None): Results skipped since the previous message.
        transaction (str | None): Transaction id when the query ran in one.
    """

    document: Document | None = None
    read_time: str | None = None
    skipped_results: int | None = None
    transaction: str | None = None
