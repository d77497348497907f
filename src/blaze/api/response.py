"""
Response normalization for blaze.api.

Overview
- parse_documents(): turns any of the transport's response shapes into a QueryResult.
- QueryResult: decoded documents plus the pass-through page token.

Accepted shapes (models or raw camelCase JSON)
- Empty / {} / None                         -> no documents, no token.
- ListDocumentsResponse without documents   -> no documents, no token.
- ListDocumentsResponse with documents      -> decoded in order, nextPageToken carried as-is.
- list of RunQueryResponse wrappers         -> decoded documents in order; None elements and
                                               wrappers without a document (progress
                                               messages) are dropped.
- a single Document                         -> a single decoded document (not a list).

Notes
- Field decoding is delegated to blaze.core.codec.decode.
- Errors raised by the transport never reach this module; nothing here catches them.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import polars as pl

from blaze.core.codec import decode
from blaze.core.native import is_list_value, is_mapping_value
from blaze.core.serde import json_dumps_canonical
from blaze.core.typing import JsonDict
from blaze.core.wire import Document, Empty, ListDocumentsResponse, RunQueryResponse

logger = logging.getLogger(__name__)

__all__ = [
    "QueryResult",
    "parse_documents",
]

_DOCUMENT_KEYS = frozenset({"name", "fields", "createTime", "updateTime"})
_PAGE_KEYS = frozenset({"documents", "nextPageToken"})
_FRAME_ERRORS = (pl.exceptions.PolarsError, TypeError, ValueError, OverflowError)


@dataclass(frozen=True)
class QueryResult:
    """
    Normalized result of any document call.

    Attributes:
        documents (list[JsonDict] | JsonDict): Decoded documents in response order, or a
            single decoded document for get/create/update calls.
        page_token (str | None): Next page token from a listing, passed through unchanged.

    Examples:
        >>> QueryResult().documents
        []
        >>> QueryResult(documents={"a": 1}).is_single
        True
    """

    documents: list[JsonDict] | JsonDict = field(default_factory=list)
    page_token: str | None = None

    @property
    def is_single(self) -> bool:
        """True when the response held one bare document rather than a sequence."""
        return isinstance(self.documents, dict)

    def to_frame(self) -> pl.DataFrame:
        """
        Collect the decoded documents into a Polars DataFrame, one row per document.

        Nested maps become struct columns and arrays become list columns; missing
        fields are null.

        Notes:
            Documents are schemaless, so one field may hold a map in one document and a
            list in another. A column whose values have no common Polars type becomes a
            String column: strings are kept as-is and every other non-null value is
            rendered as canonical JSON. Columns without a conflict keep their inferred type.
        """
        rows = [self.documents] if self.is_single else list(self.documents)
        if not rows:
            return pl.DataFrame()
        try:
            return pl.from_dicts(rows, infer_schema_length=None)
        except _FRAME_ERRORS:
            logger.debug("to_frame: mixed value types, building columns one at a time")
        names = list(dict.fromkeys(name for row in rows for name in row))
        return pl.DataFrame([_column(name, [row.get(name) for row in rows]) for name in names])


def parse_documents(response: Any) -> QueryResult:
    """
    Normalize a transport response into a QueryResult.

    Args:
        response (Any): Response model or raw decoded JSON (see module notes).

    Returns:
        QueryResult: Normalized documents and page token.
    """
    if response is None or isinstance(response, Empty):
        logger.debug("parse_documents: empty response")
        return QueryResult()
    if isinstance(response, ListDocumentsResponse):
        return _parse_page(response.documents, response.next_page_token)
    if isinstance(response, (Document, RunQueryResponse)) or (
        is_mapping_value(response) and not _PAGE_KEYS & response.keys()
    ):
        return _parse_single(response)
    if is_mapping_value(response):
        return _parse_page(response.get("documents"), response.get("nextPageToken"))
    if is_list_value(response):
        return _parse_stream(response)
    logger.debug("parse_documents: unrecognized response type %s", type(response).__name__)
    return QueryResult(documents=decode(response))


def _parse_single(response: Document | RunQueryResponse | Mapping[str, Any]) -> QueryResult:
    if isinstance(response, Mapping) and not response:
        logger.debug("parse_documents: empty response")
        return QueryResult()
    if _is_wrapper(response):
        # A lone stream element is still a stream.
        return _parse_stream([response])
    logger.debug("parse_documents: single document")
    return QueryResult(documents=decode(response))


def _parse_page(documents: Sequence[Any] | None, page_token: str | None) -> QueryResult:
    if documents is None:
        logger.debug("parse_documents: page without documents")
        return QueryResult()
    logger.debug("parse_documents: page of %d documents", len(documents))
    return QueryResult(documents=[decode(d) for d in documents], page_token=page_token)


def _parse_stream(elements: Sequence[Any]) -> QueryResult:
    documents: list[JsonDict] = []
    for element in elements:
        if element is None:
            continue
        if _is_wrapper(element):
            doc = (
                element.document
                if isinstance(element, RunQueryResponse)
                else element.get("document")
            )
            if doc is None:
                continue
            documents.append(decode(doc))
        else:
            documents.append(decode(element))
    logger.debug(
        "parse_documents: stream of %d elements, %d documents", len(elements), len(documents)
    )
    return QueryResult(documents=documents)


def _is_wrapper(element: Any) -> bool:
    if isinstance(element, RunQueryResponse):
        return True
    if isinstance(element, Document):
        return False
    if is_mapping_value(element):
        return "document" in element or not _DOCUMENT_KEYS & element.keys()
    return False


def _column(name: str, values: list[Any]) -> pl.Series:
    kinds = {_kind(v) for v in values if v is not None}
    if len(kinds) <= 1:
        try:
            return pl.Series(name, values)
        except _FRAME_ERRORS:
            logger.debug("to_frame: column %s has no common type", name)
    return pl.Series(name, [_as_text(v) for v in values], dtype=pl.String)


def _kind(value: Any) -> str:
    if is_mapping_value(value):
        return "map"
    if is_list_value(value):
        return "list"
    return "scalar"


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json_dumps_canonical(value, default=str)
