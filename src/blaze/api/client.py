"""
Client facade for blaze.api.

Provides a convenient object that wraps a caller-supplied transport with simpler method
names and automatic conversion between native Python values and wire models: request
bodies are encoded with blaze.core.codec, and every response goes through
blaze.api.response.parse_documents.

Source of truth
- Value encoding/decoding: blaze.core.codec
- Structured queries: blaze.core.query
- Response normalization: blaze.api.response
- Default paths and page size: blaze.api.config.ClientSettings

Notes
- The transport owns networking, authentication, and retries. Its exceptions propagate
  unchanged; this module never catches them.
- Paths are opaque strings, e.g.
  `projects/project-id/databases/(default)/documents/books/book-id`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from blaze.core.codec import encode
from blaze.core.query import Query, StructuredQuery
from blaze.core.serde import to_body
from blaze.core.typing import NativeValue

from .config import ClientSettings
from .response import QueryResult, parse_documents

logger = logging.getLogger(__name__)

__all__ = [
    "Transport",
    "Client",
]


class Transport(Protocol):
    """
    Synchronous document-store calls. Each returns the raw decoded JSON payload (or a
    response model) on success and raises on failure.
    """

    def create_document(
        self, parent: str, collection_id: str, body: dict[str, Any], **opts: Any
    ) -> Any: ...

    def get(self, name: str, **opts: Any) -> Any: ...

    def patch(self, name: str, body: dict[str, Any], **opts: Any) -> Any: ...

    def delete(self, name: str, **opts: Any) -> Any: ...

    def list(self, parent: str, collection_id: str, **opts: Any) -> Any: ...

    def run_query(self, parent: str, body: dict[str, Any], **opts: Any) -> Any: ...


class Client:
    """
    Facade bound to a transport and ClientSettings.

    Examples:
        >>> from blaze.api import Client, ClientSettings
        >>> client = Client(transport, ClientSettings(project_id="demo"))  # doctest: +SKIP
        >>> client.create_document(None, "books", {"title": "TAOCP"})  # doctest: +SKIP
        QueryResult(documents={'title': 'TAOCP'}, page_token=None)
    """

    def __init__(self, transport: Transport, settings: ClientSettings | None = None) -> None:
        """
        Initialize a client facade.

        Args:
            transport (Transport): Object performing the actual calls.
            settings (ClientSettings | None): Defaults for parent paths and page size;
                ClientSettings.load() is used when omitted.

        Notes:
            This does not perform any I/O beyond reading configuration.
        """
        self.transport = transport
        self.settings = settings if settings is not None else ClientSettings.load()

    def _parent(self, parent: str | None) -> str:
        return parent if parent is not None else self.settings.documents_path()

    # ---------------------------------------------------------------------
    # Write
    # ---------------------------------------------------------------------
    def create_document(
        self,
        parent: str | None,
        collection: str,
        data: Mapping[str, NativeValue],
        **opts: Any,
    ) -> QueryResult:
        """
        Create a new document from a native mapping.

        Args:
            parent (str | None): Parent documents path; settings.documents_path() when None.
            collection (str): Collection id to create the document in.
            data (Mapping[str, NativeValue]): Field values; encoded before sending.
            **opts: Passed through to the transport (e.g. documentId).

        Returns:
            QueryResult: The created document, decoded (single).
        """
        path = self._parent(parent)
        logger.debug("create_document parent=%s collection=%s", path, collection)
        body = to_body(encode(data))
        return parse_documents(self.transport.create_document(path, collection, body, **opts))

    def update_document(
        self, path: str, data: Mapping[str, NativeValue], **opts: Any
    ) -> QueryResult:
        """
        Update the document at `path`; the store creates it when it does not exist.

        Returns:
            QueryResult: The stored document, decoded (single).
        """
        logger.debug("update_document path=%s", path)
        body = to_body(encode(data))
        return parse_documents(self.transport.patch(path, body, **opts))

    def delete_document(self, path: str, **opts: Any) -> QueryResult:
        """Delete the document at `path`; the store answers with an empty body."""
        logger.debug("delete_document path=%s", path)
        return parse_documents(self.transport.delete(path, **opts))

    # ---------------------------------------------------------------------
    # Read
    # ---------------------------------------------------------------------
    def get_document(self, path: str, **opts: Any) -> QueryResult:
        """
        Fetch the document at `path` (collection path plus document id).

        Use list_documents or run_query when the document id is unknown.
        """
        logger.debug("get_document path=%s", path)
        return parse_documents(self.transport.get(path, **opts))

    def list_documents(self, parent: str | None, collection: str, **opts: Any) -> QueryResult:
        """
        List the documents of a collection, one page at a time.

        Args:
            parent (str | None): Parent documents path; settings.documents_path() when None.
            collection (str): Collection id.
            **opts: Passed through; `pageSize` and `pageToken` control paging.
                settings.page_size is used when no pageSize is given.

        Returns:
            QueryResult: Decoded page with the next page token.
        """
        path = self._parent(parent)
        if self.settings.page_size is not None:
            opts.setdefault("pageSize", self.settings.page_size)
        logger.debug("list_documents parent=%s collection=%s", path, collection)
        return parse_documents(self.transport.list(path, collection, **opts))

    def run_query(
        self, parent: str | None, query: Query | StructuredQuery, **opts: Any
    ) -> QueryResult:
        """
        Run a structured query built with blaze.core.query.

        Returns:
            QueryResult: Matching documents in stream order.
        """
        path = self._parent(parent)
        structured = query.build() if isinstance(query, Query) else query
        body = {"structuredQuery": to_body(structured)}
        logger.debug("run_query parent=%s", path)
        return parse_documents(self.transport.run_query(path, body, **opts))
