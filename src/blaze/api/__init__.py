"""
blaze.api — Boundary layer between blaze.core and a document-store transport.

## Responsibilities
- Normalize the transport's heterogeneous response shapes into one QueryResult.
- Wrap create/get/update/delete/list/run_query calls with automatic encoding of request
  bodies and decoding of responses.
- Load client settings (project, database, default page size) from env/TOML.

## Public API
- Client — facade bound to a caller-supplied Transport.
- Transport — protocol the caller implements (networking, auth, retries live there).
- ClientSettings — configuration with precedence env > TOML > defaults.
- QueryResult, parse_documents — response normalization.

## Import DAG discipline
- Depends only on stdlib, polars, and blaze.core.*.

## Examples
```python
from blaze.api import Client, ClientSettings
from blaze.core.query import from_

client = Client(my_transport, ClientSettings(project_id="demo"))  # doctest: +SKIP
result = client.run_query(None, from_("books").where({"author": "Donald Knuth"}))  # doctest: +SKIP
result.documents  # doctest: +SKIP
```
"""

from __future__ import annotations

from .client import Client, Transport
from .config import ClientSettings
from .response import QueryResult, parse_documents

__all__ = [
    "Client",
    "Transport",
    "ClientSettings",
    "QueryResult",
    "parse_documents",
]
