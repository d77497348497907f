"""
Lightweight typing aliases used across the codec, query builder, and adapters.

Provides minimal NewTypes and aliases to improve readability and static checks.
This module contains no runtime logic and is zero-IO.

Examples:
    >>> from blaze.core.typing import DocumentPath, JsonDict
    >>> def describe(path: DocumentPath) -> str:
    ...     return f"doc:{path}"
    >>> describe(DocumentPath("projects/p/databases/(default)/documents/books/b1"))
    'doc:projects/p/databases/(default)/documents/books/b1'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, NewType

__all__ = [
    "DocumentPath",
    "FieldPath",
    "JsonDict",
    "NativeValue",
    "Conditions",
    "Orderings",
]

# Opaque resource paths; never parsed by this package.
DocumentPath = NewType("DocumentPath", str)
FieldPath = NewType("FieldPath", str)

# JSON-like mapping alias for raw payloads crossing the transport boundary.
JsonDict = dict[str, Any]

# Plain Python value tree accepted by the codec. Kept broad: the codec is total.
NativeValue = Any

Conditions = Mapping[str, Any] | Iterable[tuple[str, Any]]
Orderings = Mapping[str, Any] | Iterable[str | tuple[str, Any]]
