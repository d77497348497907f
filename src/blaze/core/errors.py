"""
Core exception types raised by the codec, query builder, and wire models.

Provides typed exceptions for core-domain failures:
- InvalidArgument for builder inputs that cannot form a valid query.
- SchemaError for wire models constructed with an impossible shape.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - The codec never raises: unmatched native values encode to the null variant and
      unrecognized wire shapes decode to None.
    - Validators in blaze.core.wire and blaze.core.query raise SchemaError; pydantic
      surfaces it wrapped in a ValidationError during model construction.

Examples:
    Catch a bad operator value.

    >>> from blaze.core.errors import InvalidArgument
    >>> from blaze.core.query import where
    >>> try:
    ...     where({"day": ("in", 5)})
    ... except InvalidArgument as e:
    ...     msg = str(e)
    >>> "list value" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "InvalidArgument",
    "SchemaError",
]


class InvalidArgument(ValueError):
    """Builder input rejected (e.g., the `in` operator given a non-list value)."""


class SchemaError(ValueError):
    """Wire model shape violation (e.g., zero or several populated variants)."""
