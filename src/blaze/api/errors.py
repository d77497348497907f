"""
Custom exceptions for the blaze.api module.

Purpose
- Provide boundary-layer error types distinct from blaze.core errors.
- Keep blaze.core as the source of truth for InvalidArgument and SchemaError.

Notes
- Transport failures are never wrapped: whatever the transport raises reaches the caller
  unchanged.
"""

from __future__ import annotations


class ApiError(Exception):
    """
    Base class for errors raised by blaze.api.

    Notes:
        Use this as a catch-all for boundary-layer failures, distinct from blaze.core errors.
    """


class ApiConfigError(ApiError):
    """
    Raised when client settings are invalid or incomplete.

    Examples:
        - documents_path() requested without a project id
    """
