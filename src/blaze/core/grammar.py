"""
Canonical query grammar and helpers.

Defines the builder vocabulary (lower_snake operator and direction names accepted
from callers) and the wire vocabulary (UPPER_SNAKE operator and direction names sent
in structured queries), plus zero-IO normalization helpers between the two.

Design principles
-----------------
1) Two naming standards, never mixed:
   - Builder names (FieldOp, Direction): lower_snake, what callers type.
   - Wire names (FieldOperator, UnaryOperator, CompositeOperator, WireDirection):
     UPPER_SNAKE, exactly what the document store expects.

2) Value-dependent operators:
   - `contains` maps to ARRAY_CONTAINS_ANY for list values and ARRAY_CONTAINS otherwise.
   - `in` maps to IN and only accepts list values.

3) AND only:
   - CompositeOperator has a single member. OR is not supported by the store and is
     never produced by reinterpretation.

Mapping table
-------------

| Builder name | Wire operator                      |
|--------------|------------------------------------|
| eq           | EQUAL                              |
| lt           | LESS_THAN                          |
| lte          | LESS_THAN_OR_EQUAL                 |
| gt           | GREATER_THAN                       |
| gte          | GREATER_THAN_OR_EQUAL              |
| contains     | ARRAY_CONTAINS / ARRAY_CONTAINS_ANY |
| in           | IN                                 |
| asc          | ASCENDING                          |
| desc         | DESCENDING                         |

Examples
--------
>>> from blaze.core.grammar import direction_from_value, field_operator, FieldOp
>>> field_operator(FieldOp.CONTAINS, ["a", "b"]).value
'ARRAY_CONTAINS_ANY'
>>> field_operator("gte", 80).value
'GREATER_THAN_OR_EQUAL'
>>> direction_from_value("DESC").value
'desc'
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Any, Final

from .errors import InvalidArgument
from .native import is_list_value

__all__ = [
    "FieldOp",
    "FieldOperator",
    "UnaryOperator",
    "CompositeOperator",
    "Direction",
    "WireDirection",
    # helpers/validators
    "is_field_op",
    "field_op_from_value",
    "field_operator",
    "direction_from_value",
    "wire_direction",
    "ensure_all_enum_values_lower_snake",
]


# ============================================================================
# BUILDER VOCABULARY
# ============================================================================


class FieldOp(Enum):
    """
    Comparison operators accepted by `where` conditions in `(op, value)` form.

    Notes:
      A bare value (not an `(op, value)` pair) is treated as `eq`.
    """

    EQ = "eq"
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"
    CONTAINS = "contains"
    IN = "in"


class Direction(Enum):
    """Ordering directions accepted by `order`."""

    ASC = "asc"
    DESC = "desc"


# ============================================================================
# WIRE VOCABULARY
# ============================================================================


class FieldOperator(Enum):
    """Operators serialized into FieldFilter.op."""

    EQUAL = "EQUAL"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUAL = "LESS_THAN_OR_EQUAL"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUAL = "GREATER_THAN_OR_EQUAL"
    ARRAY_CONTAINS = "ARRAY_CONTAINS"
    ARRAY_CONTAINS_ANY = "ARRAY_CONTAINS_ANY"
    IN = "IN"


class UnaryOperator(Enum):
    """Operators serialized into UnaryFilter.op."""

    IS_NAN = "IS_NAN"
    IS_NULL = "IS_NULL"


class CompositeOperator(Enum):
    """Operators serialized into CompositeFilter.op (AND only)."""

    AND = "AND"


class WireDirection(Enum):
    """Directions serialized into Order.direction."""

    ASCENDING = "ASCENDING"
    DESCENDING = "DESCENDING"


_SCALAR_OPS: Final[dict[FieldOp, FieldOperator]] = {
    FieldOp.EQ: FieldOperator.EQUAL,
    FieldOp.LT: FieldOperator.LESS_THAN,
    FieldOp.LTE: FieldOperator.LESS_THAN_OR_EQUAL,
    FieldOp.GT: FieldOperator.GREATER_THAN,
    FieldOp.GTE: FieldOperator.GREATER_THAN_OR_EQUAL,
}

_WIRE_DIRECTIONS: Final[dict[Direction, WireDirection]] = {
    Direction.ASC: WireDirection.ASCENDING,
    Direction.DESC: WireDirection.DESCENDING,
}


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def _is_lower_snake(value: str) -> bool:
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def is_field_op(value: Any) -> bool:
    """
    Return True if value names a builder operator (enum member or case-insensitive string).

    Used by the query builder to tell `(op, value)` pairs apart from bare tuple values.
    """
    if isinstance(value, FieldOp):
        return True
    if isinstance(value, str):
        return value.lower() in {op.value for op in FieldOp}
    return False


def field_op_from_value(s: FieldOp | str) -> FieldOp:
    """
    Parse a builder operator name into a FieldOp.

    Args:
      s (FieldOp | str): Operator enum or name (case-insensitive, e.g. "gte").

    Returns:
      FieldOp: Parsed operator.

    Raises:
      InvalidArgument: If s is not a known operator.
    """
    if isinstance(s, FieldOp):
        return s
    name = str(s or "").lower()
    try:
        return FieldOp(name)
    except ValueError as exc:
        allowed = sorted(op.value for op in FieldOp)
        raise InvalidArgument(f"operator must be one of {allowed} (got {s!r})") from exc


def field_operator(op: FieldOp | str, value: Any) -> FieldOperator:
    """
    Resolve a builder operator to its wire operator, using the value as context.

    Args:
      op (FieldOp | str): Builder operator.
      value (Any): Comparison value; decides between ARRAY_CONTAINS and
        ARRAY_CONTAINS_ANY, and is required to be a list for `in`.

    Returns:
      FieldOperator: Wire operator.

    Raises:
      InvalidArgument: If op is unknown, or op is `in` and value is not a list.

    Examples:
      >>> field_operator("contains", "us-west").value
      'ARRAY_CONTAINS'
      >>> field_operator("in", [1, 2, 3]).value
      'IN'
    """
    kind = field_op_from_value(op)
    if kind is FieldOp.CONTAINS:
        if is_list_value(value):
            return FieldOperator.ARRAY_CONTAINS_ANY
        return FieldOperator.ARRAY_CONTAINS
    if kind is FieldOp.IN:
        if not is_list_value(value):
            raise InvalidArgument("Must pass a list value with the `in` field operator")
        return FieldOperator.IN
    return _SCALAR_OPS[kind]


def direction_from_value(d: Direction | WireDirection | str | None) -> Direction:
    """
    Normalize a free-form direction token to a Direction.

    Args:
      d: Direction enum, wire direction, or a case-insensitive token
        ("asc", "desc", "ascending", "descending"). None means ascending.

    Returns:
      Direction: Normalized direction.

    Raises:
      InvalidArgument: If the token does not name a direction.
    """
    if d is None:
        return Direction.ASC
    if isinstance(d, Direction):
        return d
    if isinstance(d, WireDirection):
        return Direction.ASC if d is WireDirection.ASCENDING else Direction.DESC
    token = str(d).lower()
    if token in ("asc", "ascending"):
        return Direction.ASC
    if token in ("desc", "descending"):
        return Direction.DESC
    raise InvalidArgument(f"direction must be one of ['asc', 'desc'] (got {d!r})")


def wire_direction(d: Direction | WireDirection | str | None) -> WireDirection:
    """Resolve any accepted direction token to its wire value."""
    return _WIRE_DIRECTIONS[direction_from_value(d)]


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.

    Examples:
      >>> ensure_all_enum_values_lower_snake([FieldOp, Direction])
    """
    for E in enums:
        for m in E:
            if not _is_lower_snake(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )
