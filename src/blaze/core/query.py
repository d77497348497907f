"""
Structured query models and an immutable fluent builder.

Responsibilities
- Define the StructuredQuery wire model and its parts (CollectionSelector, Filter,
  FieldFilter, UnaryFilter, CompositeFilter, Order, FieldReference).
- Build filters and orderings from plain Python conditions.
- Provide `Query`, a frozen builder whose every operation returns a new Query, so a
  base query can be forked into several derived queries safely.

Merge rules
- `from_` prepends a selector: the selector list is most-recent-first.
- `where` with several conditions builds one AND composite in declaration order.
  Merging into an existing filter: none -> set; existing composite -> the new node is
  prepended to its children; existing single filter -> AND(new, existing). Sequential
  `where` calls therefore read newest-first on the wire.
- `order` places new orderings in front of any existing ones.

Examples
--------
>>> from blaze.core.query import from_
>>> q = from_("books").where({"author": "Donald Knuth"}).limit(1)
>>> q.build().limit
1
>>> q.build().where.field_filter.op.value
'EQUAL'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .codec import encode_value
from .errors import InvalidArgument, SchemaError
from .grammar import (
    CompositeOperator,
    Direction,
    FieldOp,
    FieldOperator,
    UnaryOperator,
    WireDirection,
    field_operator,
    is_field_op,
    wire_direction,
)
from .native import is_list_value, is_mapping_value, is_nan_marker
from .serde import to_body
from .typing import Conditions, JsonDict, Orderings
from .wire import WireValue

__all__ = [
    # Models
    "FieldReference",
    "FieldFilter",
    "UnaryFilter",
    "CompositeFilter",
    "Filter",
    "Order",
    "CollectionSelector",
    "StructuredQuery",
    # Builder
    "Query",
    "from_",
    "where",
    "order",
    "limit",
    "offset",
    # Filter/ordering helpers
    "field_filter",
    "unary_filter",
    "create_filter",
    "create_filters",
    "merge_filter",
    "create_order",
    "create_ordering",
    "merge_ordering",
]


class _QueryModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


# ============================================================================
# Models
# ============================================================================


class FieldReference(_QueryModel):
    """Reference to a (possibly dotted) field path."""

    field_path: str


class FieldFilter(_QueryModel):
    """
    Comparison of a field against an encoded value.

    Attributes:
        op (FieldOperator): Wire operator (EQUAL, IN, ARRAY_CONTAINS, ...).
        field (FieldReference): Field under test.
        value (WireValue): Encoded comparison value.
    """

    op: FieldOperator
    field: FieldReference
    value: WireValue


class UnaryFilter(_QueryModel):
    """NaN or null test on a field; carries no comparison value."""

    op: UnaryOperator
    field: FieldReference


class CompositeFilter(_QueryModel):
    """
    AND-combination of filters.

    Attributes:
        op (CompositeOperator): Always AND; the store does not support OR.
        filters (tuple[Filter, ...]): Ordered child filters.

    Raises:
        pydantic.ValidationError: Wrapping SchemaError for any op other than AND.
    """

    op: CompositeOperator = CompositeOperator.AND
    filters: tuple[Filter, ...]

    @field_validator("op", mode="before")
    @classmethod
    def _check_op(cls, v: Any) -> Any:
        value = v.value if isinstance(v, CompositeOperator) else v
        if str(value).upper() != CompositeOperator.AND.value:
            raise SchemaError(f"composite filters support AND only, got {v!r}")
        return CompositeOperator.AND


class Filter(_QueryModel):
    """
    Filter node with exactly one populated variant.

    Raises:
        pydantic.ValidationError: Wrapping SchemaError when zero or several variants
            are populated.
    """

    field_filter: FieldFilter | None = None
    unary_filter: UnaryFilter | None = None
    composite_filter: CompositeFilter | None = None

    @model_validator(mode="after")
    def _check_single_variant(self) -> Filter:
        populated = [
            name
            for name in ("field_filter", "unary_filter", "composite_filter")
            if getattr(self, name) is not None
        ]
        if len(populated) != 1:
            raise SchemaError(
                f"Filter must have exactly one populated variant, got {populated or 'none'}"
            )
        return self


CompositeFilter.model_rebuild()
Filter.model_rebuild()


class Order(_QueryModel):
    """One ordering clause."""

    field: FieldReference
    direction: WireDirection = WireDirection.ASCENDING


class CollectionSelector(_QueryModel):
    """
    Collection to query.

    Attributes:
        collection_id (str): Collection id relative to the query parent.
        all_descendants (bool): When False, only immediate child collections of the
            parent path are selected.
    """

    collection_id: str
    all_descendants: bool = False


class StructuredQuery(_QueryModel):
    """
    Wire shape of a structured query.

    Attributes:
        from_ (tuple[CollectionSelector, ...] | None): Selectors, most-recent-first.
            Serialized as "from".
        where (Filter | None): Filter tree.
        order_by (tuple[Order, ...] | None): Ordering clauses.
        limit (int | None): Maximum number of results.
        offset (int | None): Number of results to skip.
    """

    from_: tuple[CollectionSelector, ...] | None = Field(default=None, alias="from")
    where: Filter | None = None
    order_by: tuple[Order, ...] | None = None
    limit: int | None = None
    offset: int | None = None


# ============================================================================
# Filters
# ============================================================================


def field_filter(op: FieldOperator, field_path: str, value: Any) -> Filter:
    """
    Wrap a FieldFilter in a Filter, encoding the value through the codec.

    Args:
        op (FieldOperator): Resolved wire operator.
        field_path (str): Field under test.
        value (Any): Native comparison value.

    Returns:
        Filter: Filter with field_filter populated.
    """
    return Filter(
        field_filter=FieldFilter(
            op=op,
            field=FieldReference(field_path=field_path),
            value=encode_value(value),
        )
    )


def unary_filter(op: UnaryOperator, field_path: str) -> Filter:
    """Wrap a UnaryFilter in a Filter."""
    return Filter(unary_filter=UnaryFilter(op=op, field=FieldReference(field_path=field_path)))


def create_filter(field_path: str, spec: Any) -> Filter:
    """
    Create the filter for one condition.

    Args:
        field_path (str): Field under test.
        spec (Any): One of:
            - None -> IS_NULL unary filter.
            - NAN marker or a float NaN -> IS_NAN unary filter.
            - (op, value) tuple where op names a FieldOp -> comparison with that operator.
            - anything else -> implicit `eq` comparison with spec as the value.

    Returns:
        Filter: Unary or field filter.

    Raises:
        InvalidArgument: If op is `in` and value is not a list.

    Examples:
        >>> create_filter("grade", ("gte", 80)).field_filter.op.value
        'GREATER_THAN_OR_EQUAL'
        >>> create_filter("grade", None).unary_filter.op.value
        'IS_NULL'
    """
    if spec is None:
        return unary_filter(UnaryOperator.IS_NULL, field_path)
    if is_nan_marker(spec):
        return unary_filter(UnaryOperator.IS_NAN, field_path)
    if isinstance(spec, tuple) and len(spec) == 2 and is_field_op(spec[0]):
        op, value = spec
    else:
        op, value = FieldOp.EQ, spec
    return field_filter(field_operator(op, value), field_path, value)


def create_filters(conditions: Conditions) -> Filter:
    """
    Create one filter from a mapping or ordered pairs of conditions.

    A single condition yields its own filter; several yield an AND composite whose
    children follow declaration order.

    Raises:
        InvalidArgument: If conditions is empty, or any condition is invalid.
    """
    pairs = list(conditions.items()) if is_mapping_value(conditions) else list(conditions)
    if not pairs:
        raise InvalidArgument("where requires at least one condition")
    for pair in pairs:
        if not is_list_value(pair) or len(pair) != 2:
            raise InvalidArgument(f"conditions must be (field, value) pairs (got {pair!r})")
    filters = [create_filter(str(path), spec) for path, spec in pairs]
    if len(filters) == 1:
        return filters[0]
    return Filter(composite_filter=CompositeFilter(filters=tuple(filters)))


def merge_filter(existing: Filter | None, new: Filter) -> Filter:
    """
    Merge a new filter into an existing filter tree.

    - existing is None -> new.
    - existing is a composite -> new is prepended to its children.
    - otherwise -> AND(new, existing).
    """
    if existing is None:
        return new
    if existing.composite_filter is not None:
        comp = existing.composite_filter
        return Filter(
            composite_filter=CompositeFilter(op=comp.op, filters=(new, *comp.filters))
        )
    return Filter(composite_filter=CompositeFilter(filters=(new, existing)))


# ============================================================================
# Orderings
# ============================================================================


def create_order(spec: str | tuple[str, Any] | list[Any]) -> Order:
    """
    Create one ordering from a field name or a (field, direction) pair.

    A two-item list counts as a pair, so JSON-sourced orderings work unchanged.

    Raises:
        InvalidArgument: If spec is neither a field name nor a pair, or the direction
            is not asc/desc.
    """
    if isinstance(spec, str):
        field_path, direction = spec, Direction.ASC
    elif is_list_value(spec) and len(spec) == 2:
        field_path, direction = spec
    else:
        raise InvalidArgument(
            f"ordering must be a field name or (field, direction) pair (got {spec!r})"
        )
    return Order(
        field=FieldReference(field_path=str(field_path)),
        direction=wire_direction(direction),
    )


def create_ordering(orders: Orderings) -> tuple[Order, ...]:
    """Create orderings from a mapping field->direction or an iterable of fields/pairs."""
    if is_mapping_value(orders):
        return tuple(create_order((f, d)) for f, d in orders.items())
    if isinstance(orders, str):
        return (create_order(orders),)
    return tuple(create_order(spec) for spec in orders)


def merge_ordering(
    existing: tuple[Order, ...] | None, new: tuple[Order, ...]
) -> tuple[Order, ...]:
    # New orderings go in front of whatever was there before.
    if not existing:
        return new
    return (*new, *existing)


# ============================================================================
# Builder
# ============================================================================


@dataclass(frozen=True)
class Query:
    """
    Immutable fluent builder over a StructuredQuery.

    Every method returns a new Query; the receiver is never modified.

    Examples:
        >>> base = Query().from_("books")
        >>> recent = base.where({"year": ("gte", 2000)})
        >>> base.build().where is None
        True
        >>> recent.build().where.field_filter.field.field_path
        'year'
    """

    structured: StructuredQuery = field(default_factory=StructuredQuery)

    def _replace(self, **update: Any) -> Query:
        return Query(self.structured.model_copy(update=update))

    def from_(self, collection: str, *, all_descendants: bool = False) -> Query:
        """Prepend a collection selector."""
        selector = CollectionSelector(collection_id=collection, all_descendants=all_descendants)
        return self._replace(from_=(selector, *(self.structured.from_ or ())))

    def where(self, conditions: Conditions) -> Query:
        """Merge one or more conditions into the filter tree (see module notes)."""
        return self._replace(where=merge_filter(self.structured.where, create_filters(conditions)))

    def order(self, orders: Orderings) -> Query:
        """Add ordering clauses in front of any existing ones."""
        return self._replace(
            order_by=merge_ordering(self.structured.order_by, create_ordering(orders))
        )

    def limit(self, n: int) -> Query:
        return self._replace(limit=n)

    def offset(self, n: int) -> Query:
        return self._replace(offset=n)

    def build(self) -> StructuredQuery:
        return self.structured

    def to_body(self) -> JsonDict:
        """camelCase JSON-ready body for the structuredQuery request field."""
        return to_body(self.structured)


def from_(collection: str, *, all_descendants: bool = False) -> Query:
    """Start a query against a collection."""
    return Query().from_(collection, all_descendants=all_descendants)


def where(conditions: Conditions) -> Query:
    """Start a query with a filter."""
    return Query().where(conditions)


def order(orders: Orderings) -> Query:
    """Start a query with orderings."""
    return Query().order(orders)


def limit(n: int) -> Query:
    return Query().limit(n)


def offset(n: int) -> Query:
    return Query().offset(n)

