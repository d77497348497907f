import pytest

from blaze.core.errors import InvalidArgument
from blaze.core.grammar import (
    Direction,
    FieldOp,
    WireDirection,
    direction_from_value,
    ensure_all_enum_values_lower_snake,
    field_op_from_value,
    field_operator,
    is_field_op,
    wire_direction,
)


def test_builder_vocabulary_is_lower_snake() -> None:
    ensure_all_enum_values_lower_snake([FieldOp, Direction])


@pytest.mark.parametrize("name", ["eq", "EQ", "Contains", FieldOp.IN])
def test_is_field_op_accepts_names_and_members(name: object) -> None:
    assert is_field_op(name) is True


@pytest.mark.parametrize("name", ["between", 3, None, ("eq",)])
def test_is_field_op_rejects_everything_else(name: object) -> None:
    assert is_field_op(name) is False


def test_field_op_from_value_rejects_unknown_operator() -> None:
    with pytest.raises(InvalidArgument, match="operator must be one of"):
        field_op_from_value("between")


def test_in_with_scalar_raises_invalid_argument() -> None:
    with pytest.raises(InvalidArgument):
        field_operator(FieldOp.IN, "monday")


def test_contains_with_string_is_not_treated_as_list() -> None:
    assert field_operator("contains", "abc").value == "ARRAY_CONTAINS"


@pytest.mark.parametrize(
    "token,expected",
    [
        (None, Direction.ASC),
        ("asc", Direction.ASC),
        ("DESC", Direction.DESC),
        ("descending", Direction.DESC),
        (Direction.DESC, Direction.DESC),
        (WireDirection.ASCENDING, Direction.ASC),
    ],
)
def test_direction_from_value(token: object, expected: Direction) -> None:
    assert direction_from_value(token) is expected


def test_wire_direction_maps_to_upper_names() -> None:
    assert wire_direction("asc") is WireDirection.ASCENDING
    assert wire_direction("desc") is WireDirection.DESCENDING


def test_naming_check_rejects_wire_style_values() -> None:
    with pytest.raises(AssertionError, match="non-lower_snake"):
        ensure_all_enum_values_lower_snake([WireDirection])
