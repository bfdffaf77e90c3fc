import pytest
from hypothesis import given, strategies as st

from cmdlisp.errors import ValueConversionError, CommandTypeError
from cmdlisp.types.symbol import Symbol
from cmdlisp.types.value import (
    Value, Int, Str, Bool, List, Nil, INT_MIN, INT_MAX,
    value_to_int, value_to_string, value_to_list, value_to_bool,
    ints_to_values, strings_to_values, bools_to_values,
)

scalars = st.one_of(
    st.integers(min_value=INT_MIN, max_value=INT_MAX).map(Int),
    st.text().map(Str),
    st.booleans().map(Bool),
    st.just(Nil),
)
values = st.recursive(scalars, lambda children: st.lists(children, max_size=5).map(List), max_leaves=25)


@given(values)
def test_sexpr_round_trip(value):
    assert Value.from_sexpr(value.to_sexpr()) == value


@pytest.mark.parametrize(
    "value, expected",
    [
        (Int(42), "42"),
        (Int(-7), "-7"),
        (Str("hello world"), "hello world"),
        (Bool(True), "true"),
        (Bool(False), "false"),
        (Nil, "nil"),
        (List([Int(1), Int(2)]), "(1 2)"),
        (List([]), "()"),
        (List([Str("a"), List([Int(1), Nil]), Bool(True)]), "(a (1 nil) true)"),
    ]
)
def test_to_string(value, expected):
    assert value.to_string() == expected
    assert str(value) == expected


@pytest.mark.parametrize(
    "value, truthy",
    [
        (Nil, False),
        (Int(0), False),
        (Bool(False), False),
        (Int(1), True),
        (Int(-1), True),
        (Bool(True), True),
        (Str(""), True),
        (Str("false"), True),
        (List([]), True),
        (List([Nil]), True),
    ]
)
def test_is_truthy(value, truthy):
    assert value.is_truthy() is truthy


def test_equality_is_structural_and_variant_sensitive():
    assert List([Int(1), Str("a")]) == List([Int(1), Str("a")])
    assert List([Int(1), Int(2)]) != List([Int(2), Int(1)])
    assert Int(1) != Bool(True)
    assert Int(0) != Nil
    assert Str("nil") != Nil
    assert Nil == Nil


def test_list_copies_its_input():
    items = [Int(1)]
    lst = List(items)
    items.append(Int(2))
    assert lst == List([Int(1)])
    assert len(lst) == 1


def test_list_rejects_non_values():
    with pytest.raises(TypeError):
        List([1, 2])


@pytest.mark.parametrize(
    "node, expected",
    [
        (5, Int(5)),
        (True, Bool(True)),
        (False, Bool(False)),
        ("text", Str("text")),
        (Symbol("name"), Str("name")),
        (Nil, Nil),
        (None, Nil),
        ([], List([])),
        ([1, [2, "x"]], List([Int(1), List([Int(2), Str("x")])])),
        (([Symbol("a"), 1], 2), List([Str("a"), Int(1), Int(2)])),
    ]
)
def test_from_sexpr(node, expected):
    assert Value.from_sexpr(node) == expected


def test_floats_truncate_toward_zero():
    assert Value.from_sexpr(3.9) == Int(3)
    assert Value.from_sexpr(-3.9) == Int(-3)


def test_out_of_range_floats_saturate():
    assert Value.from_sexpr(1e30) == Int(INT_MAX)
    assert Value.from_sexpr(-1e30) == Int(INT_MIN)


def test_out_of_range_int_is_rejected():
    with pytest.raises(ValueConversionError):
        Value.from_sexpr(INT_MAX + 1)


@pytest.mark.parametrize("node", [object(), 1 + 2j, {"a": 1}, float("nan")])
def test_unsupported_literal(node):
    with pytest.raises(ValueConversionError, match="Unsupported literal"):
        Value.from_sexpr(node)


def test_extraction_helpers():
    assert value_to_int(Int(3)) == 3
    assert value_to_string(Str("s")) == "s"
    assert value_to_list(List([Int(1)])) == [Int(1)]
    assert value_to_bool(Bool(False)) is False

    with pytest.raises(CommandTypeError, match="Expected integer, got: abc"):
        value_to_int(Str("abc"))
    with pytest.raises(CommandTypeError, match="Expected string"):
        value_to_string(Int(1))
    with pytest.raises(CommandTypeError, match="Expected list"):
        value_to_list(Nil)
    with pytest.raises(CommandTypeError, match="Expected boolean"):
        value_to_bool(Int(1))


def test_bulk_constructors():
    assert ints_to_values([1, 2]) == [Int(1), Int(2)]
    assert strings_to_values(["a"]) == [Str("a")]
    assert bools_to_values([True, False, True]) == [Bool(True), Bool(False), Bool(True)]
