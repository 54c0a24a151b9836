"""Tests for aggregation: combine, append_into, errors, MultiError."""

from __future__ import annotations

from terror import ErrorSlot, MultiError, append_into, combine, errors, new


def test_combine_empty() -> None:
    assert combine() is None
    assert combine(None, None) is None


def test_combine_single_is_identity() -> None:
    err = ValueError("only")
    assert combine(None, err, None) is err


def test_combine_many() -> None:
    a, b = ValueError("a"), KeyError("b")
    group = combine(a, None, b)
    assert isinstance(group, MultiError)
    assert isinstance(group, ExceptionGroup)
    assert group.exceptions == (a, b)
    assert str(group) == "a; 'b'"
    assert f"{group}" == "a; 'b'"


def test_combine_flattens_nested_aggregates() -> None:
    a, b, c = ValueError("a"), ValueError("b"), ValueError("c")
    group = combine(combine(a, b), c)
    assert errors(group) == (a, b, c)


def test_detailed_lists_members() -> None:
    one = new("one")
    group = combine(one, ValueError("two"))
    assert group.render_detailed() == (
        "the following errors occurred:\n"
        f" -  one\n     --- at {one.location()} ---\n"
        " -  two"
    )
    assert f"{group:v}" == group.render_detailed()


def test_append_into() -> None:
    slot = ErrorSlot()
    assert not append_into(slot, None)
    assert slot.err is None

    first = ValueError("first")
    assert append_into(slot, first)
    assert slot.err is first

    second = ValueError("second")
    assert append_into(slot, second)
    assert errors(slot.err) == (first, second)

    third = ValueError("third")
    append_into(slot, third)
    assert errors(slot.err) == (first, second, third)
    assert str(slot.err) == "first; second; third"


def test_errors() -> None:
    assert errors(None) == ()
    err = ValueError("x")
    assert errors(err) == (err,)


def test_split_keeps_type() -> None:
    """ExceptionGroup operations derive MultiError, not a bare group."""
    group = combine(ValueError("v"), KeyError("k"), ValueError("w"))
    match, rest = group.split(ValueError)
    assert isinstance(match, MultiError)
    assert str(match) == "v; w"
    assert str(rest) == "'k'"
