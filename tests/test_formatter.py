"""Tests for the value formatter."""

from __future__ import annotations

import math

import pytest

from nixc.formatter import FormatError, ValueFormatter
from nixc.parser import parse
from nixc.values import AttrSet, Bool, Float, Integer, LetIn, List, Null, String, to_python


def fmt(value) -> str:
    return ValueFormatter().format(value)


def assert_close(a, b) -> None:
    """Compare plain Python trees, floats with tolerance."""
    if isinstance(a, float):
        assert isinstance(b, float) and math.isclose(a, b)
    elif isinstance(a, list):
        assert isinstance(b, list) and len(a) == len(b)
        for x, y in zip(a, b):
            assert_close(x, y)
    elif isinstance(a, dict):
        assert isinstance(b, dict) and a.keys() == b.keys()
        for key in a:
            assert_close(a[key], b[key])
    else:
        assert a == b and type(a) is type(b)


class TestFormatter:
    def test_scalars(self):
        assert fmt(Null()) == "null"
        assert fmt(Bool(True)) == "true"
        assert fmt(Bool(False)) == "false"
        assert fmt(Integer(7)) == "7"
        assert fmt(Float(-1.5)) == "-1.5"
        assert fmt(Float(1e16)) == "1e+16"

    def test_list_uses_single_spaces(self):
        assert fmt(List([Integer(1), Integer(2), Null()])) == "[1 2 null]"
        assert fmt(List([])) == "[]"

    def test_attrset_has_no_spaces(self):
        assert fmt(AttrSet({"a": Integer(1), "b": Bool(True)})) == "{a=1,b=true}"
        assert fmt(AttrSet({})) == "{}"


class TestRoundTrip:
    @pytest.mark.parametrize(
        "value",
        [
            Null(),
            Integer(0),
            Integer(2**63 - 1),
            Float(0.1),
            Float(-2.5e-300),
            Float(1e16),
            List([List([]), AttrSet({})]),
            AttrSet({
                "name": List([Integer(1), Float(2.5), Null()]),
                "flag": Bool(False),
                "nested": AttrSet({"x": Float(-0.001), "_y": List([Bool(True)])}),
            }),
        ],
    )
    def test_format_then_parse(self, value):
        reparsed = parse(fmt(value))
        assert reparsed == value
        assert_close(to_python(reparsed), to_python(value))

    def test_parse_then_format(self):
        source = "{a=[1 2 [true]],b={c=null}}"
        assert fmt(parse(source)) == source


class TestFormatErrors:
    @pytest.mark.parametrize(
        "value",
        [
            Integer(-1),
            Integer(2**63),
            Float(math.inf),
            Float(math.nan),
            String("text"),
            LetIn({"x": Integer(1)}, Null()),
            AttrSet({"two words": Null()}),
            AttrSet({"null": Null()}),
            AttrSet({"": Null()}),
            List([Integer(1), Integer(-2)]),
        ],
    )
    def test_unformattable(self, value):
        with pytest.raises(FormatError):
            fmt(value)
