"""Tests for value rendering used by concatenation and print."""

import pytest
from scriptstr.coercion import render_value, type_name
from scriptstr.errors import UnsupportedOperandError
from scriptstr.value import StringValue


@pytest.mark.parametrize("value,expected", [
    (StringValue("foo"), "foo"),
    ("bar", "bar"),
    (True, "true"),
    (False, "false"),
    (42, "42"),
    (-7, "-7"),
    (0, "0"),
    (10 ** 12, "1000000000000"),
    (1.5, "1.5"),
])
def test_render(value, expected):
    assert render_value(value) == expected


def test_unsupported_type_names_operator():
    with pytest.raises(UnsupportedOperandError) as exc:
        render_value([1, 2], "print")
    assert exc.value.operator == "print"
    assert "list" in str(exc.value)


def test_none_has_no_rendering():
    with pytest.raises(UnsupportedOperandError):
        render_value(None)


@pytest.mark.parametrize("value,expected", [
    (StringValue(""), "string"),
    (True, "bool"),
    (3, "int"),
    (2.0, "float"),
    (None, "NoneType"),
])
def test_type_name(value, expected):
    assert type_name(value) == expected
