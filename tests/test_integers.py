"""Tests for script integer bounds."""

import pytest
from scriptstr.integers import INT_MAX, INT_MIN, in_int_range, parse_int_literal


def test_bounds():
    assert INT_MAX == 2 ** 63 - 1
    assert INT_MIN == -(2 ** 63)


@pytest.mark.parametrize("value,expected", [
    (0, True),
    (INT_MAX, True),
    (INT_MIN, True),
    (INT_MAX + 1, False),
    (INT_MIN - 1, False),
])
def test_in_int_range(value, expected):
    assert in_int_range(value) is expected


@pytest.mark.parametrize("digits,expected", [
    ("0", 0),
    ("000", 0),
    ("42", 42),
    ("9223372036854775807", INT_MAX),
    ("0009223372036854775807", INT_MAX),
    ("9223372036854775808", None),
    ("9" * 5000, None),
])
def test_parse_int_literal(digits, expected):
    assert parse_int_literal(digits) == expected
