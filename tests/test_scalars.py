"""Tests for Unicode scalar value rules."""

import pytest
from scriptstr.errors import InvalidScalarError
from scriptstr.scalars import MAX_SCALAR, check_scalar, is_scalar


class TestIsScalar:
    """Range membership."""

    @pytest.mark.parametrize("value", [0, 0x41, 0xD7FF, 0xE000, 0xFFFF, 0x10000, MAX_SCALAR])
    def test_valid(self, value):
        assert is_scalar(value)

    @pytest.mark.parametrize("value", [-1, 0xD800, 0xDBFF, 0xDC00, 0xDFFF, MAX_SCALAR + 1])
    def test_invalid(self, value):
        assert not is_scalar(value)


class TestCheckScalar:
    """Validation of ints and one-character strings."""

    def test_int_passes_through(self):
        assert check_scalar(0x1F603) == 0x1F603

    def test_single_character_string(self):
        assert check_scalar("é") == 0xE9

    @pytest.mark.parametrize("value", [0xD800, 0x110000, -5, "ab", "", True, 1.0, None])
    def test_rejected(self, value):
        with pytest.raises(InvalidScalarError):
            check_scalar(value)
