"""
Tests for StringValue.

These tests verify:
    - Construction from scalar values and text
    - Length in scalar units, independent of UTF-8 width
    - Concatenation, including coercion of non-string operands
    - Lexicographic scalar-value ordering (a total order)
    - Indexed replacement returning a new value
    - Immutability and hashing
"""

import itertools

import pytest
from scriptstr.errors import (
    IndexOutOfRangeError,
    InvalidScalarError,
    UnsupportedOperandError,
)
from scriptstr.value import StringValue


class TestConstruction:
    """Building StringValues."""

    def test_from_scalar_ints(self):
        value = StringValue.from_scalars([0x66, 0x6F, 0x6F])
        assert value == StringValue("foo")

    def test_from_one_character_strings(self):
        assert StringValue.from_scalars("foo") == StringValue("foo")

    def test_empty(self):
        assert StringValue().length() == 0
        assert StringValue.from_scalars([]) == StringValue("")

    @pytest.mark.parametrize("bad", [0xD800, 0xDFFF, 0x110000, -1, "ab", 1.5, True])
    def test_from_scalars_rejects_non_scalars(self, bad):
        with pytest.raises(InvalidScalarError):
            StringValue.from_scalars([0x41, bad])

    def test_text_with_surrogate_rejected(self):
        with pytest.raises(InvalidScalarError):
            StringValue("a\udc00")

    def test_storage_is_utf8(self):
        assert StringValue("a😃").encoded == "a😃".encode("utf-8")


class TestLength:
    """length() counts scalar values."""

    def test_hello_world(self):
        assert StringValue("hello, world!").length() == 13

    def test_multibyte_scalars_count_once(self):
        value = StringValue("a❤😃")
        assert value.length() == 3
        assert len(value.encoded) == 1 + 3 + 4

    def test_len_builtin(self):
        assert len(StringValue("abc")) == 3

    def test_scalars_iterates_code_points(self):
        assert list(StringValue("a😃").scalars()) == [0x61, 0x1F603]


class TestConcat:
    """concat() and the + operator."""

    def test_two_strings(self):
        assert StringValue("foo").concat(StringValue(" bar")) == StringValue("foo bar")

    def test_plus_operator(self):
        assert StringValue("foo") + StringValue(" bar") == StringValue("foo bar")

    def test_empty_operands(self):
        assert StringValue("") + StringValue("x") == StringValue("x")
        assert StringValue("x") + StringValue("") == StringValue("x")

    def test_length_is_sum(self):
        result = StringValue("a😃") + StringValue("❤b")
        assert result.length() == 4

    def test_operands_unchanged(self):
        left = StringValue("foo")
        right = StringValue("bar")
        left + right
        assert left == StringValue("foo")
        assert right == StringValue("bar")

    @pytest.mark.parametrize("operand,expected", [
        (42, "foo42"),
        (-7, "foo-7"),
        (0, "foo0"),
        (True, "footrue"),
        (False, "foofalse"),
        (1.5, "foo1.5"),
        ("!", "foo!"),
    ])
    def test_coerced_right_operand(self, operand, expected):
        assert StringValue("foo") + operand == StringValue(expected)

    def test_coerced_left_operand(self):
        assert 42 + StringValue(" apples") == StringValue("42 apples")

    @pytest.mark.parametrize("operand", [None, [1, 2], object()])
    def test_unsupported_operand(self, operand):
        with pytest.raises(UnsupportedOperandError):
            StringValue("foo").concat(operand)

    def test_unsupported_operand_is_type_error(self):
        with pytest.raises(TypeError):
            StringValue("foo") + None


class TestComparison:
    """Lexicographic order over scalar values."""

    def test_foo_greater_than_bar(self):
        foo = StringValue("foo")
        bar = StringValue("bar")
        assert foo.compare(bar) == 1
        assert bar.compare(foo) == -1
        assert foo >= bar
        assert foo > bar
        assert not foo < bar

    def test_equal(self):
        assert StringValue("abc").compare(StringValue("abc")) == 0
        assert StringValue("abc") == StringValue("abc")
        assert StringValue("abc") <= StringValue("abc")

    def test_prefix_is_less(self):
        assert StringValue("foo") < StringValue("foobar")
        assert StringValue("") < StringValue("a")

    def test_compares_code_points(self):
        """é (U+00E9) sorts after z (U+007A)."""
        assert StringValue("é") > StringValue("z")
        assert StringValue("\uffff") < StringValue("\U00010000")

    def test_not_equal_to_python_str(self):
        assert StringValue("a") != "a"
        assert not (StringValue("a") == "a")

    def test_ordering_against_other_types_raises(self):
        with pytest.raises(TypeError):
            StringValue("a") < "b"

    def test_compare_rejects_other_types(self):
        with pytest.raises(UnsupportedOperandError):
            StringValue("a").compare("a")

    def test_total_order(self):
        """Trichotomy and transitivity over a sample of strings."""
        samples = [
            StringValue(t)
            for t in ["", "a", "ab", "abc", "b", "ba", "é", "😃", "foo", "foobar", "A"]
        ]
        for a, b in itertools.product(samples, repeat=2):
            outcomes = [a < b, a == b, a > b]
            assert outcomes.count(True) == 1
        for a, b, c in itertools.product(samples, repeat=3):
            if a < b and b < c:
                assert a < c

    def test_sort_matches_code_point_order(self):
        texts = ["foo", "bar", "é", "z", "", "😃", "ba"]
        ordered = sorted(StringValue(t) for t in texts)
        assert [v.text for v in ordered] == sorted(texts)


class TestReplacement:
    """with_replaced_at() returns a new value."""

    def test_replace_last(self):
        value = StringValue("hello, world!")
        assert value.with_replaced_at(12, "?") == StringValue("hello, world?")

    def test_original_unchanged(self):
        value = StringValue("hello, world!")
        value.with_replaced_at(0, "H")
        assert value == StringValue("hello, world!")

    def test_wider_replacement(self):
        result = StringValue("abc").with_replaced_at(1, 0x1F603)
        assert result == StringValue("a😃c")
        assert result.length() == 3
        assert len(result.encoded) == 6

    def test_narrower_replacement(self):
        result = StringValue("a😃c").with_replaced_at(1, "b")
        assert result == StringValue("abc")
        assert result.encoded == b"abc"

    def test_index_counts_scalars_not_bytes(self):
        result = StringValue("😃😃x").with_replaced_at(2, "y")
        assert result == StringValue("😃😃y")

    @pytest.mark.parametrize("text", ["", "a", "hello, world!", "😃❤"])
    def test_index_equal_to_length_fails(self, text):
        value = StringValue(text)
        with pytest.raises(IndexOutOfRangeError):
            value.with_replaced_at(value.length(), "c")

    @pytest.mark.parametrize("index", [-1, -13, -100])
    def test_negative_index_fails(self, index):
        with pytest.raises(IndexOutOfRangeError):
            StringValue("hello, world!").with_replaced_at(index, "c")

    def test_index_error_is_index_error(self):
        with pytest.raises(IndexError):
            StringValue("abc").with_replaced_at(3, "c")

    def test_invalid_replacement_scalar(self):
        with pytest.raises(InvalidScalarError):
            StringValue("abc").with_replaced_at(0, 0xD800)

    def test_bool_index_rejected(self):
        with pytest.raises(UnsupportedOperandError):
            StringValue("abc").with_replaced_at(True, "c")

    def test_scalar_at(self):
        value = StringValue("a😃c")
        assert value.scalar_at(1) == 0x1F603
        assert value.scalar_at(2) == ord("c")
        with pytest.raises(IndexOutOfRangeError):
            value.scalar_at(3)


class TestImmutability:
    """StringValues are immutable and hashable."""

    def test_cannot_set_attributes(self):
        value = StringValue("abc")
        with pytest.raises(AttributeError):
            value.text = "xyz"
        with pytest.raises(AttributeError):
            value.extra = 1

    def test_hash_consistent_with_equality(self):
        table = {StringValue("foo"): 1}
        assert table[StringValue("f") + StringValue("oo")] == 1

    def test_str_and_repr(self):
        value = StringValue("foo")
        assert str(value) == "foo"
        assert repr(value) == "StringValue('foo')"
