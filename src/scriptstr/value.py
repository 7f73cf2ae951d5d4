"""
String Value

The runtime string type of the scripting language.

A StringValue is an immutable sequence of Unicode scalar values stored as
UTF-8 bytes. Storage is variable-width; every public operation works in
scalar-value units:

    - length() counts scalar values, not bytes
    - indexes passed to scalar_at()/with_replaced_at() are scalar indexes
    - equality and ordering compare scalar values pointwise

Translation from scalar indexes to byte offsets stays inside this class.

IMPORTANT:
    Operations never mutate a value. Indexed "assignment" in a script
    (s[i] = c) is with_replaced_at() plus a store-back of the result
    into the variable, which is the evaluator's job.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional, Union

from scriptstr.errors import (
    IndexOutOfRangeError,
    InvalidScalarError,
    UnsupportedOperandError,
)
from scriptstr.scalars import check_scalar


def _utf8_width(lead: int) -> int:
    """Number of bytes in the UTF-8 sequence starting with ``lead``."""
    if lead <= 0x7F:
        return 1
    if lead <= 0xDF:
        return 2
    if lead <= 0xEF:
        return 3
    return 4


def _is_continuation(byte: int) -> bool:
    return byte & 0xC0 == 0x80


class StringValue:
    """
    Immutable, UTF-8 backed string of Unicode scalar values.

    Example:
        greeting = StringValue("hello, world!")
        greeting.length()                      # 13
        greeting.with_replaced_at(12, "?")     # StringValue('hello, world?')
        greeting + 42                          # StringValue('hello, world!42')
    """

    __slots__ = ("_data", "_length")

    def __init__(self, text: str = ""):
        try:
            data = text.encode("utf-8")
        except UnicodeEncodeError as err:
            raise InvalidScalarError(ord(text[err.start])) from err
        self._data = data
        self._length = len(text)

    @classmethod
    def _from_utf8(cls, data: bytes, length: int) -> StringValue:
        # Callers guarantee ``data`` is valid UTF-8 holding ``length`` scalars.
        value = cls.__new__(cls)
        value._data = data
        value._length = length
        return value

    @classmethod
    def from_scalars(cls, scalars: Iterable[Union[int, str]]) -> StringValue:
        """
        Wrap a sequence of scalar values.

        Args:
            scalars: Ints or one-character strings, e.g. decoder output

        Returns:
            New StringValue

        Raises:
            InvalidScalarError: If any element is not a scalar value
        """
        codes = [check_scalar(s) for s in scalars]
        text = "".join(map(chr, codes))
        return cls._from_utf8(text.encode("utf-8"), len(codes))

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def encoded(self) -> bytes:
        """The UTF-8 storage bytes."""
        return self._data

    @property
    def text(self) -> str:
        return self._data.decode("utf-8")

    def scalars(self) -> Iterator[int]:
        """Iterate over the scalar values in order."""
        for ch in self.text:
            yield ord(ch)

    def length(self) -> int:
        """Number of scalar values (user-visible characters)."""
        return self._length

    def __len__(self) -> int:
        return self._length

    # ------------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> None:
        if isinstance(index, bool) or not isinstance(index, int):
            raise UnsupportedOperandError("[]", type(index).__name__)
        if index < 0 or index >= self._length:
            raise IndexOutOfRangeError(index, self._length)

    def _byte_span(self, index: int) -> tuple[int, int]:
        """Byte range [start, end) of the scalar at ``index``."""
        count = -1
        for offset, byte in enumerate(self._data):
            if _is_continuation(byte):
                continue
            count += 1
            if count == index:
                return offset, offset + _utf8_width(byte)
        raise IndexOutOfRangeError(index, self._length)

    def scalar_at(self, index: int) -> int:
        """Scalar value at a scalar index."""
        self._check_index(index)
        start, end = self._byte_span(index)
        return ord(self._data[start:end].decode("utf-8"))

    def with_replaced_at(self, index: int, new_scalar: Union[int, str]) -> StringValue:
        """
        Return a copy with the scalar at ``index`` replaced.

        The replacement may have a different UTF-8 width than the scalar it
        replaces, so the result is rebuilt as prefix + new bytes + suffix.

        Raises:
            IndexOutOfRangeError: If not 0 <= index < length()
            InvalidScalarError: If new_scalar is not a scalar value
        """
        self._check_index(index)
        code = check_scalar(new_scalar)
        start, end = self._byte_span(index)
        data = self._data[:start] + chr(code).encode("utf-8") + self._data[end:]
        return StringValue._from_utf8(data, self._length)

    # ------------------------------------------------------------------
    # Concatenation
    # ------------------------------------------------------------------

    def concat(self, other: object) -> StringValue:
        """
        Concatenate ``other`` after this value.

        Non-string operands are rendered to text first.

        Raises:
            UnsupportedOperandError: If other has no textual rendering
        """
        if isinstance(other, StringValue):
            return StringValue._from_utf8(self._data + other._data, self._length + other._length)

        from scriptstr.coercion import render_value
        return self.concat(StringValue(render_value(other, "+")))

    def __add__(self, other: object) -> StringValue:
        return self.concat(other)

    def __radd__(self, other: object) -> StringValue:
        from scriptstr.coercion import render_value
        return StringValue(render_value(other, "+")).concat(self)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare(self, other: StringValue) -> int:
        """
        Lexicographic comparison over scalar values.

        Returns:
            -1, 0 or 1. A strict prefix sorts before the longer string.
        """
        if not isinstance(other, StringValue):
            raise UnsupportedOperandError("compare", type(other).__name__)
        if self._data == other._data:
            return 0

        for left, right in zip(self.scalars(), other.scalars()):
            if left != right:
                return -1 if left < right else 1

        if self._length < other._length:
            return -1
        return 1 if self._length > other._length else 0

    def _compare_or_none(self, other: object) -> Optional[int]:
        if not isinstance(other, StringValue):
            return None
        return self.compare(other)

    def __eq__(self, other: object) -> bool:
        result = self._compare_or_none(other)
        if result is None:
            return NotImplemented
        return result == 0

    def __ne__(self, other: object) -> bool:
        result = self._compare_or_none(other)
        if result is None:
            return NotImplemented
        return result != 0

    def __lt__(self, other: object) -> bool:
        result = self._compare_or_none(other)
        if result is None:
            return NotImplemented
        return result < 0

    def __le__(self, other: object) -> bool:
        result = self._compare_or_none(other)
        if result is None:
            return NotImplemented
        return result <= 0

    def __gt__(self, other: object) -> bool:
        result = self._compare_or_none(other)
        if result is None:
            return NotImplemented
        return result > 0

    def __ge__(self, other: object) -> bool:
        result = self._compare_or_none(other)
        if result is None:
            return NotImplemented
        return result >= 0

    def __hash__(self) -> int:
        return hash(self._data)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"StringValue({self.text!r})"


__all__ = ["StringValue"]
