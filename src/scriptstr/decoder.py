"""
Escape Decoder

Turns the raw text of a literal (the characters typed between the quote
delimiters) into a sequence of Unicode scalar values.

Supported escape directives:

    \\\\          backslash
    \\<quote>     the active quote character only
    \\n \\t \\r \\0 control characters
    \\xHH        exactly 2 hex digits (0-255)
    \\uHHHH      exactly 4 hex digits, surrogates rejected
    \\UHHHHHHHH  exactly 8 hex digits, surrogates and > 0x10FFFF rejected

Directive dispatch is a lookup table keyed on the character after the
backslash. Hex directives share one fixed-width consumer.

Decoding is atomic: either the whole literal decodes or a DecodeError
is raised. There are no placeholder characters and no partial results.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from scriptstr.errors import DecodeError, DecodeErrorKind
from scriptstr.scalars import SURROGATE_MAX, SURROGATE_MIN, is_scalar
from scriptstr.value import StringValue

logger = logging.getLogger(__name__)

BACKSLASH = "\\"
HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class EscapeDirective:
    """
    One entry of the escape table.

    Properties:
        name: Human-readable directive name
        scalar: Fixed result for single-character directives
        hex_digits: Number of hex digits consumed by numeric directives
    """

    name: str
    scalar: Optional[int] = None
    hex_digits: int = 0


ESCAPE_TABLE = {
    "\\": EscapeDirective("backslash", scalar=0x5C),
    "n": EscapeDirective("line feed", scalar=0x0A),
    "t": EscapeDirective("tab", scalar=0x09),
    "r": EscapeDirective("carriage return", scalar=0x0D),
    "0": EscapeDirective("null", scalar=0x00),
    "x": EscapeDirective("8-bit hex", hex_digits=2),
    "u": EscapeDirective("16-bit hex", hex_digits=4),
    "U": EscapeDirective("32-bit hex", hex_digits=8),
}


def _fail(kind: DecodeErrorKind, offset: int, sequence: str) -> DecodeError:
    logger.debug("Literal decode failed: %s at offset %d (%r)", kind.value, offset, sequence)
    return DecodeError(kind, offset, sequence)


def _consume_hex(raw: str, escape_start: int, width: int) -> int:
    """Read exactly ``width`` hex digits following a ``\\x``, ``\\u`` or ``\\U``."""
    digits_start = escape_start + 2
    digits = raw[digits_start:digits_start + width]

    for i, ch in enumerate(digits):
        if ch not in HEX_DIGITS:
            raise _fail(
                DecodeErrorKind.MALFORMED_ESCAPE,
                escape_start,
                raw[escape_start:digits_start + i + 1],
            )

    if len(digits) < width:
        raise _fail(DecodeErrorKind.TRUNCATED_ESCAPE, escape_start, raw[escape_start:])

    return int(digits, 16)


def decode_literal(raw: str, quote: str = '"') -> tuple[int, ...]:
    """
    Decode literal content into scalar values.

    Args:
        raw: Literal content with the delimiters already stripped
        quote: The active quote character

    Returns:
        Tuple of scalar values

    Raises:
        DecodeError: On a malformed or truncated escape, an invalid
            code point, or an unescaped quote character
        ValueError: If ``quote`` is not a single non-backslash character
    """
    if len(quote) != 1 or quote == BACKSLASH:
        raise ValueError(f"Invalid quote character: {quote!r}")

    scalars: list[int] = []
    pos = 0
    end = len(raw)

    while pos < end:
        ch = raw[pos]

        if ch == quote:
            raise _fail(DecodeErrorKind.UNESCAPED_DELIMITER, pos, ch)

        if ch != BACKSLASH:
            code = ord(ch)
            if SURROGATE_MIN <= code <= SURROGATE_MAX:
                raise _fail(DecodeErrorKind.INVALID_CODE_POINT, pos, ch)
            scalars.append(code)
            pos += 1
            continue

        if pos + 1 >= end:
            raise _fail(DecodeErrorKind.TRUNCATED_ESCAPE, pos, ch)

        key = raw[pos + 1]
        if key == quote:
            scalars.append(ord(quote))
            pos += 2
            continue

        directive = ESCAPE_TABLE.get(key)
        if directive is None:
            raise _fail(DecodeErrorKind.MALFORMED_ESCAPE, pos, raw[pos:pos + 2])

        if directive.scalar is not None:
            scalars.append(directive.scalar)
            pos += 2
            continue

        value = _consume_hex(raw, pos, directive.hex_digits)
        consumed = 2 + directive.hex_digits
        if not is_scalar(value):
            raise _fail(DecodeErrorKind.INVALID_CODE_POINT, pos, raw[pos:pos + consumed])
        scalars.append(value)
        pos += consumed

    return tuple(scalars)


def decode_string(raw: str, quote: str = '"') -> StringValue:
    """Decode literal content straight into a StringValue."""
    return StringValue.from_scalars(decode_literal(raw, quote))


def decode_char(raw: str) -> int:
    """
    Decode the content of a character literal (``'c'``).

    The content must decode to exactly one scalar value.
    """
    scalars = decode_literal(raw, "'")
    if len(scalars) != 1:
        raise _fail(DecodeErrorKind.MALFORMED_CHAR, 0, raw)
    return scalars[0]


__all__ = [
    "EscapeDirective",
    "ESCAPE_TABLE",
    "decode_literal",
    "decode_string",
    "decode_char",
]
