"""
Error taxonomy for the string core and the script front end.

Every layer raises its own exception type:

    Decoder    -> DecodeError, InvalidScalarError
    StringValue -> IndexOutOfRangeError, UnsupportedOperandError
    Lexer      -> LexError
    Parser     -> ParseError
    Engine     -> EvalError

The core never recovers from its own errors. Callers higher up wrap them
with a source position (``raise ... from err``) and decide what to do.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScriptStrError(Exception):
    """Base class for every error raised by this package."""
    pass


class DecodeErrorKind(Enum):
    """Why a string or character literal failed to decode."""

    MALFORMED_ESCAPE = "malformed escape"
    TRUNCATED_ESCAPE = "truncated escape"
    INVALID_CODE_POINT = "invalid code point"
    UNESCAPED_DELIMITER = "unescaped delimiter"
    MALFORMED_CHAR = "malformed character literal"


class DecodeError(ScriptStrError, ValueError):
    """
    A literal could not be decoded.

    Properties:
        kind: DecodeErrorKind
        offset: Index within the raw literal where the problem starts
        sequence: The offending source text (e.g. the escape sequence)
    """

    def __init__(self, kind: DecodeErrorKind, offset: int, sequence: str = ""):
        self.kind = kind
        self.offset = offset
        self.sequence = sequence
        detail = f": {sequence!r}" if sequence else ""
        super().__init__(f"{kind.value} at offset {offset}{detail}")


class InvalidScalarError(ScriptStrError, ValueError):
    """A value is not a Unicode scalar value."""

    def __init__(self, value: object):
        self.value = value
        if isinstance(value, int):
            shown = f"{value:#x}"
        else:
            shown = repr(value)
        super().__init__(f"Not a Unicode scalar value: {shown}")


class IndexOutOfRangeError(ScriptStrError, IndexError):
    """A scalar index is outside ``0 <= index < length``."""

    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"String index {index} out of range for length {length}")


class UnsupportedOperandError(ScriptStrError, TypeError):
    """An operand has no textual rendering (or no meaning) for an operator."""

    def __init__(self, operator: str, type_name: str):
        self.operator = operator
        self.type_name = type_name
        super().__init__(f"Unsupported operand type for '{operator}': {type_name}")


@dataclass(frozen=True)
class Position:
    """A 1-based line/column location in script source."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, position {self.column}"


class LexErrorKind(Enum):
    UNEXPECTED_CHAR = "Unexpected character"
    UNTERMINATED_STRING = "Open string is not terminated"
    MALFORMED_ESCAPE_SEQUENCE = "Invalid escape sequence"
    MALFORMED_NUMBER = "Invalid number"
    MALFORMED_CHAR = "Invalid character"
    MALFORMED_IDENTIFIER = "Variable name is not proper"


class LexError(ScriptStrError):
    """Error when tokenizing script text."""

    def __init__(self, kind: LexErrorKind, detail: str, position: Position):
        self.kind = kind
        self.detail = detail
        self.position = position
        message = f"{kind.value}: {detail!r}" if detail else kind.value
        super().__init__(f"{message} ({position})")


class ParseError(ScriptStrError):
    """Error when parsing a token stream into a Script."""

    def __init__(self, message: str, position: Optional[Position] = None):
        self.message = message
        self.position = position
        if position is None:
            super().__init__(f"{message} at the end of the script")
        else:
            super().__init__(f"{message} ({position})")


class EvalError(ScriptStrError):
    """Error raised while executing a script."""

    def __init__(self, message: str, position: Optional[Position] = None):
        self.message = message
        self.position = position
        suffix = f" ({position})" if position is not None else ""
        super().__init__(f"{message}{suffix}")


__all__ = [
    "ScriptStrError",
    "DecodeErrorKind",
    "DecodeError",
    "InvalidScalarError",
    "IndexOutOfRangeError",
    "UnsupportedOperandError",
    "Position",
    "LexErrorKind",
    "LexError",
    "ParseError",
    "EvalError",
]
