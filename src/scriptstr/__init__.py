"""
scriptstr: String Literal Decoder and Runtime String Value

The string subsystem of a small scripting language.

ARCHITECTURAL GUARANTEE:
------------------------
    decoder  - raw literal text -> Unicode scalar values (leaf)
    value    - immutable StringValue over scalar values
    coercion - textual rendering of non-string operands

The script front end (lexer, parser, model, engine) drives the core the
way a script does. The core knows nothing about it.
"""

__version__ = "0.1.0"

from scriptstr.errors import (
    DecodeError,
    DecodeErrorKind,
    EvalError,
    IndexOutOfRangeError,
    InvalidScalarError,
    LexError,
    ParseError,
    ScriptStrError,
    UnsupportedOperandError,
)
from scriptstr.value import StringValue
from scriptstr.decoder import decode_char, decode_literal, decode_string
from scriptstr.parser import parse_script
from scriptstr.engine import Engine, ExecutionResult

__all__ = [
    "StringValue",
    "decode_literal",
    "decode_string",
    "decode_char",
    "parse_script",
    "Engine",
    "ExecutionResult",
    "ScriptStrError",
    "DecodeError",
    "DecodeErrorKind",
    "InvalidScalarError",
    "IndexOutOfRangeError",
    "UnsupportedOperandError",
    "LexError",
    "ParseError",
    "EvalError",
]
