"""
Script Lexer

Splits script source into tokens. String and character literals are
located here and their content is handed to the escape decoder, so the
token stream carries decoded values, never raw escape text.

Literal termination is the lexer's job: it scans to the first unescaped
quote on the same line. The decoder only ever sees delimited content.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Union

from scriptstr.decoder import decode_char, decode_string
from scriptstr.errors import DecodeError, DecodeErrorKind, LexError, LexErrorKind, Position
from scriptstr.integers import parse_int_literal
from scriptstr.value import StringValue

logger = logging.getLogger(__name__)


class TokenType(Enum):
    STRING = auto()
    CHAR = auto()
    NUMBER = auto()
    IDENTIFIER = auto()
    LET = auto()
    CONST = auto()
    TRUE = auto()
    FALSE = auto()
    OPERATOR = auto()
    LPAREN = auto()
    RPAREN = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    DOT = auto()
    COMMA = auto()
    SEMICOLON = auto()
    EOF = auto()


KEYWORDS = {
    "let": TokenType.LET,
    "const": TokenType.CONST,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

PUNCTUATION = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ".": TokenType.DOT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
}

# Longest first so that "==" wins over "="
OPERATORS = ("==", "!=", "<=", ">=", "<", ">", "=", "+", "-", "!")

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_NUMBER_RE = re.compile(r"[0-9]+[A-Za-z0-9_]*")


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Properties:
        type: TokenType
        text: Source text of the token
        position: Where the token starts
        value: Decoded value for literals (StringValue, scalar int, or int)
    """

    type: TokenType
    text: str
    position: Position
    value: Optional[Union[StringValue, int]] = None

    def __repr__(self) -> str:
        return f"<{self.type.name}:{self.text!r}>"


def _scan_literal(line: str, start: int, quote: str, line_num: int) -> int:
    """
    Find the closing quote of a literal opened at ``line[start]``.

    Returns:
        Index of the closing quote
    """
    i = start + 1
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i
        i += 1
    raise LexError(
        LexErrorKind.UNTERMINATED_STRING, "", Position(line_num, start + 1)
    )


def _is_valid_identifier(word: str) -> bool:
    """Leading underscores are allowed, but the first other character must be a letter."""
    return word.lstrip("_")[:1].isalpha()


def _decode_error_to_lex(err: DecodeError, line_num: int, content_col: int) -> LexError:
    kind = LexErrorKind.MALFORMED_ESCAPE_SEQUENCE
    if err.kind == DecodeErrorKind.MALFORMED_CHAR:
        kind = LexErrorKind.MALFORMED_CHAR
    return LexError(kind, err.sequence, Position(line_num, content_col + err.offset))


def tokenize(source: str) -> List[Token]:
    """
    Tokenize script source into a token stream.

    Raises:
        LexError: On unexpected characters, unterminated or undecodable
            literals, malformed numbers (including ones outside the
            64-bit range), and identifiers without a letter
    """
    tokens: List[Token] = []
    lines = source.split("\n")

    for line_num, text in enumerate(lines, 1):
        col = 0

        while col < len(text):
            ch = text[col]
            pos = Position(line_num, col + 1)

            if ch in " \t\r":
                col += 1
                continue

            # Line comment
            if text.startswith("//", col):
                break

            if ch in "\"'":
                end = _scan_literal(text, col, ch, line_num)
                raw = text[col + 1:end]
                try:
                    if ch == '"':
                        value = decode_string(raw)
                        ttype = TokenType.STRING
                    else:
                        value = decode_char(raw)
                        ttype = TokenType.CHAR
                except DecodeError as err:
                    raise _decode_error_to_lex(err, line_num, col + 2) from err
                tokens.append(Token(ttype, text[col:end + 1], pos, value))
                col = end + 1
                continue

            if ch in "0123456789":
                match = _NUMBER_RE.match(text, col)
                literal = match.group()
                number = parse_int_literal(literal) if literal.isdigit() else None
                if number is None:
                    raise LexError(LexErrorKind.MALFORMED_NUMBER, literal, pos)
                tokens.append(Token(TokenType.NUMBER, literal, pos, number))
                col = match.end()
                continue

            match = _IDENTIFIER_RE.match(text, col)
            if match:
                word = match.group()
                if not _is_valid_identifier(word):
                    raise LexError(LexErrorKind.MALFORMED_IDENTIFIER, word, pos)
                tokens.append(Token(KEYWORDS.get(word, TokenType.IDENTIFIER), word, pos))
                col = match.end()
                continue

            if ch in PUNCTUATION:
                tokens.append(Token(PUNCTUATION[ch], ch, pos))
                col += 1
                continue

            operator = next((op for op in OPERATORS if text.startswith(op, col)), None)
            if operator is not None:
                tokens.append(Token(TokenType.OPERATOR, operator, pos))
                col += len(operator)
                continue

            raise LexError(LexErrorKind.UNEXPECTED_CHAR, ch, pos)

    tokens.append(Token(TokenType.EOF, "", Position(len(lines), len(lines[-1]) + 1)))
    logger.debug("Tokenized %d lines into %d tokens", len(lines), len(tokens))
    return tokens


__all__ = ["TokenType", "Token", "tokenize"]
