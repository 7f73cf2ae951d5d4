"""
Script Parser (token stream -> Script model).

Grammar:
    script      := statement* EOF
    statement   := ('let' | 'const') IDENT '=' expr ';'
                 | IDENT '=' expr ';'
                 | IDENT '[' expr ']' '=' expr ';'
                 | 'print' '(' expr ')' ';'
                 | expr ';'
    expr        := additive (COMPARE additive)?
    additive    := unary (('+' | '-') unary)*
    unary       := ('-' | '!') unary | postfix
    postfix     := primary ('.' IDENT '(' args? ')' | '[' expr ']')*
    primary     := STRING | CHAR | NUMBER | 'true' | 'false'
                 | IDENT '(' args? ')' | IDENT | '(' expr ')'
    args        := expr (',' expr)*

The semicolon after the final statement is optional. Nesting deeper than the
interpreter stack allows is reported as a ParseError.
"""

from typing import List, Tuple

from scriptstr.errors import ParseError
from scriptstr.expressions import (
    BinaryExpression,
    BinaryOperator,
    BooleanLiteral,
    CharLiteral,
    Expression,
    FunctionCall,
    IndexExpression,
    IntegerLiteral,
    MethodCall,
    StringLiteral,
    UnaryExpression,
    UnaryOperator,
    VariableReference,
)
from scriptstr.lexer import Token, TokenType, tokenize
from scriptstr.model import (
    AssignStatement,
    ConstStatement,
    ExpressionStatement,
    IndexAssignStatement,
    LetStatement,
    PrintStatement,
    Script,
    Statement,
)

_COMPARISON_MAP = {
    "==": BinaryOperator.EQUALS,
    "!=": BinaryOperator.NOT_EQUALS,
    "<": BinaryOperator.LESS_THAN,
    ">": BinaryOperator.GREATER_THAN,
    "<=": BinaryOperator.LESS_EQUAL,
    ">=": BinaryOperator.GREATER_EQUAL,
}

_ADDITIVE_MAP = {
    "+": BinaryOperator.ADD,
    "-": BinaryOperator.SUBTRACT,
}

_UNARY_MAP = {
    "-": UnaryOperator.NEGATE,
    "!": UnaryOperator.NOT,
}

_TOO_DEEP = "Expression is nested too deeply"


def _is_operator(token: Token, text: str) -> bool:
    return token.type == TokenType.OPERATOR and token.text == text


def _expect(tokens: List[Token], pos: int, ttype: TokenType, description: str) -> int:
    """Consume a token of ``ttype`` or raise ParseError."""
    token = tokens[pos]
    if token.type != ttype:
        found = "end of script" if token.type == TokenType.EOF else repr(token.text)
        raise ParseError(f"Expecting {description}, found {found}", token.position)
    return pos + 1


def _expect_operator(tokens: List[Token], pos: int, text: str) -> int:
    token = tokens[pos]
    if not _is_operator(token, text):
        found = "end of script" if token.type == TokenType.EOF else repr(token.text)
        raise ParseError(f"Expecting '{text}', found {found}", token.position)
    return pos + 1


def _end_statement(tokens: List[Token], pos: int) -> int:
    """Consume the terminating ';' (optional before EOF)."""
    if tokens[pos].type == TokenType.EOF:
        return pos
    return _expect(tokens, pos, TokenType.SEMICOLON, "';' to terminate the statement")


def _parse_statement(tokens: List[Token], pos: int) -> Tuple[Statement, int]:
    token = tokens[pos]

    if token.type in (TokenType.LET, TokenType.CONST):
        name_token = tokens[pos + 1]
        pos = _expect(tokens, pos + 1, TokenType.IDENTIFIER, f"a variable name after '{token.text}'")
        pos = _expect_operator(tokens, pos, "=")
        value, pos = parse_expression_tokens(tokens, pos)
        statement_class = LetStatement if token.type == TokenType.LET else ConstStatement
        return statement_class(name_token.text, value, token.position), _end_statement(tokens, pos)

    if token.type == TokenType.IDENTIFIER:
        following = tokens[pos + 1]

        if token.text == "print" and following.type == TokenType.LPAREN:
            value, next_pos = parse_expression_tokens(tokens, pos + 2)
            next_pos = _expect(tokens, next_pos, TokenType.RPAREN, "')' to close print")
            return PrintStatement(value, token.position), _end_statement(tokens, next_pos)

        if _is_operator(following, "="):
            value, next_pos = parse_expression_tokens(tokens, pos + 2)
            return AssignStatement(token.text, value, token.position), _end_statement(tokens, next_pos)

        if following.type == TokenType.LBRACKET:
            index, next_pos = parse_expression_tokens(tokens, pos + 2)
            next_pos = _expect(tokens, next_pos, TokenType.RBRACKET, "']' to close the index")
            if _is_operator(tokens[next_pos], "="):
                value, next_pos = parse_expression_tokens(tokens, next_pos + 1)
                statement = IndexAssignStatement(token.text, index, value, token.position)
                return statement, _end_statement(tokens, next_pos)
            # Not an assignment: fall through and re-parse as an expression

    value, pos = parse_expression_tokens(tokens, pos)
    return ExpressionStatement(value, token.position), _end_statement(tokens, pos)


def parse_expression_tokens(tokens: List[Token], pos: int) -> Tuple[Expression, int]:
    """Parse a comparison expression (lowest precedence)."""
    left, pos = _parse_additive(tokens, pos)

    token = tokens[pos]
    if token.type == TokenType.OPERATOR and token.text in _COMPARISON_MAP:
        right, pos = _parse_additive(tokens, pos + 1)
        left = BinaryExpression(_COMPARISON_MAP[token.text], left, right, token.position)

    return left, pos


def _parse_additive(tokens: List[Token], pos: int) -> Tuple[Expression, int]:
    """Parse + and - (left associative)."""
    left, pos = _parse_unary(tokens, pos)

    while tokens[pos].type == TokenType.OPERATOR and tokens[pos].text in _ADDITIVE_MAP:
        token = tokens[pos]
        right, pos = _parse_unary(tokens, pos + 1)
        left = BinaryExpression(_ADDITIVE_MAP[token.text], left, right, token.position)

    return left, pos


def _parse_unary(tokens: List[Token], pos: int) -> Tuple[Expression, int]:
    token = tokens[pos]
    if token.type == TokenType.OPERATOR and token.text in _UNARY_MAP:
        operand, pos = _parse_unary(tokens, pos + 1)
        return UnaryExpression(_UNARY_MAP[token.text], operand, token.position), pos

    return _parse_postfix(tokens, pos)


def _parse_postfix(tokens: List[Token], pos: int) -> Tuple[Expression, int]:
    """Parse method calls and indexing chained after a primary."""
    expr, pos = _parse_primary(tokens, pos)

    while True:
        token = tokens[pos]

        if token.type == TokenType.DOT:
            name_token = tokens[pos + 1]
            pos = _expect(tokens, pos + 1, TokenType.IDENTIFIER, "a method name after '.'")
            pos = _expect(tokens, pos, TokenType.LPAREN, f"'(' after method '{name_token.text}'")
            arguments, pos = _parse_arguments(tokens, pos, name_token.text)
            expr = MethodCall(expr, name_token.text, arguments, name_token.position)
            continue

        if token.type == TokenType.LBRACKET:
            index, pos = parse_expression_tokens(tokens, pos + 1)
            pos = _expect(tokens, pos, TokenType.RBRACKET, "']' to close the index")
            expr = IndexExpression(expr, index, token.position)
            continue

        return expr, pos


def _parse_arguments(tokens: List[Token], pos: int, name: str) -> Tuple[Tuple[Expression, ...], int]:
    """Parse call arguments after '(' up to and including ')'."""
    arguments = []
    if tokens[pos].type != TokenType.RPAREN:
        while True:
            arg, pos = parse_expression_tokens(tokens, pos)
            arguments.append(arg)
            if tokens[pos].type == TokenType.COMMA:
                pos += 1
                continue
            break
    pos = _expect(tokens, pos, TokenType.RPAREN, f"')' to close call to '{name}'")
    return tuple(arguments), pos


def _parse_primary(tokens: List[Token], pos: int) -> Tuple[Expression, int]:
    """Parse a literal, variable, or parenthesized expression."""
    token = tokens[pos]

    if token.type == TokenType.STRING:
        return StringLiteral(token.value, token.position), pos + 1
    if token.type == TokenType.CHAR:
        return CharLiteral(token.value, token.position), pos + 1
    if token.type == TokenType.NUMBER:
        return IntegerLiteral(token.value, token.position), pos + 1
    if token.type in (TokenType.TRUE, TokenType.FALSE):
        return BooleanLiteral(token.type == TokenType.TRUE, token.position), pos + 1
    if token.type == TokenType.IDENTIFIER:
        if tokens[pos + 1].type == TokenType.LPAREN:
            arguments, pos = _parse_arguments(tokens, pos + 2, token.text)
            return FunctionCall(token.text, arguments, token.position), pos
        return VariableReference(token.text, token.position), pos + 1

    if token.type == TokenType.LPAREN:
        expr, pos = parse_expression_tokens(tokens, pos + 1)
        pos = _expect(tokens, pos, TokenType.RPAREN, "')' to close the expression")
        return expr, pos

    if token.type == TokenType.EOF:
        raise ParseError("Script is incomplete", token.position)
    raise ParseError(f"Expecting an expression, found {token.text!r}", token.position)


def parse_script(source: str, name: str = "<script>") -> Script:
    """
    Parse script source into a Script.

    Args:
        source: Script text
        name: Name recorded on the Script

    Returns:
        Script with statements in source order

    Raises:
        LexError: If tokenizing fails (including bad string literals)
        ParseError: If the token stream is not a valid script
    """
    tokens = tokenize(source)
    statements = []
    pos = 0

    while tokens[pos].type != TokenType.EOF:
        # Empty statements
        if tokens[pos].type == TokenType.SEMICOLON:
            pos += 1
            continue
        try:
            statement, pos = _parse_statement(tokens, pos)
        except RecursionError as err:
            raise ParseError(_TOO_DEEP, tokens[pos].position) from err
        statements.append(statement)

    return Script(statements=tuple(statements), name=name)


def parse_expression(source: str) -> Expression:
    """Parse a single expression, e.g. for Engine.eval_expression."""
    tokens = tokenize(source)
    try:
        expr, pos = parse_expression_tokens(tokens, 0)
    except RecursionError as err:
        raise ParseError(_TOO_DEEP, tokens[0].position) from err
    if tokens[pos].type != TokenType.EOF:
        raise ParseError(f"Unexpected tokens after expression: {tokens[pos].text!r}", tokens[pos].position)
    return expr


__all__ = [
    "parse_script",
    "parse_expression",
    "parse_expression_tokens",
]
