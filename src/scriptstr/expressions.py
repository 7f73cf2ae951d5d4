"""
Expression System for scripts

Every expression in a script is represented as an Abstract Syntax Tree
node, never as a string fragment.

This ensures:
    - Literals are decoded exactly once, at parse time
    - The evaluator never sees raw escape sequences
    - Trees can be serialized and compared

ARCHITECTURAL RULE:
    Nodes are structure only. They do not evaluate themselves.
    Evaluation belongs to the engine.
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from scriptstr.errors import Position
from scriptstr.value import StringValue


class Expression(ABC):
    """
    Base class for all AST expressions.

    It exists to provide type-safety for the expression hierarchy.

    DO NOT:
        - Add evaluation logic here (belongs in the engine)
        - Add source re-rendering here (belongs in serialization)
    """
    pass


class BinaryOperator(Enum):
    """
    Binary operators supported in script expressions.

    Comparison operators on strings all derive from the single
    lexicographic scalar-value order of StringValue.
    """

    # Arithmetic / concatenation
    ADD = "+"
    SUBTRACT = "-"

    # Comparison operators
    EQUALS = "=="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_EQUAL = ">="
    LESS_THAN = "<"
    LESS_EQUAL = "<="


COMPARISON_OPERATORS = frozenset({
    BinaryOperator.EQUALS,
    BinaryOperator.NOT_EQUALS,
    BinaryOperator.GREATER_THAN,
    BinaryOperator.GREATER_EQUAL,
    BinaryOperator.LESS_THAN,
    BinaryOperator.LESS_EQUAL,
})


@dataclass(frozen=True)
class StringLiteral(Expression):
    """
    A decoded string literal.

    Example:
        "smile: \\U0001F603"

    Becomes:
        StringLiteral(value=StringValue('smile: 😃'))

    IMPORTANT:
        value is already decoded. The raw escape text is gone.
    """

    value: StringValue
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class CharLiteral(Expression):
    """
    A character literal such as '?'.

    Properties:
        value: The scalar value
    """

    value: int
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class VariableReference(Expression):
    """
    References a variable by name.

    IMPORTANT:
        This object does NOT check that the variable exists.
        Lookup failures are reported by the engine.
    """

    name: str
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Represents a binary arithmetic, concatenation or comparison expression.

    Example:
        a + " bar"

    Becomes:
        BinaryExpression(
            operator=BinaryOperator.ADD,
            left=VariableReference("a"),
            right=StringLiteral(StringValue(" bar"))
        )
    """

    operator: BinaryOperator
    left: Expression
    right: Expression
    position: Optional[Position] = field(default=None, compare=False)


class UnaryOperator(Enum):
    NEGATE = "-"
    NOT = "!"


@dataclass(frozen=True)
class UnaryExpression(Expression):
    operator: UnaryOperator
    operand: Expression
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class MethodCall(Expression):
    """
    A method call on a value, e.g. ``s.len()``.

    Properties:
        target: Expression the method is called on
        method: Method name
        arguments: Argument expressions (may be empty)
    """

    target: Expression
    method: str
    arguments: Tuple[Expression, ...] = ()
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class FunctionCall(Expression):
    """
    A call to a host-registered function, e.g. ``pad(s, 3)``.

    ``s.f(x)`` and ``f(s, x)`` resolve through the same registry.
    """

    name: str
    arguments: Tuple[Expression, ...] = ()
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class IndexExpression(Expression):
    """Reads one scalar out of a string: ``s[i]``."""

    target: Expression
    index: Expression
    position: Optional[Position] = field(default=None, compare=False)


__all__ = [
    "Expression",
    "BinaryOperator",
    "COMPARISON_OPERATORS",
    "StringLiteral",
    "CharLiteral",
    "IntegerLiteral",
    "BooleanLiteral",
    "VariableReference",
    "BinaryExpression",
    "UnaryOperator",
    "UnaryExpression",
    "MethodCall",
    "FunctionCall",
    "IndexExpression",
]
