"""
Script Model Objects

Defines the statement-level structure of a parsed script:
    - Let bindings
    - Constant bindings
    - Reassignments
    - Indexed assignments (s[i] = c)
    - Print statements
    - Bare expression statements
    - Scripts (root container)

ARCHITECTURAL RULE:
    These objects:
        - Are immutable
        - Are fully serializable
        - Represent structure, not behavior
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import Position
from .expressions import Expression


class Statement:
    """Base class for statements."""
    pass


@dataclass(frozen=True)
class LetStatement(Statement):
    """
    Introduces a variable: ``let name = value;``

    Re-declaring an existing name shadows the old binding.
    """

    name: str
    value: Expression
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class ConstStatement(Statement):
    """
    Introduces a constant: ``const name = value;``

    The engine rejects any later ``name = ...`` or ``name[i] = ...``.
    A ``let`` of the same name shadows the constant with a variable.
    """

    name: str
    value: Expression
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class AssignStatement(Statement):
    """Rebinds an existing variable: ``name = value;``"""

    name: str
    value: Expression
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class IndexAssignStatement(Statement):
    """
    Replaces one scalar of a string variable: ``name[index] = value;``

    IMPORTANT:
        Strings are immutable. The engine computes
        ``with_replaced_at(index, value)`` and stores the new value back
        into ``name``. Nothing else that shared the old value sees a change.
    """

    name: str
    index: Expression
    value: Expression
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class PrintStatement(Statement):
    value: Expression
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    value: Expression
    position: Optional[Position] = field(default=None, compare=False)


@dataclass(frozen=True)
class Script:
    """
    Root container for a parsed script.

    Properties:
        statements: Statements in source order
        name: Optional script name (file name, fixture name)
    """

    statements: Tuple[Statement, ...] = ()
    name: str = "<script>"

    def variables(self) -> Tuple[str, ...]:
        """
        Names introduced by ``let`` and ``const``, in first-seen order.

        Returns:
            Tuple of variable names without duplicates
        """
        seen = []
        for statement in self.statements:
            if isinstance(statement, (LetStatement, ConstStatement)) and statement.name not in seen:
                seen.append(statement.name)
        return tuple(seen)


__all__ = [
    "Statement",
    "LetStatement",
    "ConstStatement",
    "AssignStatement",
    "IndexAssignStatement",
    "PrintStatement",
    "ExpressionStatement",
    "Script",
]
