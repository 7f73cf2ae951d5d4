"""
Tests for Script model objects.

These tests verify:
    - Statement creation
    - Script container helpers
    - Immutability
"""

import pytest
from scriptstr.expressions import IntegerLiteral, StringLiteral
from scriptstr.model import (
    AssignStatement,
    ConstStatement,
    IndexAssignStatement,
    LetStatement,
    PrintStatement,
    Script,
)
from scriptstr.value import StringValue


class TestStatements:
    """Test statement objects."""

    def test_let(self):
        stmt = LetStatement("s", StringLiteral(StringValue("hello")))
        assert stmt.name == "s"
        assert stmt.value.value == StringValue("hello")

    def test_index_assign(self):
        stmt = IndexAssignStatement("s", IntegerLiteral(12), StringLiteral(StringValue("?")))
        assert stmt.index == IntegerLiteral(12)

    def test_statement_immutable(self):
        stmt = PrintStatement(IntegerLiteral(1))
        with pytest.raises(AttributeError):
            stmt.value = IntegerLiteral(2)


class TestScript:
    """Test the Script container."""

    def test_default_script_is_empty(self):
        script = Script()
        assert script.statements == ()
        assert script.name == "<script>"

    def test_variables_in_first_seen_order(self):
        script = Script(statements=(
            LetStatement("b", IntegerLiteral(1)),
            LetStatement("a", IntegerLiteral(2)),
            AssignStatement("c", IntegerLiteral(3)),
            LetStatement("b", IntegerLiteral(4)),
        ))
        assert script.variables() == ("b", "a")

    def test_variables_include_constants(self):
        script = Script(statements=(
            ConstStatement("limit", IntegerLiteral(3)),
            LetStatement("s", StringLiteral(StringValue("x"))),
        ))
        assert script.variables() == ("limit", "s")
