"""
Script Engine

Executes parsed scripts against a variable scope.

The Engine:
1. Takes a Script (or source text, which it parses)
2. Steps through each statement
3. Maintains execution state (variable scope, printed output)
4. Routes string operators to StringValue

Indexed assignment is rebind-on-write: ``s[i] = c`` evaluates
``s.with_replaced_at(i, c)`` and stores the new value back into ``s``.
No string is ever changed in place.

Integers are signed 64-bit; arithmetic that overflows is an EvalError.
Method and function calls dispatch through a FunctionRegistry that hosts
extend with Engine.register_fn.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Set

from scriptstr.coercion import render_value, type_name
from scriptstr.config import EngineSettings, get_settings
from scriptstr.errors import (
    EvalError,
    IndexOutOfRangeError,
    InvalidScalarError,
    Position,
    ScriptStrError,
    UnsupportedOperandError,
)
from scriptstr.expressions import (
    COMPARISON_OPERATORS,
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
from scriptstr.functions import FunctionRegistry
from scriptstr.integers import in_int_range
from scriptstr.parser import parse_expression, parse_script
from scriptstr.value import StringValue

logger = logging.getLogger(__name__)


@dataclass
class ExecutionState:
    """Runtime state during script execution."""
    # Variable bindings
    scope: Dict[str, Any] = field(default_factory=dict)
    # Rendered print() output, in order
    output: List[str] = field(default_factory=list)
    # Names bound by const
    constants: Set[str] = field(default_factory=set)


@dataclass
class ExecutionResult:
    """The result of executing a script."""
    scope: Dict[str, Any]
    output: List[str]

    def get(self, name: str) -> Any:
        """Final value of a variable."""
        if name not in self.scope:
            raise KeyError(f"Variable not found: {name}")
        return self.scope[name]

    def __repr__(self) -> str:
        return f"<ExecutionResult: vars={len(self.scope)} printed={len(self.output)}>"


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _compare_ints(left: int, right: int) -> int:
    if left < right:
        return -1
    return 1 if left > right else 0


_ORDER_TESTS = {
    BinaryOperator.EQUALS: lambda c: c == 0,
    BinaryOperator.NOT_EQUALS: lambda c: c != 0,
    BinaryOperator.LESS_THAN: lambda c: c < 0,
    BinaryOperator.LESS_EQUAL: lambda c: c <= 0,
    BinaryOperator.GREATER_THAN: lambda c: c > 0,
    BinaryOperator.GREATER_EQUAL: lambda c: c >= 0,
}


_TOO_DEEP = "Expression is nested too deeply"


class Engine:
    """
    Script execution engine.

    Usage:
        engine = Engine(on_print=print)
        result = engine.run('let s = "foo"; print(s + " bar");')
        result.output      # ['foo bar']

        engine.register_fn("twice", lambda s: s + s, [StringValue])
        engine.eval_expression('"ab".twice()')   # StringValue('abab')
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        on_print: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._on_print = on_print

        self._statement_handlers = {
            LetStatement: self._exec_let,
            ConstStatement: self._exec_const,
            AssignStatement: self._exec_assign,
            IndexAssignStatement: self._exec_index_assign,
            PrintStatement: self._exec_print,
            ExpressionStatement: self._exec_expression,
        }
        self._expression_handlers = {
            StringLiteral: self._eval_string,
            CharLiteral: self._eval_char,
            IntegerLiteral: self._eval_literal,
            BooleanLiteral: self._eval_literal,
            VariableReference: self._eval_variable,
            BinaryExpression: self._eval_binary,
            UnaryExpression: self._eval_unary,
            MethodCall: self._eval_method_call,
            FunctionCall: self._eval_function_call,
            IndexExpression: self._eval_index,
        }

        self._functions = FunctionRegistry()
        self.register_fn("len", StringValue.length, [StringValue])

    def register_fn(
        self,
        name: str,
        fn: Callable[..., Any],
        arg_types: Optional[Sequence[type]] = None,
    ) -> None:
        """
        Make a Python callable available to scripts.

        Args:
            name: Name used in ``name(...)`` and ``value.name(...)``
            fn: Callable receiving script values
            arg_types: Script value types the call must match, or None
                to accept any arguments

        A returned str becomes a StringValue. Returned strings and ints
        are held to the same limits as values the script builds itself.
        """
        self._functions.register(name, fn, arg_types)
        logger.debug("Registered function %s", name)

    def run(self, source: str, name: str = "<script>") -> ExecutionResult:
        """Parse and execute script source."""
        return self.execute(parse_script(source, name=name))

    def execute(self, script: Script, scope: Optional[Dict[str, Any]] = None) -> ExecutionResult:
        """
        Execute a parsed script.

        Args:
            script: Parsed Script
            scope: Optional initial variable bindings (copied)

        Returns:
            ExecutionResult with final scope and printed output

        Raises:
            EvalError: On the first failing statement
        """
        state = ExecutionState(scope=dict(scope or {}))
        logger.debug("Executing %s (%d statements)", script.name, len(script.statements))

        for statement in script.statements:
            try:
                self._execute_statement(statement, state)
            except EvalError as err:
                logger.warning("Script %s failed: %s", script.name, err)
                raise

        return ExecutionResult(scope=state.scope, output=state.output)

    def eval_expression(self, source: str, scope: Optional[Dict[str, Any]] = None) -> Any:
        """Evaluate a single expression against an optional scope."""
        expr = parse_expression(source)
        state = ExecutionState(scope=dict(scope or {}))
        try:
            return self._evaluate(expr, state)
        except RecursionError as err:
            raise EvalError(_TOO_DEEP, getattr(expr, "position", None)) from err

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _execute_statement(self, statement: Statement, state: ExecutionState) -> None:
        handler = self._statement_handlers.get(type(statement))
        if handler is None:
            raise EvalError(f"No handler for {type(statement).__name__}")
        try:
            handler(statement, state)
        except RecursionError as err:
            raise EvalError(_TOO_DEEP, statement.position) from err

    def _exec_let(self, stmt: LetStatement, state: ExecutionState) -> None:
        state.scope[stmt.name] = self._evaluate(stmt.value, state)
        state.constants.discard(stmt.name)
        logger.debug("let %s", stmt.name)

    def _exec_const(self, stmt: ConstStatement, state: ExecutionState) -> None:
        state.scope[stmt.name] = self._evaluate(stmt.value, state)
        state.constants.add(stmt.name)
        logger.debug("const %s", stmt.name)

    @staticmethod
    def _check_assignable(name: str, state: ExecutionState, position: Optional[Position]) -> None:
        if name not in state.scope:
            raise EvalError(f"Variable not found: {name}", position)
        if name in state.constants:
            raise EvalError(f"Cannot assign to constant: {name}", position)

    def _exec_assign(self, stmt: AssignStatement, state: ExecutionState) -> None:
        self._check_assignable(stmt.name, state, stmt.position)
        state.scope[stmt.name] = self._evaluate(stmt.value, state)

    def _exec_index_assign(self, stmt: IndexAssignStatement, state: ExecutionState) -> None:
        self._check_assignable(stmt.name, state, stmt.position)

        current = state.scope[stmt.name]
        if not isinstance(current, StringValue):
            raise EvalError(
                f"Cannot index into a value of type {type_name(current)}", stmt.position
            )

        index = self._evaluate(stmt.index, state)
        if not _is_int(index):
            raise EvalError(f"String index must be an int, not {type_name(index)}", stmt.position)

        replacement = self._evaluate(stmt.value, state)
        if not isinstance(replacement, StringValue) or replacement.length() != 1:
            raise EvalError(
                "Only a single character can be assigned into a string", stmt.position
            )

        try:
            updated = current.with_replaced_at(index, replacement.scalar_at(0))
        except IndexOutOfRangeError as err:
            raise EvalError(str(err), stmt.position) from err

        # Rebind: the variable now holds a new value
        state.scope[stmt.name] = updated
        logger.debug("%s[%d] replaced", stmt.name, index)

    def _exec_print(self, stmt: PrintStatement, state: ExecutionState) -> None:
        value = self._evaluate(stmt.value, state)
        try:
            text = render_value(value, "print")
        except UnsupportedOperandError as err:
            raise EvalError(str(err), stmt.position) from err

        state.output.append(text)
        if self._on_print is not None:
            self._on_print(text)
        if self._settings.echo_prints:
            print(text)

    def _exec_expression(self, stmt: ExpressionStatement, state: ExecutionState) -> None:
        self._evaluate(stmt.value, state)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _evaluate(self, expr: Expression, state: ExecutionState) -> Any:
        handler = self._expression_handlers.get(type(expr))
        if handler is None:
            raise EvalError(f"No handler for {type(expr).__name__}")
        return handler(expr, state)

    def _checked(self, value: StringValue, position: Optional[Position]) -> StringValue:
        limit = self._settings.max_string_length
        if limit is not None and value.length() > limit:
            raise EvalError(
                f"String length {value.length()} exceeds the limit of {limit}", position
            )
        return value

    def _eval_string(self, expr: StringLiteral, state: ExecutionState) -> StringValue:
        return self._checked(expr.value, expr.position)

    @staticmethod
    def _checked_int(value: int, description: str, position: Optional[Position]) -> int:
        if not in_int_range(value):
            raise EvalError(f"Integer overflow: {description}", position)
        return value

    def _eval_char(self, expr: CharLiteral, state: ExecutionState) -> StringValue:
        try:
            value = StringValue.from_scalars([expr.value])
        except InvalidScalarError as err:
            raise EvalError(str(err), expr.position) from err
        return self._checked(value, expr.position)

    def _eval_literal(self, expr: Expression, state: ExecutionState) -> Any:
        return expr.value

    def _eval_variable(self, expr: VariableReference, state: ExecutionState) -> Any:
        if expr.name not in state.scope:
            raise EvalError(f"Variable not found: {expr.name}", expr.position)
        return state.scope[expr.name]

    def _eval_binary(self, expr: BinaryExpression, state: ExecutionState) -> Any:
        left = self._evaluate(expr.left, state)
        right = self._evaluate(expr.right, state)

        if expr.operator == BinaryOperator.ADD:
            return self._add(left, right, expr.position)

        if expr.operator == BinaryOperator.SUBTRACT:
            if _is_int(left) and _is_int(right):
                return self._checked_int(left - right, f"{left} - {right}", expr.position)
            raise self._operand_error("-", left, right, expr.position)

        if expr.operator in COMPARISON_OPERATORS:
            return _ORDER_TESTS[expr.operator](self._compare(expr, left, right))

        raise EvalError(f"Unknown operator: {expr.operator.value}", expr.position)

    def _add(self, left: Any, right: Any, position: Optional[Position]) -> Any:
        try:
            if isinstance(left, StringValue):
                return self._checked(left.concat(right), position)
            if isinstance(right, StringValue):
                return self._checked(StringValue(render_value(left, "+")).concat(right), position)
        except UnsupportedOperandError as err:
            raise EvalError(str(err), position) from err

        if _is_int(left) and _is_int(right):
            return self._checked_int(left + right, f"{left} + {right}", position)
        raise self._operand_error("+", left, right, position)

    def _compare(self, expr: BinaryExpression, left: Any, right: Any) -> int:
        if isinstance(left, StringValue) and isinstance(right, StringValue):
            return left.compare(right)
        if _is_int(left) and _is_int(right):
            return _compare_ints(left, right)
        if (
            isinstance(left, bool)
            and isinstance(right, bool)
            and expr.operator in (BinaryOperator.EQUALS, BinaryOperator.NOT_EQUALS)
        ):
            return 0 if left == right else 1
        raise self._operand_error(expr.operator.value, left, right, expr.position)

    @staticmethod
    def _operand_error(operator: str, left: Any, right: Any, position: Optional[Position]) -> EvalError:
        return EvalError(
            f"Unsupported operand types for '{operator}': {type_name(left)} and {type_name(right)}",
            position,
        )

    def _eval_unary(self, expr: UnaryExpression, state: ExecutionState) -> Any:
        operand = self._evaluate(expr.operand, state)

        if expr.operator == UnaryOperator.NEGATE and _is_int(operand):
            return self._checked_int(-operand, f"-({operand})", expr.position)
        if expr.operator == UnaryOperator.NOT and isinstance(operand, bool):
            return not operand
        raise EvalError(
            f"Unsupported operand type for '{expr.operator.value}': {type_name(operand)}",
            expr.position,
        )

    def _eval_method_call(self, expr: MethodCall, state: ExecutionState) -> Any:
        target = self._evaluate(expr.target, state)
        arguments = [self._evaluate(arg, state) for arg in expr.arguments]
        return self._call(expr.method, [target] + arguments, expr.position)

    def _eval_function_call(self, expr: FunctionCall, state: ExecutionState) -> Any:
        arguments = [self._evaluate(arg, state) for arg in expr.arguments]
        return self._call(expr.name, arguments, expr.position)

    def _call(self, name: str, arguments: List[Any], position: Optional[Position]) -> Any:
        entry = self._functions.resolve(name, arguments)
        if entry is None:
            signature = ", ".join(type_name(a) for a in arguments)
            raise EvalError(f"Function not found: {name} ({signature})", position)

        try:
            result = entry.fn(*arguments)
            if isinstance(result, str):
                result = StringValue(result)
        except EvalError:
            raise
        except ScriptStrError as err:
            raise EvalError(f"{name}: {err}", position) from err

        if isinstance(result, StringValue):
            return self._checked(result, position)
        if _is_int(result):
            return self._checked_int(result, f"result of {name}", position)
        return result

    def _eval_index(self, expr: IndexExpression, state: ExecutionState) -> StringValue:
        target = self._evaluate(expr.target, state)
        index = self._evaluate(expr.index, state)

        if not isinstance(target, StringValue):
            raise EvalError(f"Cannot index into a value of type {type_name(target)}", expr.position)
        if not _is_int(index):
            raise EvalError(f"String index must be an int, not {type_name(index)}", expr.position)

        try:
            value = StringValue.from_scalars([target.scalar_at(index)])
        except IndexOutOfRangeError as err:
            raise EvalError(str(err), expr.position) from err
        return self._checked(value, expr.position)


__all__ = ["Engine", "ExecutionState", "ExecutionResult"]
