"""
Serialization helpers for parsed scripts (Script, statements, expressions).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
String literals are stored decoded; re-parsing is never needed to restore
them. Source positions are not serialized.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

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
from scriptstr.value import StringValue


def expr_to_dict(expr: Expression) -> Dict[str, Any]:
    if isinstance(expr, StringLiteral):
        return {"type": "string", "value": expr.value.text}
    if isinstance(expr, CharLiteral):
        return {"type": "char", "value": expr.value}
    if isinstance(expr, IntegerLiteral):
        return {"type": "int", "value": expr.value}
    if isinstance(expr, BooleanLiteral):
        return {"type": "bool", "value": expr.value}
    if isinstance(expr, VariableReference):
        return {"type": "var", "name": expr.name}
    if isinstance(expr, BinaryExpression):
        return {
            "type": "binary",
            "operator": expr.operator.value,
            "left": expr_to_dict(expr.left),
            "right": expr_to_dict(expr.right),
        }
    if isinstance(expr, UnaryExpression):
        return {
            "type": "unary",
            "operator": expr.operator.value,
            "operand": expr_to_dict(expr.operand),
        }
    if isinstance(expr, MethodCall):
        return {
            "type": "call",
            "target": expr_to_dict(expr.target),
            "method": expr.method,
            "arguments": [expr_to_dict(a) for a in expr.arguments],
        }
    if isinstance(expr, FunctionCall):
        return {
            "type": "fn_call",
            "name": expr.name,
            "arguments": [expr_to_dict(a) for a in expr.arguments],
        }
    if isinstance(expr, IndexExpression):
        return {
            "type": "index",
            "target": expr_to_dict(expr.target),
            "index": expr_to_dict(expr.index),
        }
    raise TypeError(f"Unsupported Expression type: {type(expr)}")


def expr_from_dict(d: Dict[str, Any]) -> Expression:
    t = d.get("type")
    if t == "string":
        return StringLiteral(StringValue(d["value"]))
    if t == "char":
        return CharLiteral(d["value"])
    if t == "int":
        return IntegerLiteral(d["value"])
    if t == "bool":
        return BooleanLiteral(d["value"])
    if t == "var":
        return VariableReference(d["name"])
    if t == "binary":
        op = BinaryOperator(d["operator"])
        return BinaryExpression(operator=op, left=expr_from_dict(d["left"]), right=expr_from_dict(d["right"]))
    if t == "unary":
        op = UnaryOperator(d["operator"])
        return UnaryExpression(operator=op, operand=expr_from_dict(d["operand"]))
    if t == "call":
        return MethodCall(
            target=expr_from_dict(d["target"]),
            method=d["method"],
            arguments=tuple(expr_from_dict(a) for a in d.get("arguments", [])),
        )
    if t == "fn_call":
        return FunctionCall(
            name=d["name"],
            arguments=tuple(expr_from_dict(a) for a in d.get("arguments", [])),
        )
    if t == "index":
        return IndexExpression(target=expr_from_dict(d["target"]), index=expr_from_dict(d["index"]))
    raise TypeError(f"Unsupported expression dict type: {t}")


def statement_to_dict(s: Statement) -> Dict[str, Any]:
    if isinstance(s, LetStatement):
        return {"type": "let", "name": s.name, "value": expr_to_dict(s.value)}
    if isinstance(s, ConstStatement):
        return {"type": "const", "name": s.name, "value": expr_to_dict(s.value)}
    if isinstance(s, AssignStatement):
        return {"type": "assign", "name": s.name, "value": expr_to_dict(s.value)}
    if isinstance(s, IndexAssignStatement):
        return {
            "type": "index_assign",
            "name": s.name,
            "index": expr_to_dict(s.index),
            "value": expr_to_dict(s.value),
        }
    if isinstance(s, PrintStatement):
        return {"type": "print", "value": expr_to_dict(s.value)}
    if isinstance(s, ExpressionStatement):
        return {"type": "expr", "value": expr_to_dict(s.value)}
    raise TypeError(f"Unsupported Statement type: {type(s)}")


def statement_from_dict(d: Dict[str, Any]) -> Statement:
    t = d.get("type")
    if t == "let":
        return LetStatement(name=d["name"], value=expr_from_dict(d["value"]))
    if t == "const":
        return ConstStatement(name=d["name"], value=expr_from_dict(d["value"]))
    if t == "assign":
        return AssignStatement(name=d["name"], value=expr_from_dict(d["value"]))
    if t == "index_assign":
        return IndexAssignStatement(
            name=d["name"],
            index=expr_from_dict(d["index"]),
            value=expr_from_dict(d["value"]),
        )
    if t == "print":
        return PrintStatement(value=expr_from_dict(d["value"]))
    if t == "expr":
        return ExpressionStatement(value=expr_from_dict(d["value"]))
    raise TypeError(f"Unsupported statement dict type: {t}")


def script_to_dict(s: Script) -> Dict[str, Any]:
    return {
        "name": s.name,
        "statements": [statement_to_dict(st) for st in s.statements],
    }


def script_from_dict(d: Dict[str, Any]) -> Script:
    return Script(
        statements=tuple(statement_from_dict(st) for st in d.get("statements", [])),
        name=d.get("name", "<script>"),
    )


def script_to_json(s: Script) -> str:
    return json.dumps(script_to_dict(s), sort_keys=True)


def script_from_json(s: str) -> Script:
    d = json.loads(s)
    return script_from_dict(d)


def script_to_yaml(s: Script) -> str:
    return yaml.safe_dump(script_to_dict(s), allow_unicode=True)


def script_from_yaml(s: str) -> Script:
    d = yaml.safe_load(s)
    return script_from_dict(d)
