"""
Textual rendering of script values.

Used by string concatenation (``"answer: " + 42``) and by ``print``.

Rendering rules:
    StringValue -> its text
    str         -> itself
    bool        -> true / false
    int         -> decimal, leading '-' for negatives, no grouping
    float       -> Python repr form

Anything else has no textual form and raises UnsupportedOperandError.
"""

from scriptstr.errors import UnsupportedOperandError
from scriptstr.value import StringValue


def render_value(value: object, operator: str = "+") -> str:
    """
    Render a value to its canonical text.

    Args:
        value: The operand to render
        operator: Operator name used in the error message

    Raises:
        UnsupportedOperandError: If the type has no textual rendering
    """
    if isinstance(value, StringValue):
        return value.text
    if isinstance(value, str):
        return value
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    raise UnsupportedOperandError(operator, type(value).__name__)


def type_name(value: object) -> str:
    """Script-level type name of a value, for diagnostics."""
    if isinstance(value, StringValue):
        return "string"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    return type(value).__name__


__all__ = ["render_value", "type_name"]
