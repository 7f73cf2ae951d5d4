"""
Script integers.

Integers in a script are signed 64-bit. A literal outside the range is a
lexer error; arithmetic whose result leaves the range is an evaluation
error. Results never wrap around.
"""

INT_MIN = -(1 << 63)
INT_MAX = (1 << 63) - 1

# Digit count of INT_MAX
MAX_DIGITS = len(str(INT_MAX))


def in_int_range(value: int) -> bool:
    """True if ``value`` fits in a script integer."""
    return INT_MIN <= value <= INT_MAX


def parse_int_literal(digits: str):
    """
    Convert a run of decimal digits to a script integer.

    Returns:
        The integer, or None if it does not fit
    """
    significant = digits.lstrip("0")
    # Reject long runs before conversion
    if len(significant) > MAX_DIGITS:
        return None
    value = int(significant or "0")
    return value if value <= INT_MAX else None


__all__ = ["INT_MIN", "INT_MAX", "in_int_range", "parse_int_literal"]
