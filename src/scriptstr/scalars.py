"""
Unicode scalar values.

A scalar value is any code point in [0, 0x10FFFF] except the surrogate
block [0xD800, 0xDFFF]. Everything a StringValue holds is a scalar value.
"""

from typing import Union

from scriptstr.errors import InvalidScalarError

MAX_SCALAR = 0x10FFFF
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF


def is_scalar(value: int) -> bool:
    """True if ``value`` is a valid Unicode scalar value."""
    return 0 <= value <= MAX_SCALAR and not (SURROGATE_MIN <= value <= SURROGATE_MAX)


def check_scalar(value: Union[int, str]) -> int:
    """
    Validate a scalar value given as an int or a one-character string.

    Returns:
        The scalar value as an int

    Raises:
        InvalidScalarError: If the value is out of range, a surrogate,
            or a string that is not exactly one character
    """
    if isinstance(value, bool):
        raise InvalidScalarError(value)
    if isinstance(value, str):
        if len(value) != 1:
            raise InvalidScalarError(value)
        value = ord(value)
    elif not isinstance(value, int):
        raise InvalidScalarError(value)

    if not is_scalar(value):
        raise InvalidScalarError(value)
    return value


__all__ = [
    "MAX_SCALAR",
    "SURROGATE_MIN",
    "SURROGATE_MAX",
    "is_scalar",
    "check_scalar",
]
