"""
Host Function Registry

Functions the host makes callable from scripts. Both ``f(a, b)`` and the
method form ``a.f(b)`` resolve here; a method call passes its target as
the first argument.

A registration may declare argument types. Types are script value types
(StringValue, int, bool); bool never matches int. A registration without
types accepts any arguments. When several registrations match, the most
recent wins, so a host can override a built-in.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple


def _matches(value: Any, expected: type) -> bool:
    if expected is int and isinstance(value, bool):
        return False
    return isinstance(value, expected)


@dataclass(frozen=True)
class HostFunction:
    """
    One registered function.

    Properties:
        name: Name scripts call it by
        fn: The Python callable
        arg_types: Declared argument types, or None for any arguments
    """

    name: str
    fn: Callable[..., Any]
    arg_types: Optional[Tuple[type, ...]] = None

    def accepts(self, arguments: Sequence[Any]) -> bool:
        if self.arg_types is None:
            return True
        if len(arguments) != len(self.arg_types):
            return False
        return all(_matches(value, expected) for value, expected in zip(arguments, self.arg_types))


class FunctionRegistry:
    """Name -> registrations, searched newest first."""

    def __init__(self) -> None:
        self._functions: Dict[str, List[HostFunction]] = {}

    def register(
        self,
        name: str,
        fn: Callable[..., Any],
        arg_types: Optional[Sequence[type]] = None,
    ) -> HostFunction:
        if not name.isidentifier():
            raise ValueError(f"Not a valid function name: {name!r}")
        entry = HostFunction(name, fn, tuple(arg_types) if arg_types is not None else None)
        self._functions.setdefault(name, []).append(entry)
        return entry

    def resolve(self, name: str, arguments: Sequence[Any]) -> Optional[HostFunction]:
        """The newest registration of ``name`` accepting ``arguments``, if any."""
        for entry in reversed(self._functions.get(name, [])):
            if entry.accepts(arguments):
                return entry
        return None

    def __contains__(self, name: str) -> bool:
        return name in self._functions


__all__ = ["HostFunction", "FunctionRegistry"]
