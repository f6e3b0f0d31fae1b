"""
Multi-name call forms.

``op({"a": x, "b": y})`` becomes ``op("a", x)`` then ``op("b", y)``;
``op("a b", x)`` becomes ``op("a", x)`` then ``op("b", x)``.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, TypeVar

T = TypeVar("T")


def needs_fan_out(name: str) -> bool:
    """True for several names, or one name padded with whitespace."""
    return name.split() != [name]


def fan_out_mapping(self: T, op: Callable[..., Any], mapping: Mapping[str, Any]) -> T:
    """Call ``op(self, key, value)`` for each item, in the mapping's order."""
    for name, payload in mapping.items():
        op(self, name, payload)
    return self


def fan_out_names(self: T, op: Callable[..., Any], names: str, *args: Any, **kwargs: Any) -> T:
    """Call ``op(self, name, *args, **kwargs)`` for each whitespace separated name."""
    for name in names.split():
        op(self, name, *args, **kwargs)
    return self
