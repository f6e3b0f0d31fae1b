"""
Event name parsing.

A dispatch name is ``container`` optionally followed by a bracketed
expression, e.g. ``readyState:change[4]``. The container part is the unit of
storage and bubbling; the expression gates which publishes of that container
reach the handler.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, Tuple, Union

from .errors import UnsupportedExpressionError

BUBBLE_DELIMITER = ":"
EXPRESSION_OPEN = "["
EXPRESSION_CLOSE = "]"
EXPRESSION_EQUALS = "="
DEFAULT_EXPRESSION = "[1=1]"
ORDINAL_TOKEN = "n"

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Constant:
    value: int

    def evaluate(self, n: int) -> int:  # pylint: disable=unused-argument
        return self.value


@dataclass(frozen=True)
class Ordinal:
    def evaluate(self, n: int) -> int:
        return n


@dataclass(frozen=True)
class Unsupported:
    token: str

    def evaluate(self, n: int) -> int:
        raise UnsupportedExpressionError(self.token)


Term = Union[Constant, Ordinal, Unsupported]


@dataclass(frozen=True)
class Predicate:
    """``left(n) == right(n)`` over the container's invocation ordinal."""

    left: Term
    right: Term

    def matches(self, n: int) -> bool:
        return self.left.evaluate(n) == self.right.evaluate(n)


ALWAYS = Predicate(Constant(1), Constant(1))


@dataclass(frozen=True)
class ParsedName:
    dispatch_name: str
    container_name: str
    expression_source: str
    predicate: Predicate


def compile_term(token: str) -> Term:
    """
    Compile one side of an expression.

    Args:
        token (str): ``"4"``, ``"n"`` or anything else.

    Returns:
        Term: ``Constant``, ``Ordinal`` or ``Unsupported``.
    """
    if _DIGITS.fullmatch(token):
        return Constant(int(token))
    if token == ORDINAL_TOKEN:
        return Ordinal()
    return Unsupported(token)


def compile_expression(source: str) -> Predicate:
    """
    Compile ``"[left=right]"`` into a Predicate.

    ``"[4]"`` is shorthand for ``"[4=n]"``: true on the 4th publish only.
    Unsupported tokens do not raise here; the predicate raises
    UnsupportedExpressionError when evaluated.
    """
    body = source
    if body.startswith(EXPRESSION_OPEN):
        body = body[1:]
    if body.endswith(EXPRESSION_CLOSE):
        body = body[:-1]

    sides = body.split(EXPRESSION_EQUALS)
    if len(sides) == 1:
        return Predicate(compile_term(sides[0]), Ordinal())
    if len(sides) == 2:
        return Predicate(compile_term(sides[0]), compile_term(sides[1]))
    bad = Unsupported(body)
    return Predicate(bad, bad)


def split_name(dispatch_name: str) -> Tuple[str, str]:
    """Split at the first ``[`` into (container name, expression source)."""
    index = dispatch_name.find(EXPRESSION_OPEN)
    if index == -1:
        return dispatch_name, ""
    return dispatch_name[:index], dispatch_name[index:]


def parse_name(dispatch_name: str, *, expressions: bool = True) -> ParsedName:
    """
    Resolve a dispatch name.

    Args:
        dispatch_name (str): The name as passed to subscribe/unsubscribe.
        expressions (bool, optional): When False the name is taken verbatim
                                      and the predicate is always true.

    Returns:
        ParsedName: container name, expression source and compiled predicate.
    """
    if not expressions:
        return ParsedName(dispatch_name, dispatch_name, DEFAULT_EXPRESSION, ALWAYS)

    container_name, source = split_name(dispatch_name)
    if not source:
        return ParsedName(dispatch_name, container_name, DEFAULT_EXPRESSION, ALWAYS)
    return ParsedName(
        dispatch_name, container_name, source, compile_expression(source)
    )


def bubble_chain(name: str) -> Iterator[str]:
    """Yield ``name`` and each ancestor: ``a:b:c``, ``a:b``, ``a``."""
    remaining = name
    while remaining:
        yield remaining
        index = remaining.rfind(BUBBLE_DELIMITER)
        remaining = remaining[:index] if index != -1 else ""
