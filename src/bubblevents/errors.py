"""
bubblevents.errors
------------------

Errors raised by the emitter. Handler exceptions are never wrapped.
"""

from __future__ import annotations


class EmitterError(Exception):
    """Base class for every error raised by bubblevents itself."""


class NotBoundError(EmitterError, TypeError):
    """An emitter operation was called on a receiver that owns no registry."""


class InvalidArgumentError(EmitterError, TypeError):
    """An event name or handler has the wrong type or is empty."""


class UnsupportedExpressionError(EmitterError, ValueError):
    """An expression token is neither a decimal integer nor ``n``."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unsupported expression {token!r}")
        self.token = token
