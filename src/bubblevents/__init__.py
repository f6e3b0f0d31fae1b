"""
Bubblevents
-----------

Synchronous in-process event emitter with bubbling names.

Features:

- `publish("a:b:c", ...)` reaches subscribers of `a:b:c`, then `a:b`, then `a`.
- Conditional subscriptions: `subscribe("x[4]", h)` only fires on the 4th publish of `x`.
- `configure(name, fire_once=True)`: deliver once; late subscribers get one deferred call.
- Handlers may unsubscribe others (or publish again) while a publish is running.
- Meta-events `newEventGroup` and `newListener`.
- Mapping and space separated forms: `subscribe({"a": h1, "b": h2})`, `publish("a b")`.
- `adopt(obj)` turns an existing object into an emitter.
- Module-level helpers on a default emitter, and a `@receiver(name)` decorator.
- No dependencies.
"""

import logging

from .config import EmitterOptions
from .core import (
    configure,
    default_emitter,
    listeners,
    publish,
    query,
    receiver,
    reset_default_emitter,
    subscribe,
    unsubscribe,
)
from .emitter import EmitterCapability, EventEmitter, adopt
from .errors import (
    EmitterError,
    InvalidArgumentError,
    NotBoundError,
    UnsupportedExpressionError,
)
from .registry import NEW_EVENT_GROUP, NEW_LISTENER

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EventEmitter",
    "EmitterCapability",
    "EmitterOptions",
    "adopt",
    "subscribe",
    "unsubscribe",
    "publish",
    "query",
    "configure",
    "listeners",
    "receiver",
    "default_emitter",
    "reset_default_emitter",
    "NEW_EVENT_GROUP",
    "NEW_LISTENER",
    "EmitterError",
    "NotBoundError",
    "InvalidArgumentError",
    "UnsupportedExpressionError",
]
