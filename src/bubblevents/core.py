"""
bubblevents.core
----------------

Module-level helpers bound to a process-wide default emitter.
"""

from typing import Any, Callable, List, Mapping, Optional

from .config import EmitterOptions
from .emitter import EventEmitter, NameOrMapping
from .registry import HandlerFunc

# -------------------- module-level default emitter --------------------

_default_emitter = EventEmitter()


def default_emitter() -> EventEmitter:
    """Return the emitter the module-level helpers use."""
    return _default_emitter


def reset_default_emitter(options: Optional[EmitterOptions] = None) -> EventEmitter:
    """
    Replace the default emitter with a fresh one.

    Subscriptions made through the old emitter stay on it and are no longer
    reachable from the module-level helpers.

    Args:
        options (EmitterOptions, optional): Options for the new emitter.

    Returns:
        EventEmitter: The new default emitter.
    """
    global _default_emitter  # pylint: disable=global-statement
    _default_emitter = EventEmitter(options)
    return _default_emitter


# Registration
def subscribe(name: NameOrMapping, handler: Optional[HandlerFunc] = None) -> EventEmitter:
    """
    Register a handler on the default emitter.

    Args:
        name (str | Mapping[str, HandlerFunc]): Event name such as ``"job"``,
            ``"job:done"`` or ``"job[3]"``, space separated names, or a
            mapping of name to handler.
        handler (HandlerFunc, optional): The handler. Required unless
            ``name`` is a mapping.

    Returns:
        EventEmitter: The default emitter.
    """
    return _default_emitter.subscribe(name, handler)


def unsubscribe(name: NameOrMapping, handler: Optional[HandlerFunc] = None) -> EventEmitter:
    """
    Remove one subscription of ``handler`` from the default emitter.

    Returns:
        EventEmitter: The default emitter.
    """
    return _default_emitter.unsubscribe(name, handler)


def query(name: str, handler: Optional[HandlerFunc] = None) -> bool:
    """
    Whether ``name`` has subscribers on the default emitter.

    Args:
        name (str): The event name.
        handler (HandlerFunc, optional): Check for this handler specifically.

    Returns:
        bool: True if the name has (that) subscriber.
    """
    return _default_emitter.query(name, handler)


def configure(
    name: NameOrMapping,
    options: Optional[Mapping[str, Any]] = None,
    *,
    fire_once: Optional[bool] = None,
) -> EventEmitter:
    """Set per-name options on the default emitter."""
    return _default_emitter.configure(name, options, fire_once=fire_once)


def listeners(name: str) -> List[HandlerFunc]:
    return _default_emitter.listeners(name)


# Decorator
def receiver(
    name: str,
    *,
    emitter: Optional[EventEmitter] = None,
) -> Callable[[HandlerFunc], HandlerFunc]:
    """
    Decorator to subscribe a function to ``name``.

    Args:
        name (str): The event name.
        emitter (EventEmitter, optional): Emitter to subscribe on.
                                          Defaults to the default emitter.

    Returns:
        Callable[[HandlerFunc], HandlerFunc]: The decorator function.

    Example:
    @receiver("upload:done")
    def on_upload(path):
        print("uploaded", path)
    """
    return (emitter or _default_emitter).receiver(name)


# Dispatch
def publish(name: NameOrMapping, *args: Any, **kwargs: Any) -> EventEmitter:
    """
    Publish ``name`` on the default emitter.

    Args:
        name (str | Mapping[str, Any]): The event name, space separated
            names, or a mapping of name to its single argument.
        *args: Positional arguments to pass to the handlers.
        **kwargs: Keyword arguments to pass to the handlers.

    Returns:
        EventEmitter: The default emitter.

    Example:
    publish("upload:done", "/tmp/a.txt")
    """
    return _default_emitter.publish(name, *args, **kwargs)
