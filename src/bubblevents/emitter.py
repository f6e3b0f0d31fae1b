"""
The EventEmitter and the adopt() helper.
"""

from __future__ import annotations

import logging
import types
from typing import (
    Any,
    Callable,
    List,
    Mapping,
    Optional,
    Protocol,
    TypeVar,
    Union,
    runtime_checkable,
)

from .config import EmitterOptions
from .dispatch import dispatch
from .errors import InvalidArgumentError, NotBoundError
from .fanout import fan_out_mapping, fan_out_names, needs_fan_out
from .registry import HandlerFunc, Registry

logger = logging.getLogger(__name__)

REGISTRY_ATTRIBUTE = "_emitter_registry"

OPERATIONS = (
    "subscribe",
    "unsubscribe",
    "publish",
    "query",
    "configure",
    "listeners",
    "receiver",
    "on",
    "off",
    "emit",
    "has",
    "describe",
)

NameOrMapping = Union[str, Mapping[str, Any]]
E = TypeVar("E")


@runtime_checkable
class EmitterCapability(Protocol):
    """What adopt() attaches to an object."""

    def subscribe(self: E, name: NameOrMapping, handler: Optional[HandlerFunc] = None) -> E: ...

    def unsubscribe(self: E, name: NameOrMapping, handler: Optional[HandlerFunc] = None) -> E: ...

    def publish(self: E, name: NameOrMapping, *args: Any, **kwargs: Any) -> E: ...

    def query(self, name: str, handler: Optional[HandlerFunc] = None) -> bool: ...

    def configure(
        self: E,
        name: NameOrMapping,
        options: Optional[Mapping[str, Any]] = None,
        *,
        fire_once: Optional[bool] = None,
    ) -> E: ...


def _registry_of(receiver: Any, op: str) -> Registry:
    registry = getattr(receiver, REGISTRY_ATTRIBUTE, None)
    if not isinstance(registry, Registry):
        raise NotBoundError(f"{op}: was not called on an event emitter")
    return registry


def _require_name(op: str, name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidArgumentError(f"{op}: name must be a non-empty string or a mapping")
    return name


def _require_handler(op: str, handler: Any) -> HandlerFunc:
    if not callable(handler):
        raise InvalidArgumentError(f"{op}: handler must be callable")
    return handler


class EventEmitter:
    """
    A synchronous emitter with bubbling names and conditional subscriptions.

    - ``publish("a:b:c")`` reaches handlers of ``a:b:c``, ``a:b`` and ``a``.
    - ``subscribe("x[4]", h)`` only calls ``h`` on the 4th publish of ``x``.
    - ``configure("ready", fire_once=True)`` delivers ``ready`` once; later
      subscribers get a single deferred call instead.

    Every mutating operation returns the emitter, so calls chain.
    """

    def __init__(self, options: Optional[EmitterOptions] = None) -> None:
        setattr(self, REGISTRY_ATTRIBUTE, Registry(self, options))

    @property
    def options(self) -> EmitterOptions:
        return _registry_of(self, "options").options

    # -------------------- registration API --------------------
    def subscribe(self, name: NameOrMapping, handler: Optional[HandlerFunc] = None):
        """
        Register a handler.

        Args:
            name (str | Mapping[str, HandlerFunc]): ``"event"``, ``"a:b"``,
                ``"event[4]"``, several space separated names, or a mapping of
                name to handler.
            handler (HandlerFunc, optional): Required unless ``name`` is a mapping.

        Returns:
            The emitter.

        Raises:
            NotBoundError: The receiver has no registry.
            InvalidArgumentError: Bad name or non-callable handler.
        """
        registry = _registry_of(self, "subscribe")
        if isinstance(name, Mapping):
            return fan_out_mapping(self, EventEmitter.subscribe, name)
        _require_name("subscribe", name)
        _require_handler("subscribe", handler)
        if needs_fan_out(name):
            return fan_out_names(self, EventEmitter.subscribe, name, handler)

        registry.insert(name, handler)
        return self

    def unsubscribe(self, name: NameOrMapping, handler: Optional[HandlerFunc] = None):
        """
        Remove one subscription of ``handler``. Unknown names or handlers are ignored.

        ``unsubscribe("x", h)`` also removes ``h`` subscribed as ``"x[4]"``.

        Args:
            name (str | Mapping[str, HandlerFunc]): Same forms as subscribe.
            handler (HandlerFunc, optional): Required unless ``name`` is a mapping.

        Returns:
            The emitter.
        """
        registry = _registry_of(self, "unsubscribe")
        if isinstance(name, Mapping):
            return fan_out_mapping(self, EventEmitter.unsubscribe, name)
        _require_name("unsubscribe", name)
        _require_handler("unsubscribe", handler)
        if needs_fan_out(name):
            return fan_out_names(self, EventEmitter.unsubscribe, name, handler)

        registry.remove(name, handler)
        return self

    def query(self, name: str, handler: Optional[HandlerFunc] = None) -> bool:
        """
        Whether ``name`` has subscribers, or has ``handler`` among them.

        Args:
            name (str): Event name; an expression suffix is ignored.
            handler (HandlerFunc, optional): Look for this handler specifically.

        Returns:
            bool: False for unknown names and for names whose subscribers all left.
        """
        registry = _registry_of(self, "query")
        _require_name("query", name)
        return registry.query(name.strip(), handler)

    def configure(
        self,
        name: NameOrMapping,
        options: Optional[Mapping[str, Any]] = None,
        *,
        fire_once: Optional[bool] = None,
    ):
        """
        Set per-name options. Creates the name if needed.

        Args:
            name (str | Mapping[str, Mapping]): Event name, several space
                separated names, or a mapping of name to options.
            options (Mapping[str, Any], optional): ``{"fire_once": True}``.
            fire_once (bool, optional): Same as the ``fire_once`` option;
                wins over ``options``.

        Returns:
            The emitter.
        """
        registry = _registry_of(self, "configure")
        if isinstance(name, Mapping):
            return fan_out_mapping(self, EventEmitter.configure, name)
        _require_name("configure", name)
        if needs_fan_out(name):
            return fan_out_names(
                self, EventEmitter.configure, name, options, fire_once=fire_once
            )

        if options is not None:
            if not isinstance(options, Mapping):
                raise InvalidArgumentError("configure: options must be a mapping")
            if fire_once is None:
                # fireOnce is the historic spelling
                fire_once = options.get("fire_once", options.get("fireOnce"))

        registry.configure(registry.parse(name).container_name, fire_once=fire_once)
        return self

    def listeners(self, name: str) -> List[HandlerFunc]:
        """Handlers subscribed to ``name``'s container, in call order."""
        registry = _registry_of(self, "listeners")
        _require_name("listeners", name)
        return registry.listeners(name.strip())

    # -------------------- decorator --------------------
    def receiver(self, name: str) -> Callable[[HandlerFunc], HandlerFunc]:
        """
        Decorator to subscribe a function to ``name``.

        Example:
        @emitter.receiver("job:done")
        def on_done(result):
            ...
        """

        def wrapper(func: HandlerFunc) -> HandlerFunc:
            EventEmitter.subscribe(self, name, func)
            return func

        return wrapper

    # -------------------- dispatch --------------------
    def publish(self, name: NameOrMapping, *args: Any, **kwargs: Any):
        """
        Call every matching handler of ``name`` and of its ancestors, synchronously.

        Args:
            name (str | Mapping[str, Any]): Event name, several space
                separated names, or a mapping of name to its single argument.
            *args: Positional arguments for the handlers.
            **kwargs: Keyword arguments for the handlers.

        Returns:
            The emitter.

        Raises:
            NotBoundError: The receiver has no registry.
            InvalidArgumentError: Bad name.
            UnsupportedExpressionError: A matching subscription used an
                expression such as ``x[foo]``.
        """
        registry = _registry_of(self, "publish")
        if isinstance(name, Mapping):
            return fan_out_mapping(self, EventEmitter.publish, name)
        _require_name("publish", name)
        if needs_fan_out(name):
            return fan_out_names(self, EventEmitter.publish, name, *args, **kwargs)

        return dispatch(self, registry, name, args, kwargs)

    # historic names
    on = subscribe
    off = unsubscribe
    emit = publish
    has = query
    describe = configure


def adopt(target: Any, options: Optional[EmitterOptions] = None) -> Any:
    """
    Give ``target`` its own registry and the emitter operations.

    The operations are bound to ``target``, so ``target.publish("x")`` works
    without ``target`` being an EventEmitter. When ``target`` cannot hold
    attributes (``None``, an ``int``, a slotted instance...), a new
    EventEmitter is returned instead.

    Args:
        target (Any): The object to turn into an emitter.
        options (EmitterOptions, optional): Options for the new registry.

    Returns:
        ``target``, or a new EventEmitter.
    """
    try:
        setattr(target, REGISTRY_ATTRIBUTE, Registry(target, options))
    except (AttributeError, TypeError):
        logger.debug("cannot adopt %r; returning a new EventEmitter", target)
        return EventEmitter(options)

    for op in OPERATIONS:
        setattr(target, op, types.MethodType(getattr(EventEmitter, op), target))
    return target
