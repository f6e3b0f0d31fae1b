"""
Listener storage for one emitter.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from . import deferred
from .config import EmitterOptions
from .dispatch import dispatch
from .names import ParsedName, Predicate, parse_name

logger = logging.getLogger(__name__)

HandlerFunc = Callable[..., Any]

NEW_EVENT_GROUP = "newEventGroup"
NEW_LISTENER = "newListener"


@dataclass(frozen=True, eq=False)
class Binding:
    """One subscription. Compared by identity."""

    dispatch_name: str
    container_name: str
    predicate: Predicate
    callback: HandlerFunc


@dataclass
class Container:
    """Ordered bindings of one container name plus its per-name state."""

    bindings: List[Binding] = field(default_factory=list)
    fire_once: bool = False
    invocation_count: int = 0

    def tick(self) -> int:
        self.invocation_count += 1
        return self.invocation_count

    def holds(self, binding: Binding) -> bool:
        return any(b is binding for b in self.bindings)

    def snapshot(self) -> Tuple[Binding, ...]:
        return tuple(self.bindings)


class Registry:
    """
    Maps container names to their bindings.

    Containers are created on first use and never dropped; an empty container
    is a valid, inert state. Mutations run under a lock, callbacks never do.
    """

    def __init__(self, owner: Any, options: Optional[EmitterOptions] = None) -> None:
        self.owner = owner
        self.options = options or EmitterOptions()
        self._lock = threading.RLock()
        self._containers: Dict[str, Container] = {}

    # -------------------- lookup --------------------
    def parse(self, dispatch_name: str) -> ParsedName:
        return parse_name(dispatch_name, expressions=self.options.expressions)

    def get(self, container_name: str) -> Optional[Container]:
        with self._lock:
            return self._containers.get(container_name)

    def names(self) -> List[str]:
        with self._lock:
            return list(self._containers)

    def listeners(self, dispatch_name: str) -> List[HandlerFunc]:
        """Callbacks stored in the name's container, in subscription order."""
        container = self.get(self.parse(dispatch_name).container_name)
        if container is None:
            return []
        return [b.callback for b in container.snapshot()]

    def begin_pass(
        self, container_name: str
    ) -> Optional[Tuple[Container, int, Tuple[Binding, ...]]]:
        """
        Tick the container's ordinal and snapshot its bindings in one step.

        Returns:
            (container, ordinal, snapshot), or None if the name is unknown.
        """
        with self._lock:
            container = self._containers.get(container_name)
            if container is None:
                return None
            n = container.tick()
            return container, n, container.snapshot()

    def is_live(self, container: Container, binding: Binding) -> bool:
        with self._lock:
            return container.holds(binding)

    def _ensure(self, container_name: str) -> Tuple[Container, bool]:
        with self._lock:
            container = self._containers.get(container_name)
            if container is not None:
                return container, False
            container = self._containers[container_name] = Container()
            return container, True

    # -------------------- mutation --------------------
    def insert(self, dispatch_name: str, callback: HandlerFunc) -> None:
        """
        Add a binding for ``dispatch_name``.

        Emits ``newEventGroup`` before the first binding of a container and
        ``newListener`` after every append. A late subscriber to a fired
        ``fire_once`` container gets one deferred call and is not stored.
        """
        parsed = self.parse(dispatch_name)
        name = parsed.container_name
        container, created = self._ensure(name)

        if created and name != NEW_EVENT_GROUP:
            dispatch(self.owner, self, NEW_EVENT_GROUP, (name,))

        with self._lock:
            late = (
                self.options.fire_once
                and container.fire_once
                and container.invocation_count > 0
            )
            if not late:
                container.bindings.append(
                    Binding(
                        dispatch_name=parsed.dispatch_name,
                        container_name=name,
                        predicate=parsed.predicate,
                        callback=callback,
                    )
                )

        if late:
            logger.debug("%r already fired once; deferring %r", name, callback)
            deferred.call_later(self.options.defer_delay, callback)
            return

        logger.debug("subscribed %r to %r", callback, dispatch_name)
        if name != NEW_LISTENER:
            dispatch(self.owner, self, NEW_LISTENER, (name, callback))

    def remove(self, dispatch_name: str, callback: HandlerFunc) -> bool:
        """
        Remove one binding of ``callback`` from the name's container.

        The expression suffix does not have to match. If the callback is bound
        more than once, a binding with the exact dispatch name goes first,
        otherwise the earliest one. Returns whether anything was removed.
        """
        name = self.parse(dispatch_name).container_name
        with self._lock:
            container = self._containers.get(name)
            if container is None:
                return False
            # == so that a fresh bound method of the same object still matches
            candidates = [b for b in container.bindings if b.callback == callback]
            if not candidates:
                return False
            exact = [b for b in candidates if b.dispatch_name == dispatch_name]
            victim = (exact or candidates)[0]
            container.bindings = [b for b in container.bindings if b is not victim]
        logger.debug("unsubscribed %r from %r", callback, dispatch_name)
        return True

    def query(self, dispatch_name: str, callback: Optional[HandlerFunc] = None) -> bool:
        container = self.get(self.parse(dispatch_name).container_name)
        if container is None:
            return False
        bindings = container.snapshot()
        if not bindings:
            return False
        if callback is None:
            return True
        return any(b.callback == callback for b in bindings)

    def configure(self, container_name: str, *, fire_once: Optional[bool] = None) -> None:
        container, _ = self._ensure(container_name)
        if fire_once is None:
            return
        if not self.options.fire_once:
            logger.warning(
                "fire_once requested for %r but this emitter has it disabled",
                container_name,
            )
        with self._lock:
            container.fire_once = bool(fire_once)
