"""
The publish loop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

from .names import bubble_chain

if TYPE_CHECKING:
    from .registry import Registry


def dispatch(
    owner: Any,
    registry: "Registry",
    name: str,
    args: Tuple[Any, ...] = (),
    kwargs: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Deliver ``name`` to its container and then to every ancestor container.

    ``a:b:c`` reaches ``a:b:c``, then ``a:b``, then ``a``. Each existing
    container ticks its own invocation ordinal once per call, whether or not
    any handler matches. A ``fire_once`` container only delivers on ordinal 1.

    Handlers run against a snapshot of the container, and only while they are
    still subscribed, so a handler may unsubscribe others (or itself) safely.
    Handlers subscribed during the pass are not called in it.
    Exceptions raised by handlers propagate and end the pass.

    Args:
        owner (Any): The emitter; returned for chaining.
        registry (Registry): Where to look containers up.
        name (str): The published name, without expression.
        args (Tuple[Any, ...]): Positional arguments for the handlers.
        kwargs (Dict[str, Any], optional): Keyword arguments for the handlers.

    Returns:
        Any: ``owner``.
    """
    kwargs = kwargs or {}
    honour_fire_once = registry.options.fire_once

    for container_name in bubble_chain(name):
        started = registry.begin_pass(container_name)
        if started is None:
            continue

        container, n, snapshot = started
        if honour_fire_once and container.fire_once and n > 1:
            continue

        for binding in snapshot:
            if registry.is_live(container, binding) and binding.predicate.matches(n):
                binding.callback(*args, **kwargs)

    return owner
