"""Tests for Registry."""

import threading

from bubblevents.config import EmitterOptions
from bubblevents.emitter import REGISTRY_ATTRIBUTE, EventEmitter
from bubblevents.registry import NEW_EVENT_GROUP, Registry


class Owner:
    pass


def test_containers_are_created_lazily_and_kept():
    """Test empty containers stay and report no subscribers."""
    registry = Registry(Owner())

    def h(): ...

    assert registry.get("evt") is None
    registry.insert("evt[3]", h)
    container = registry.get("evt")
    assert container is not None
    assert container.bindings[0].dispatch_name == "evt[3]"
    assert container.bindings[0].container_name == "evt"

    assert registry.remove("evt", h) is True
    assert registry.get("evt") is container
    assert container.bindings == []
    assert registry.query("evt") is False


def test_insert_announces_new_containers():
    """Test the owner-independent meta-event path."""
    registry = Registry(Owner())
    groups = []

    def h(): ...

    registry.insert(NEW_EVENT_GROUP, groups.append)
    registry.insert("a", h)
    registry.insert("a", h)

    assert groups == ["a"]
    assert registry.names() == [NEW_EVENT_GROUP, "a"]


def test_remove_preserves_order():
    """Test removal does not reorder the remaining bindings."""
    registry = Registry(Owner())

    def a(): ...

    def b(): ...

    def c(): ...

    for handler in (a, b, c):
        registry.insert("evt", handler)
    registry.remove("evt", b)

    assert registry.listeners("evt") == [a, c]


def test_remove_unknown_returns_false():
    """Test misses are reported, not raised."""
    registry = Registry(Owner())

    def h(): ...

    assert registry.remove("missing", h) is False
    registry.insert("evt", h)
    assert registry.remove("evt", lambda: None) is False


def test_configure_creates_container():
    """Test configure on an unknown name creates it."""
    registry = Registry(Owner())

    registry.configure("ready", fire_once=True)

    assert registry.get("ready").fire_once is True
    assert registry.get("ready").invocation_count == 0
    assert registry.query("ready") is False


def test_default_options():
    """Test a registry without options gets the full feature set."""
    registry = Registry(Owner())
    assert registry.options == EmitterOptions()


def test_begin_pass_ticks_and_snapshots():
    """Test begin_pass returns the new ordinal and a frozen copy."""
    registry = Registry(Owner())

    def h(): ...

    assert registry.begin_pass("evt") is None
    registry.insert("evt", h)

    container, n, snapshot = registry.begin_pass("evt")
    assert n == 1 and container.invocation_count == 1
    assert [b.callback for b in snapshot] == [h]

    registry.remove("evt", h)
    assert len(snapshot) == 1
    assert registry.is_live(container, snapshot[0]) is False
    assert registry.begin_pass("evt")[1] == 2


def test_ordinal_counts_publishes_from_several_threads():
    """Test no tick is lost when publishes race."""
    emitter = EventEmitter()
    emitter.subscribe("evt", lambda: None)
    per_thread = 2000

    def worker():
        for _ in range(per_thread):
            emitter.publish("evt")

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    registry = getattr(emitter, REGISTRY_ATTRIBUTE)
    assert registry.get("evt").invocation_count == 4 * per_thread
