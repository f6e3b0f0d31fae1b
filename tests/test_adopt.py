"""Tests for adopt()."""

from bubblevents import EmitterCapability, EmitterOptions, EventEmitter, adopt


class Widget:
    def __init__(self, name):
        self.name = name


class Slotted:
    __slots__ = ("x",)


def test_adopt_attaches_operations():
    """Test an adopted object can subscribe and publish."""
    widget = Widget("w")
    out = []

    assert adopt(widget) is widget
    widget.subscribe("click", lambda x: out.append(x))
    assert widget.publish("click", 1) is widget
    assert widget.query("click")
    assert out == [1]
    assert isinstance(widget, EmitterCapability)


def test_adopted_objects_do_not_share_registries():
    """Test every adopted object gets its own registry."""
    first, second = adopt(Widget("a")), adopt(Widget("b"))
    out = []

    first.subscribe("evt", lambda: out.append("first"))
    second.publish("evt")

    assert not out
    assert not second.query("evt")


def test_adopt_passes_options():
    """Test adopt honours the given options."""
    widget = adopt(Widget("w"), EmitterOptions.reduced())
    out = []

    widget.subscribe("x[2]", lambda: out.append("x[2]"))
    widget.publish("x[2]")

    assert out == ["x[2]"]


def test_adopt_returns_new_emitter_for_unusable_targets():
    """Test values that cannot hold attributes yield a fresh emitter."""
    for target in (None, 3, "text", Slotted()):
        result = adopt(target)
        assert isinstance(result, EventEmitter)
        assert result is not target


def test_adopted_meta_events():
    """Test meta-events fire on the adopted object."""
    widget = adopt(Widget("w"))
    groups = []

    widget.on("newEventGroup", groups.append)
    widget.on("resize", lambda: None)

    assert groups == ["resize"]


def test_adopt_resets_the_registry():
    """Test adopting again starts from an empty registry."""
    widget = adopt(Widget("w"))
    widget.subscribe("evt", lambda: None)

    adopt(widget)
    assert not widget.query("evt")
