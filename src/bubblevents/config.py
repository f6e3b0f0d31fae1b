"""
Emitter options.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidArgumentError

# one frame at 60Hz
DEFAULT_DEFER_DELAY = 0.016


@dataclass(frozen=True)
class EmitterOptions:
    """
    Capability flags and timing for an emitter.

    Attributes:
        expressions (bool): Parse ``name[expr]`` conditional suffixes.
                            When False the whole name is the container name.
        fire_once (bool): Honour ``configure(name, fire_once=True)``.
        defer_delay (float): Seconds before a late ``fire_once`` subscriber
                             is called.
    """

    expressions: bool = True
    fire_once: bool = True
    defer_delay: float = DEFAULT_DEFER_DELAY

    def __post_init__(self) -> None:
        if self.defer_delay < 0:
            raise InvalidArgumentError("defer_delay must not be negative")

    @classmethod
    def reduced(cls) -> "EmitterOptions":
        """Plain bubbling emitter: no expressions, no fire_once."""
        return cls(expressions=False, fire_once=False)
