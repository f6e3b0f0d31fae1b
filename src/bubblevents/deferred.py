"""
Deferred single-shot calls.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Any, Callable, Union

logger = logging.getLogger(__name__)

DeferredHandle = Union[asyncio.TimerHandle, threading.Timer]


def call_later(delay: float, callback: Callable[..., Any], *args: Any) -> DeferredHandle:
    """
    Run ``callback(*args)`` once, ``delay`` seconds from now, off the caller's stack.

    - If an asyncio loop is running in this thread, schedules on that loop.
    - Otherwise starts a daemon ``threading.Timer``. The callback then runs on
      the timer's thread, not the caller's, and is lost if the interpreter
      exits first: the timer is never joined.

    Args:
        delay (float): Seconds to wait.
        callback (Callable[..., Any]): The function to call.
        *args: Positional arguments for the callback.

    Returns:
        asyncio.TimerHandle if a loop is running, otherwise the started Timer.
    """
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        timer = threading.Timer(delay, callback, args)
        timer.daemon = True
        timer.start()
        logger.debug("deferred %r by %.3fs on a timer thread", callback, delay)
        return timer
    else:
        logger.debug("deferred %r by %.3fs on the running loop", callback, delay)
        return loop.call_later(delay, callback, *args)
