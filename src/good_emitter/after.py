"""Cancellable delayed callbacks on the asyncio event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .protocols import Cancel

logger = logging.getLogger(__name__)


def after(
    delay: float,
    callback: Callable[[], object],
    *,
    loop: asyncio.AbstractEventLoop | None = None,
) -> Cancel:
    """Call ``callback`` with no arguments after ``delay`` seconds.

    Args:
        delay: Seconds to wait before the callback runs
        callback: Zero-argument callable to run
        loop: Event loop to schedule on (defaults to the running loop)

    Returns:
        Cancel function. Calling it before the timer fires prevents the
        callback from running. Any later call, including one made after the
        callback already ran, is a no-op that logs a warning.

    Raises:
        RuntimeError: If no loop is given and none is running
    """
    if loop is None:
        loop = asyncio.get_running_loop()

    handle: asyncio.TimerHandle | None = None

    def fire() -> None:
        nonlocal handle
        handle = None
        callback()

    handle = loop.call_later(delay, fire)

    def cancel() -> None:
        nonlocal handle
        if handle is None:
            logger.warning("Expected cancel function to be called at most once.")
            return
        handle.cancel()
        handle = None

    return cancel
