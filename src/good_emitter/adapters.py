"""Helpers that work with any emitter exposing ``SupportsListen``.

These only use ``on``/``off``/``emit``/``listener_count``, so they accept an
``Emitter`` as well as any component that delegates those operations to one.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from .errors import EmitterTimeoutError
from .protocols import EventName, Listener, SupportsListen

logger = logging.getLogger(__name__)


def listen(
    emitter: SupportsListen, listeners: Mapping[EventName, Listener]
) -> Callable[[], None]:
    """Register every ``name -> listener`` pair and return one function undoing all.

    Example:
        ```python
        stop = listen(socket, {
            "message": handle_message,
            "close": lambda *_: stop(),
        })
        ```
    """
    pairs = list(listeners.items())
    for name, listener in pairs:
        emitter.on(name, listener)

    def unlisten() -> None:
        for name, listener in pairs:
            emitter.off(name, listener)

    return unlisten


def subscribe(
    emitter: SupportsListen, name: EventName, listener: Listener
) -> Callable[[], None]:
    """Register a single listener; the returned function unregisters it."""
    emitter.on(name, listener)

    def unsubscribe() -> None:
        emitter.off(name, listener)

    return unsubscribe


async def wait_for(
    emitter: SupportsListen, name: EventName, timeout: float | None = None
) -> Any:
    """Wait for the next emission of ``name`` and return its payload.

    The payload is the single emitted value, or the tuple of values when the
    emission carried zero or several.

    Args:
        emitter: Emitter to observe
        name: Event name to wait for
        timeout: Seconds to wait, ``None`` to wait forever

    Raises:
        EmitterTimeoutError: No emission arrived within ``timeout``
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[Any] = loop.create_future()

    def listener(*values: Any) -> None:
        emitter.off(name, listener)
        if not future.done():
            future.set_result(values[0] if len(values) == 1 else values)

    emitter.on(name, listener)
    try:
        if timeout is None:
            return await future
        try:
            return await asyncio.wait_for(future, timeout)
        except TimeoutError:
            raise EmitterTimeoutError(name, timeout) from None
    finally:
        emitter.off(name, listener)
