"""Emitter core implementation.

This module contains the Emitter class: listener registration, synchronous
dispatch with error isolation, meta events, and the one-shot/conditional
waits built on top of them.

CONTENTS:
- Emitter: registry + dispatch engine + conditional wait layer
- of(): factory returning a fresh Emitter

CONCURRENCY: Dispatch is synchronous. ``emit`` runs every listener before it
returns, and nested ``emit`` calls from inside a listener complete before the
outer fan-out continues (depth-first). The only asynchronous pieces are the
timers behind ``eventually``/``eventually_if``, which run on the asyncio
event loop between other emitter operations, never concurrently with them.
"""

from __future__ import annotations

import asyncio
import enum
import functools
import logging
import time
from collections.abc import Callable
from typing import Any, Literal, TypeVar, Union, overload

from rich.console import Console
from rich.text import Text

from .after import after
from .config import EmitterConfig
from .errors import EmitterTimeoutError
from .protocols import (
    Cancel,
    Event,
    EventName,
    Listener,
    MetaEvent,
    Predicate,
    Unsubscribe,
)
from .registry import ListenerRegistry

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Create a console instance for Rich output
_console = Console(stderr=True)  # Use stderr to avoid interfering with stdout


class _Unset(enum.Enum):
    UNSET = enum.auto()


_UNSET = _Unset.UNSET

Timeout = Union[float, None, Literal[_Unset.UNSET]]


# Attribute linking a once-wrapper to the listener it wraps
_ONCE_TARGET = "_good_emitter_once_target"


def once_target(listener: Listener) -> Listener:
    """Listener wrapped by ``once``/``once_if``, or ``listener`` itself."""
    return getattr(listener, _ONCE_TARGET, listener)


def _always(*_: Any) -> bool:
    return True


def _payload(values: tuple[Any, ...]) -> Any:
    """Single emitted value as-is, otherwise the tuple of values."""
    return values[0] if len(values) == 1 else values


class Emitter:
    """
    In-process publish/subscribe hub with synchronous fan-out.

    PURPOSE: Lets a component expose observable events. Listeners register per
    event name and receive the values passed to ``emit``, in registration order.

    LIFECYCLE:
    1. Construction: empty registry, settings from EmitterConfig
    2. Registration: on() / once() / once_if(), each announced via ``newListener``
    3. Dispatch: emit() calls a snapshot of the listeners taken at call time
    4. Removal: off() or the function returned by on(), each announced via
       ``removeListener``

    TYPICAL USAGE:
    ```python
    emitter = Emitter()

    def on_message(text: str) -> None:
        print(text)

    off = emitter.on("message", on_message)
    emitter.emit("message", "hello")
    off()

    # Wait for the next matching emission
    data = await emitter.eventually_if("data", lambda d: d["id"] == 2, timeout=5)
    ```

    ERROR HANDLING:
    - Registering the same listener twice for one event raises DuplicateListenerError
    - emit() never raises for listener failures. A failing listener's exception
      is re-emitted on ``error`` when that event has listeners, otherwise logged
    - Failures inside ``error`` listeners are only logged
    - Waits that expire reject with EmitterTimeoutError (``code == "timeout"``)

    DISPATCH SEMANTICS:
    - Listeners present when emit() starts are invoked in registration order
    - A listener removed during dispatch is not invoked after its removal
    - Listeners added during dispatch are not invoked by that emit() call

    CONFIGURATION OPTIONS:
    - max_listeners: soft per-event threshold, exceeding it logs an error
    - default_timeout: seconds eventually()/eventually_if() wait by default
    - debug: debug-level logging of registrations and removals
    - event_trace: print every emit() with timing
    """

    def __init__(self, config: EmitterConfig | None = None, **overrides: Any):
        """
        Initialize Emitter.

        Args:
            config: Settings to use; defaults to ``EmitterConfig()``
            **overrides: Individual EmitterConfig fields, applied on top of ``config``

        Raises:
            pydantic.ValidationError: If the resulting settings are invalid
        """
        if config is None:
            config = EmitterConfig(**overrides)
        elif overrides:
            config = EmitterConfig.model_validate({**config.model_dump(), **overrides})
        self._config = config
        self._registry = ListenerRegistry(debug=config.debug)
        self._max_listeners = config.max_listeners
        self._event_trace = config.event_trace
        self._event_trace_use_rich = True

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} events={len(self._registry.names())} "
            f"listeners={self._registry.count()}>"
        )

    @property
    def config(self) -> EmitterConfig:
        return self._config

    @property
    def max_listeners(self) -> int:
        """Soft per-event listener threshold (0 disables the check)."""
        return self._max_listeners

    @max_listeners.setter
    def max_listeners(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"max_listeners must be >= 0, got {value}")
        self._max_listeners = value

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def event_names(self) -> list[EventName]:
        """Names of events that currently have at least one listener."""
        return self._registry.names()

    def listeners(self, name: EventName) -> set[Listener] | None:
        """Copy of the listeners registered for ``name``, or None if there are none."""
        listeners = self._registry.snapshot(name)
        return set(listeners) if listeners else None

    def raw_listeners(self, name: EventName) -> list[Listener]:
        """Registered callables for ``name`` in fan-out order, once-wrappers included."""
        return list(self._registry.snapshot(name))

    def listener_count(self, name: EventName | None = None) -> int:
        """Listeners for ``name``, or across all events when omitted."""
        return self._registry.count(name)

    def has_listener(
        self, name: EventName | None = None, listener: Listener | None = None
    ) -> bool:
        """
        Check for registered listeners.

        - No arguments: does any event have a listener?
        - ``name`` only: does this event have a listener?
        - ``name`` and ``listener``: is this listener registered for this event?
        - ``listener`` only: is this listener registered for any event?
        """
        if name is None:
            if listener is None:
                return bool(self._registry)
            return any(
                self._registry.contains(event, listener)
                for event in self._registry.names()
            )
        if listener is None:
            return self._registry.count(name) > 0
        return self._registry.contains(name, listener)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @overload
    def on(
        self, name: Event[T], listener: Callable[[T], object], *, prepend: bool = ...
    ) -> Unsubscribe: ...

    @overload
    def on(
        self, name: EventName, listener: Listener, *, prepend: bool = ...
    ) -> Unsubscribe: ...

    def on(
        self, name: EventName, listener: Listener, *, prepend: bool = False
    ) -> Unsubscribe:
        """
        Register ``listener`` for ``name``.

        Emits ``newListener`` with ``(name, listener)`` before returning.

        Args:
            name: Event name or typed Event key
            listener: Callable invoked with the emitted values
            prepend: Put the listener first in fan-out order instead of last

        Returns:
            Function that unregisters the listener and returns how many
            listeners it removed (0 or 1)

        Raises:
            DuplicateListenerError: ``listener`` is already registered for ``name``
        """
        size = self._registry.add(name, listener, prepend=prepend)
        self.emit(MetaEvent.NEW_LISTENER, name, listener)
        if self._max_listeners and size > self._max_listeners:
            logger.error(
                f"Possible listener leak: {size} listeners registered for {name!r} "
                f"(threshold {self._max_listeners})"
            )

        def unsubscribe() -> int:
            return self.off(name, listener)

        return unsubscribe

    def off(self, name: EventName | None = None, listener: Listener | None = None) -> int:
        """
        Unregister listeners.

        - No arguments: remove every listener of every event
        - ``name`` only: remove every listener of that event
        - ``name`` and ``listener``: remove that listener if registered
        - ``listener`` only: remove that listener from every event

        Emits ``removeListener`` with ``(name, listener)`` after each removal.
        Events left without listeners disappear from event_names().

        Returns:
            Number of listeners removed
        """
        if name is None:
            return sum(self.off(event, listener) for event in self._registry.names())
        if listener is None:
            return sum(self.off(name, each) for each in self._registry.snapshot(name))
        if not self._registry.remove(name, listener):
            return 0
        self.emit(MetaEvent.REMOVE_LISTENER, name, listener)
        return 1

    @overload
    def once(
        self, name: Event[T], listener: Callable[[T], object], *, prepend: bool = ...
    ) -> Unsubscribe: ...

    @overload
    def once(
        self, name: EventName, listener: Listener, *, prepend: bool = ...
    ) -> Unsubscribe: ...

    def once(
        self, name: EventName, listener: Listener, *, prepend: bool = False
    ) -> Unsubscribe:
        """Register ``listener`` for the next emission of ``name`` only."""
        return self.once_if(name, _always, listener, prepend=prepend)

    @overload
    def once_if(
        self,
        name: Event[T],
        predicate: Callable[[T], bool],
        listener: Callable[[T], object],
        *,
        prepend: bool = ...,
    ) -> Unsubscribe: ...

    @overload
    def once_if(
        self,
        name: EventName,
        predicate: Predicate,
        listener: Listener,
        *,
        prepend: bool = ...,
    ) -> Unsubscribe: ...

    def once_if(
        self,
        name: EventName,
        predicate: Predicate,
        listener: Listener,
        *,
        prepend: bool = False,
    ) -> Unsubscribe:
        """
        Register ``listener`` for the first emission of ``name`` matching ``predicate``.

        The predicate receives the emitted values. Non-matching emissions leave
        the registration in place; the first match unregisters it and then calls
        ``listener``. A predicate that raises is treated like a failing listener.

        The registered callable is a wrapper; ``once_target`` maps it back to
        ``listener``.

        Returns:
            Function that unregisters the listener before it matched
        """

        @functools.wraps(listener)
        def wrapper(*values: Any) -> None:
            if predicate(*values):
                self.off(name, wrapper)
                listener(*values)

        setattr(wrapper, _ONCE_TARGET, listener)
        return self.on(name, wrapper, prepend=prepend)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    @overload
    def emit(self, name: Event[T], value: T, /) -> None: ...

    @overload
    def emit(self, name: EventName, *values: Any) -> None: ...

    def emit(self, name: EventName, *values: Any) -> None:
        """
        Call every listener of ``name`` with ``values``, in registration order.

        Listener exceptions never propagate. They are re-emitted on ``error`` if
        that event has listeners and ``name`` is not ``error`` itself, otherwise
        logged. The remaining listeners still run.
        """
        listeners = self._registry.snapshot(name)
        start = time.perf_counter() if self._event_trace else 0.0
        failures = 0

        for listener in listeners:
            # Skip listeners removed by an earlier listener in this fan-out
            if not self._registry.contains(name, listener):
                continue
            try:
                listener(*values)
            except Exception as e:
                failures += 1
                self._handle_listener_error(name, listener, e)

        if self._event_trace:
            self._log_event(
                name,
                listener_count=len(listeners),
                duration_ms=(time.perf_counter() - start) * 1000,
                failures=failures,
            )

    def _handle_listener_error(
        self, name: EventName, listener: Listener, error: Exception
    ) -> None:
        if name == MetaEvent.ERROR:
            logger.error(f"Error listener {listener!r} failed", exc_info=error)
        elif self._registry.count(MetaEvent.ERROR):
            self.emit(MetaEvent.ERROR, error)
        else:
            logger.error(
                f"Listener {listener!r} for event {name!r} failed", exc_info=error
            )

    # ------------------------------------------------------------------
    # Waiting
    # ------------------------------------------------------------------

    @overload
    def eventually(
        self, name: Event[T], timeout: Timeout = _UNSET
    ) -> asyncio.Future[T]: ...

    @overload
    def eventually(
        self, name: EventName, timeout: Timeout = _UNSET
    ) -> asyncio.Future[Any]: ...

    def eventually(self, name: EventName, timeout: Timeout = _UNSET) -> asyncio.Future[Any]:
        """Future resolving with the payload of the next emission of ``name``."""
        return self.eventually_if(name, _always, timeout)

    @overload
    def eventually_if(
        self,
        name: Event[T],
        predicate: Callable[[T], bool],
        timeout: Timeout = _UNSET,
    ) -> asyncio.Future[T]: ...

    @overload
    def eventually_if(
        self, name: EventName, predicate: Predicate, timeout: Timeout = _UNSET
    ) -> asyncio.Future[Any]: ...

    def eventually_if(
        self, name: EventName, predicate: Predicate, timeout: Timeout = _UNSET
    ) -> asyncio.Future[Any]:
        """
        Future resolving with the payload of the first emission matching ``predicate``.

        The listener and the timeout timer are armed immediately, before the
        future is awaited, so an emission right after this call is observed.
        Whichever side settles first disarms the other.

        Args:
            name: Event name or typed Event key
            predicate: Called with the emitted values
            timeout: Seconds to wait; ``None`` waits forever; omitted uses
                ``config.default_timeout``

        Returns:
            Future with the single emitted value, or the tuple of values when
            the emission carried zero or several. Cancelling the future
            unregisters the listener and the timer.

        Raises:
            RuntimeError: If called without a running event loop

        The future fails with EmitterTimeoutError if the timeout elapses first.
        """
        if timeout is _UNSET:
            timeout = self._config.default_timeout

        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()
        cancel_timer: Cancel | None = None

        def resolve(*values: Any) -> None:
            nonlocal cancel_timer
            if cancel_timer is not None:
                cancel_timer()
                cancel_timer = None
            if not future.done():
                future.set_result(_payload(values))

        # Timer goes first: a newListener listener may emit ``name`` during once_if
        if timeout is not None:
            expired_after = timeout

            def expire() -> None:
                nonlocal cancel_timer
                cancel_timer = None
                unsubscribe()
                if not future.done():
                    future.set_exception(EmitterTimeoutError(name, expired_after))

            cancel_timer = after(timeout, expire, loop=loop)

        unsubscribe = self.once_if(name, predicate, resolve)

        def cleanup(fut: asyncio.Future[Any]) -> None:
            nonlocal cancel_timer
            if not fut.cancelled():
                return
            unsubscribe()
            if cancel_timer is not None:
                cancel_timer()
                cancel_timer = None

        future.add_done_callback(cleanup)
        return future

    # ------------------------------------------------------------------
    # Tracing
    # ------------------------------------------------------------------

    def set_event_trace(self, enabled: bool, use_rich: bool = True) -> None:
        """
        Enable or disable event tracing.

        When enabled, every emit() is reported with its listener count, duration
        and failure count, on stderr via Rich or through ``logger.debug``.
        """
        self._event_trace = enabled
        self._event_trace_use_rich = use_rich
        state = "enabled" if enabled else "disabled"
        logger.info(f"Event tracing {state} for {self.__class__.__name__}")

    @property
    def event_trace_enabled(self) -> bool:
        return self._event_trace

    def _log_event(
        self,
        name: EventName,
        listener_count: int,
        duration_ms: float,
        failures: int,
    ) -> None:
        if self._event_trace_use_rich:
            text = Text()
            text.append(str(name), style="bold cyan")
            text.append(" | ")
            if listener_count:
                text.append(f"listeners: {listener_count}", style="green")
            else:
                text.append("no listeners", style="dim red")
            text.append(" | ")
            if duration_ms < 10:
                dur_style = "green"
            elif duration_ms < 100:
                dur_style = "yellow"
            else:
                dur_style = "red"
            text.append(f"{duration_ms:.2f}ms", style=f"bold {dur_style}")
            if failures:
                text.append(" | ")
                text.append(f"failures: {failures}", style="bold red")
            _console.print(text)
        else:
            parts = [
                "[EVENT TRACE]",
                f"event={name!r}",
                f"listeners={listener_count}",
                f"duration={duration_ms:.2f}ms",
            ]
            if failures:
                parts.append(f"failures={failures}")
            logger.debug(" | ".join(parts))


def of(config: EmitterConfig | None = None, **overrides: Any) -> Emitter:
    """Create a fresh Emitter with an empty registry."""
    return Emitter(config, **overrides)
