"""Core protocols and type aliases shared by the emitter modules.

CONTENTS:
- EventName / Listener / Predicate: aliases used throughout the package
- MetaEvent: reserved event names emitted by the emitter itself
- Event: typed event key binding a payload type to a name
- SupportsListen: the four operations adapters consume
- SupportsStandardEmitter: conventional emitter surface (see compat.py)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass
from enum import StrEnum
from typing import (
    Any,
    Generic,
    Protocol,
    Self,
    TypeVar,
    runtime_checkable,
)

T = TypeVar("T")
T_Payload = TypeVar("T_Payload")

EventName = Hashable
Listener = Callable[..., Any]
Predicate = Callable[..., bool]

# Zero-argument cancellation handle returned by after()
Cancel = Callable[[], None]

# Returned by on()/once()/once_if(); reports how many listeners were removed
Unsubscribe = Callable[[], int]


class MetaEvent(StrEnum):
    """Reserved event names emitted by the emitter on its own behalf.

    They share the listener mapping with user events, so
    ``emitter.on("newListener", ...)`` and
    ``emitter.on(MetaEvent.NEW_LISTENER, ...)`` are the same registration.
    """

    NEW_LISTENER = "newListener"
    """Emitted after a registration with ``(name, listener)``."""

    REMOVE_LISTENER = "removeListener"
    """Emitted after each removal with ``(name, listener)``."""

    ERROR = "error"
    """Receives exceptions raised by listeners of other events."""


@dataclass(frozen=True, slots=True)
class Event(Generic[T]):
    """Typed event key.

    Binds a payload type to an event name so that listeners, ``emit`` and
    ``eventually`` calls are checked statically:

        MESSAGE: Event[str] = Event("message")

        emitter.on(MESSAGE, lambda text: print(text.upper()))
        emitter.emit(MESSAGE, "hello")
        text: str = await emitter.eventually(MESSAGE)
    """

    name: str

    def __repr__(self) -> str:
        return f"Event({self.name!r})"


@runtime_checkable
class SupportsListen(Protocol):
    """Registration surface consumed by ``listen``, ``subscribe`` and ``wait_for``."""

    def on(self, name: Any, listener: Listener) -> Unsubscribe: ...

    def off(self, name: Any = None, listener: Listener | None = None) -> int: ...

    def emit(self, name: Any, *values: Any) -> None: ...

    def listener_count(self, name: Any = None) -> int: ...


@runtime_checkable
class SupportsStandardEmitter(Protocol):
    """Conventional emitter shape for code written against a classic API.

    Chaining methods return the emitter itself. ``StandardEmitter`` in
    ``good_emitter.compat`` implements this on top of ``Emitter``.
    """

    def add_listener(self, name: Any, listener: Listener) -> Self: ...

    def emit(self, name: Any, *values: Any) -> bool: ...

    def event_names(self) -> list[EventName]: ...

    def get_max_listeners(self) -> int: ...

    def listener_count(self, name: Any) -> int: ...

    def listeners(self, name: Any) -> list[Listener]: ...

    def off(self, name: Any, listener: Listener) -> Self: ...

    def on(self, name: Any, listener: Listener) -> Self: ...

    def once(self, name: Any, listener: Listener) -> Self: ...

    def prepend_listener(self, name: Any, listener: Listener) -> Self: ...

    def prepend_once_listener(self, name: Any, listener: Listener) -> Self: ...

    def raw_listeners(self, name: Any) -> list[Listener]: ...

    def remove_all_listeners(self, name: Any = None) -> Self: ...

    def remove_listener(self, name: Any, listener: Listener) -> Self: ...

    def set_max_listeners(self, n: int) -> Self: ...
