"""Conventional emitter API on top of ``Emitter``.

``StandardEmitter`` wraps an ``Emitter`` and exposes the classic method set
(``add_listener``, ``remove_listener``, ``prepend_listener``,
``set_max_listeners``...) for code written against that shape. Chaining
methods return the adapter. Registration rules are the wrapped emitter's,
so registering the same listener twice still raises DuplicateListenerError.
"""

from __future__ import annotations

from typing import Any, Self

from .core import Emitter, once_target
from .protocols import EventName, Listener


class StandardEmitter:
    """Adapter implementing ``SupportsStandardEmitter`` by delegation."""

    def __init__(self, emitter: Emitter | None = None):
        self.emitter = emitter if emitter is not None else Emitter()

    def add_listener(self, name: EventName, listener: Listener) -> Self:
        self.emitter.on(name, listener)
        return self

    on = add_listener

    def prepend_listener(self, name: EventName, listener: Listener) -> Self:
        self.emitter.on(name, listener, prepend=True)
        return self

    def once(self, name: EventName, listener: Listener) -> Self:
        self.emitter.once(name, listener)
        return self

    def prepend_once_listener(self, name: EventName, listener: Listener) -> Self:
        self.emitter.once(name, listener, prepend=True)
        return self

    def remove_listener(self, name: EventName, listener: Listener) -> Self:
        self.emitter.off(name, listener)
        return self

    off = remove_listener

    def remove_all_listeners(self, name: EventName | None = None) -> Self:
        self.emitter.off(name)
        return self

    def emit(self, name: EventName, *values: Any) -> bool:
        """Dispatch ``values``; returns whether ``name`` had listeners."""
        had_listeners = self.emitter.has_listener(name)
        self.emitter.emit(name, *values)
        return had_listeners

    def event_names(self) -> list[EventName]:
        return self.emitter.event_names()

    def listener_count(self, name: EventName) -> int:
        return self.emitter.listener_count(name)

    def listeners(self, name: EventName) -> list[Listener]:
        """Listeners in fan-out order, with once-wrappers replaced by their targets."""
        return [once_target(listener) for listener in self.raw_listeners(name)]

    def raw_listeners(self, name: EventName) -> list[Listener]:
        return self.emitter.raw_listeners(name)

    def get_max_listeners(self) -> int:
        return self.emitter.max_listeners

    def set_max_listeners(self, n: int) -> Self:
        self.emitter.max_listeners = n
        return self
