"""Listener storage and lookup.

CONTENTS:
- ListenerRegistry: ordered per-event listener sets with pruning

The registry uses a plain dict of dicts:
    _events[event_name] = {listener: None, ...}

Inner dicts act as insertion-ordered sets, so fan-out follows registration
order. An event name is present in ``_events`` only while it has at least one
listener; the inner dict is dropped on its last removal.

THREAD SAFETY: Mutations and snapshots are protected by threading.RLock so a
registry can be inspected from another thread while its owner dispatches.
Dispatch itself is not serialized; see ``Emitter.emit``.
"""

from __future__ import annotations

import logging
import threading

from .errors import DuplicateListenerError
from .protocols import EventName, Listener

logger = logging.getLogger(__name__)


class ListenerRegistry:
    """Per-event ordered listener sets."""

    def __init__(self, debug: bool = False):
        self._lock = threading.RLock()
        """RLock for registration and snapshot access."""

        self._events: dict[EventName, dict[Listener, None]] = {}
        """event_name -> ordered set of listeners (dict keys)."""

        self._debug = debug

    def add(self, event: EventName, listener: Listener, prepend: bool = False) -> int:
        """Register ``listener`` for ``event``.

        Args:
            event: Event name to register under
            listener: Callable to add
            prepend: Put the listener first in fan-out order instead of last

        Returns:
            Number of listeners registered for ``event`` afterwards

        Raises:
            DuplicateListenerError: The listener is already registered for ``event``
        """
        with self._lock:
            listeners = self._events.get(event)
            if listeners is None:
                listeners = self._events[event] = {}
            elif listener in listeners:
                raise DuplicateListenerError(event, listener)

            if prepend:
                self._events[event] = {listener: None, **listeners}
            else:
                listeners[listener] = None

            if self._debug:
                logger.debug(f"Registered {listener!r} for {event!r}")
            return len(self._events[event])

    def remove(self, event: EventName, listener: Listener) -> bool:
        """Unregister one listener; returns False if it was not registered."""
        with self._lock:
            listeners = self._events.get(event)
            if listeners is None or listener not in listeners:
                return False
            del listeners[listener]
            if not listeners:
                del self._events[event]
            if self._debug:
                logger.debug(f"Removed {listener!r} from {event!r}")
            return True

    def contains(self, event: EventName, listener: Listener) -> bool:
        with self._lock:
            listeners = self._events.get(event)
            return listeners is not None and listener in listeners

    def snapshot(self, event: EventName) -> tuple[Listener, ...]:
        """Listeners of ``event`` in fan-out order, copied."""
        with self._lock:
            listeners = self._events.get(event)
            return tuple(listeners) if listeners else ()

    def names(self) -> list[EventName]:
        with self._lock:
            return list(self._events)

    def count(self, event: EventName | None = None) -> int:
        """Listeners for ``event``, or across all events when ``event`` is None."""
        with self._lock:
            if event is not None:
                return len(self._events.get(event, ()))
            return sum(len(listeners) for listeners in self._events.values())

    def __bool__(self) -> bool:
        with self._lock:
            return bool(self._events)
