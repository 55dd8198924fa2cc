from __future__ import annotations

from typing import Any

from .protocols import EventName, Listener


class EmitterError(Exception):
    """Base class for errors raised by the emitter."""

    pass


class DuplicateListenerError(EmitterError, ValueError):
    """Raised by ``on`` when the listener is already registered for the event."""

    def __init__(self, event: EventName, listener: Listener):
        self.event = event
        self.listener = listener
        super().__init__(
            f"Listener {_describe(listener)} is already registered for event {event!r}."
        )


class EmitterTimeoutError(EmitterError, TimeoutError):
    """Raised when a conditional wait expires before a matching emission.

    ``code`` is always ``"timeout"`` so callers can match on it without
    inspecting the message.
    """

    code = "timeout"

    def __init__(self, event: EventName, timeout: float):
        self.event = event
        self.timeout = timeout
        super().__init__(
            f"Timeout of {timeout}s reached while waiting for event {event!r}."
        )


def _describe(listener: Any) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)
