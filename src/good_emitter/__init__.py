"""good_emitter - typed in-process event emitter.

Synchronous fan-out with listener error isolation, meta events, and
awaitable one-shot waits with timeouts.
"""

import logging

from .adapters import listen, subscribe, wait_for
from .after import after
from .compat import StandardEmitter
from .config import EmitterConfig
from .core import Emitter, of, once_target
from .errors import DuplicateListenerError, EmitterError, EmitterTimeoutError
from .protocols import (
    Cancel,
    Event,
    EventName,
    Listener,
    MetaEvent,
    Predicate,
    SupportsListen,
    SupportsStandardEmitter,
    Unsubscribe,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Emitter",
    "EmitterConfig",
    "StandardEmitter",
    "of",
    "once_target",
    # Timers
    "after",
    # Adapters
    "listen",
    "subscribe",
    "wait_for",
    # Errors
    "EmitterError",
    "DuplicateListenerError",
    "EmitterTimeoutError",
    # Types and protocols
    "Cancel",
    "Event",
    "EventName",
    "Listener",
    "MetaEvent",
    "Predicate",
    "SupportsListen",
    "SupportsStandardEmitter",
    "Unsubscribe",
]
