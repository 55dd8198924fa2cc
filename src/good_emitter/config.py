from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MAX_LISTENERS = 512
DEFAULT_TIMEOUT = 60.0


class EmitterConfig(BaseModel):
    """Validated settings for an ``Emitter`` instance."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_listeners: int = Field(default=DEFAULT_MAX_LISTENERS, ge=0)
    """Soft threshold per event; exceeding it logs an error. 0 disables the check."""

    default_timeout: Annotated[float, Field(gt=0)] | None = DEFAULT_TIMEOUT
    """Seconds ``eventually``/``eventually_if`` wait when no timeout is given."""

    debug: bool = False
    """Log every registration and removal at debug level."""

    event_trace: bool = False
    """Trace every ``emit`` call (see ``Emitter.set_event_trace``)."""
