"""Minimal Emitter example covering registration, dispatch and removal."""

from __future__ import annotations

from good_emitter import Emitter, MetaEvent
from good_emitter.utilities import configure_library_logging

emitter = Emitter()


def greet(name: str) -> None:
    print(f"Hello, {name}!")


def audit(event: object, listener: object) -> None:
    print(f"listener added for {event!r}")


def main() -> None:
    configure_library_logging()
    emitter.on(MetaEvent.NEW_LISTENER, audit)
    off = emitter.on("greet", greet)
    emitter.emit("greet", "Ada")
    off()
    emitter.emit("greet", "nobody is listening")
    print(emitter.event_names())


if __name__ == "__main__":
    main()
