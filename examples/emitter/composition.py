"""Components expose events by holding an Emitter, not by subclassing it."""

from __future__ import annotations

import asyncio

from good_emitter import Emitter, Listener, Unsubscribe, after, listen


class Socket:
    """Fake socket publishing ``message`` events."""

    def __init__(self) -> None:
        self.events = Emitter()

    # Delegated registration surface
    def on(self, name: str, listener: Listener) -> Unsubscribe:
        return self.events.on(name, listener)

    def off(self, name: str | None = None, listener: Listener | None = None) -> int:
        return self.events.off(name, listener)

    def emit(self, name: str, *values: object) -> None:
        self.events.emit(name, *values)

    def listener_count(self, name: str | None = None) -> int:
        return self.events.listener_count(name)

    def receive(self, text: str) -> None:
        self.emit("message", text)

    def login(self) -> None:
        after(0.01, lambda: self.receive("did-login"))


async def main() -> None:
    client = Socket()
    messages: list[str] = []

    def record(text: str) -> None:
        messages.append(text)

    stop = listen(client, {"message": record})
    client.login()
    reply = await client.events.eventually_if(
        "message", lambda text: text.startswith("did"), timeout=1
    )
    stop()
    print(reply, messages)


if __name__ == "__main__":
    asyncio.run(main())
