from __future__ import annotations

from dataclasses import dataclass

import pytest

from good_emitter import Emitter, Event


@dataclass(frozen=True)
class Data:
    id: int
    value: str


MESSAGE: Event[str] = Event("message")
DATA: Event[Data] = Event("data")


def test_typed_key_dispatch() -> None:
    emitter = Emitter()
    received: list[str] = []

    def on_message(text: str) -> None:
        received.append(text.upper())

    emitter.on(MESSAGE, on_message)
    emitter.emit(MESSAGE, "hello")

    assert received == ["HELLO"]
    assert emitter.event_names() == [MESSAGE]


def test_typed_keys_compare_by_name() -> None:
    emitter = Emitter()
    received: list[str] = []

    def on_message(text: str) -> None:
        received.append(text)

    emitter.on(Event("message"), on_message)
    emitter.emit(MESSAGE, "same key")
    emitter.emit("message", "plain name is a different event")

    assert received == ["same key"]
    assert repr(MESSAGE) == "Event('message')"


@pytest.mark.asyncio()
async def test_typed_eventually_if() -> None:
    emitter = Emitter()

    future = emitter.eventually_if(DATA, lambda d: d.id == 2, timeout=1)
    emitter.emit(DATA, Data(1, "first"))
    emitter.emit(DATA, Data(2, "second"))

    result = await future
    assert result == Data(2, "second")
    assert result.value == "second"
