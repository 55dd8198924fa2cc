"""Awaiting emissions with eventually_if and a cancellable timer."""

from __future__ import annotations

import asyncio
from typing import TypedDict

from good_emitter import Emitter, EmitterTimeoutError, Event, after


class Data(TypedDict):
    id: int
    value: str


DATA: Event[Data] = Event("data")


async def main() -> None:
    emitter = Emitter()

    after(0.01, lambda: emitter.emit(DATA, {"id": 1, "value": "first"}))
    after(0.02, lambda: emitter.emit(DATA, {"id": 2, "value": "second"}))

    data = await emitter.eventually_if(DATA, lambda d: d["id"] == 2, timeout=1)
    print(f"got {data['value']}")

    try:
        await emitter.eventually(DATA, timeout=0.01)
    except EmitterTimeoutError as e:
        print(f"{e.code}: {e}")


if __name__ == "__main__":
    asyncio.run(main())
