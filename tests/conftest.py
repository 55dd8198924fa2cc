from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest


class Recorder:
    """Callable listener that records the values it was called with.

    Each instance is a distinct listener identity.
    """

    def __init__(self, name: str = "recorder", side_effect: BaseException | None = None):
        self.name = name
        self.side_effect = side_effect
        self.calls: list[tuple[Any, ...]] = []

    def __call__(self, *values: Any) -> None:
        self.calls.append(values)
        if self.side_effect is not None:
            raise self.side_effect

    def __repr__(self) -> str:
        return f"Recorder({self.name!r})"

    @property
    def call_count(self) -> int:
        return len(self.calls)


@pytest.fixture()
def make_recorder() -> Callable[..., Recorder]:
    return Recorder
