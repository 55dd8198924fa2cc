"""Emitter state changes made by listeners while a fan-out is in progress."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from good_emitter import Emitter

MakeRecorder = Callable[..., Any]


@pytest.fixture()
def emitter() -> Emitter:
    return Emitter()


def test_nested_emit_is_depth_first(emitter: Emitter) -> None:
    results: list[str] = []

    def first(value: str) -> None:
        results.append(f"first-{value}")
        if value == "start":
            emitter.emit("test", "nested")

    def second(value: str) -> None:
        results.append(f"second-{value}")

    emitter.on("test", first)
    emitter.on("test", second)
    emitter.emit("test", "start")

    assert results == ["first-start", "first-nested", "second-nested", "second-start"]


def test_listener_removed_during_dispatch_is_skipped(
    emitter: Emitter, make_recorder: MakeRecorder
) -> None:
    victim = make_recorder("victim")

    def remover(_: Any) -> None:
        emitter.off("x", victim)

    emitter.on("x", remover)
    emitter.on("x", victim)
    emitter.emit("x", 1)

    assert victim.calls == []


def test_listener_added_during_dispatch_waits_for_next_emit(
    emitter: Emitter, make_recorder: MakeRecorder
) -> None:
    late = make_recorder("late")

    def adder(value: int) -> None:
        if value == 1:
            emitter.on("x", late)

    emitter.on("x", adder)
    emitter.emit("x", 1)
    assert late.calls == []

    emitter.emit("x", 2)
    assert late.calls == [(2,)]


def test_self_removal_through_unsubscribe(emitter: Emitter) -> None:
    calls: list[int] = []

    def listener(value: int) -> None:
        calls.append(value)
        off()

    off = emitter.on("x", listener)
    emitter.emit("x", 1)
    emitter.emit("x", 2)

    assert calls == [1]


def test_remove_everything_mid_dispatch(emitter: Emitter, make_recorder: MakeRecorder) -> None:
    later = make_recorder("later")

    def clear(_: Any) -> None:
        emitter.off()

    emitter.on("x", clear)
    emitter.on("x", later)
    emitter.emit("x", 1)

    assert later.calls == []
    assert emitter.event_names() == []


def test_once_does_not_fire_twice_on_nested_emit(
    emitter: Emitter, make_recorder: MakeRecorder
) -> None:
    once = make_recorder("once")

    def nesting(value: int) -> None:
        if value == 1:
            emitter.emit("x", 2)

    emitter.on("x", nesting)
    emitter.once("x", once)
    emitter.emit("x", 1)

    assert once.calls == [(2,)]
