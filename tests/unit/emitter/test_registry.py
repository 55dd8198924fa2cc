from __future__ import annotations

import logging

import pytest

from good_emitter.errors import DuplicateListenerError
from good_emitter.registry import ListenerRegistry


def first() -> None:
    pass


def second() -> None:
    pass


def third() -> None:
    pass


@pytest.fixture()
def registry() -> ListenerRegistry:
    return ListenerRegistry()


def test_add_returns_listener_count(registry: ListenerRegistry) -> None:
    assert registry.add("demo", first) == 1
    assert registry.add("demo", second) == 2
    assert registry.add("other", first) == 1


def test_add_duplicate_raises_and_keeps_original(registry: ListenerRegistry) -> None:
    registry.add("demo", first)

    with pytest.raises(DuplicateListenerError) as exc_info:
        registry.add("demo", first)

    assert exc_info.value.event == "demo"
    assert exc_info.value.listener is first
    assert registry.snapshot("demo") == (first,)


def test_snapshot_preserves_registration_order(registry: ListenerRegistry) -> None:
    registry.add("demo", second)
    registry.add("demo", first)
    registry.add("demo", third)

    assert registry.snapshot("demo") == (second, first, third)
    assert registry.snapshot("missing") == ()


def test_prepend_puts_listener_first(registry: ListenerRegistry) -> None:
    registry.add("demo", first)
    registry.add("demo", second)
    registry.add("demo", third, prepend=True)

    assert registry.snapshot("demo") == (third, first, second)


def test_remove_prunes_empty_events(registry: ListenerRegistry) -> None:
    registry.add("demo", first)
    registry.add("demo", second)

    assert registry.remove("demo", first) is True
    assert registry.names() == ["demo"]
    assert registry.remove("demo", second) is True
    assert registry.names() == []
    assert not registry


def test_remove_unknown_returns_false(registry: ListenerRegistry) -> None:
    assert registry.remove("demo", first) is False
    registry.add("demo", first)
    assert registry.remove("demo", second) is False
    assert registry.contains("demo", first)


def test_count_per_event_and_total(registry: ListenerRegistry) -> None:
    registry.add("a", first)
    registry.add("a", second)
    registry.add("b", first)

    assert registry.count("a") == 2
    assert registry.count("b") == 1
    assert registry.count("c") == 0
    assert registry.count() == 3


def test_debug_logging(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="good_emitter.registry")
    registry = ListenerRegistry(debug=True)

    registry.add("demo", first)
    registry.remove("demo", first)

    assert "Registered" in caplog.text
    assert "Removed" in caplog.text
