from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
from rich.logging import RichHandler

from good_emitter.utilities import configure_library_logging


@pytest.fixture()
def root_logger() -> Iterator[logging.Logger]:
    root = logging.getLogger()
    level = root.level
    yield root
    root.setLevel(level)


def clear_handlers(root: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    # pytest attaches its capture handlers per phase, so this must run in the test body
    monkeypatch.setattr(root, "handlers", [])


def test_package_logger_has_null_handler() -> None:
    handlers = logging.getLogger("good_emitter").handlers
    assert any(isinstance(handler, logging.NullHandler) for handler in handlers)


def test_configure_is_noop_when_root_has_handlers(
    root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    existing = logging.NullHandler()
    monkeypatch.setattr(root_logger, "handlers", [existing])
    level = root_logger.level

    configure_library_logging(level=logging.DEBUG)

    assert root_logger.handlers == [existing]
    assert root_logger.level == level


def test_configure_installs_stream_handler(
    root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    clear_handlers(root_logger, monkeypatch)

    configure_library_logging(level=logging.DEBUG)

    assert root_logger.level == logging.DEBUG
    assert len(root_logger.handlers) == 1
    assert type(root_logger.handlers[0]) is logging.StreamHandler


def test_configure_with_rich(
    root_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    clear_handlers(root_logger, monkeypatch)

    configure_library_logging(rich=True)

    assert len(root_logger.handlers) == 1
    assert isinstance(root_logger.handlers[0], RichHandler)
