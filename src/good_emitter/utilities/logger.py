from __future__ import annotations

import logging

from rich.logging import RichHandler

DEFAULT_FORMAT = "%(levelname)s %(name)s - %(message)s"


def configure_library_logging(
    level: int = logging.INFO,
    format: str = DEFAULT_FORMAT,
    rich: bool = False,
    **kwargs,
):
    """Configure a basic logging setup for the library if none is present.

    With ``rich=True`` records go through a ``RichHandler`` on stderr, which
    renders tracebacks of failing listeners with syntax highlighting.
    """

    root_logger = logging.getLogger()
    if root_logger.handlers:
        return

    if rich:
        kwargs.setdefault("handlers", [RichHandler(rich_tracebacks=True)])
        format = "%(name)s - %(message)s"

    logging.basicConfig(level=level, format=format, **kwargs)
