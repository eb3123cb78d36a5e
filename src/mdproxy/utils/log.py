"""Logging setup: everything goes to stderr, stdout is the protocol channel."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "MDPROXY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

stderr_console = Console(stderr=True)


def configure_logging(level: str | None = None) -> None:
    """Attach a :class:`RichHandler` on stderr to the ``mdproxy`` logger.

    *level* falls back to ``$MDPROXY_LOG_LEVEL`` and then ``WARNING``.
    Calling this twice replaces the previous handler.
    """
    resolved = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()

    logger = logging.getLogger("mdproxy")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=stderr_console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(resolved)
    logger.propagate = False
