from __future__ import annotations

import logging
import sys
from typing import TextIO

CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


def ensure_console_logger(
    logger: logging.Logger,
    handler_name: str,
    *,
    level: int = logging.INFO,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Return the console handler named *handler_name*, attaching it on first use.

    Calling again only updates the level, so repeated CLI invocations in one
    process do not print every line twice.
    """
    logger.setLevel(level)
    for handler in logger.handlers:
        if handler.name == handler_name:
            return handler
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.name = handler_name
    handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(handler)
    return handler
