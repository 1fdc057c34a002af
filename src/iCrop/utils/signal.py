"""Synchronous publisher for crop edit records.

Handlers run in registration order on the caller's thread.  A handler that
raises is logged and skipped; the remaining handlers still receive the
payload, so a faulty listener cannot leave the engine half-way through an
event.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Generic, TypeVar

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class Signal(Generic[T]):
    """Observer list carrying one payload per emission."""

    def __init__(self, name: str = "signal") -> None:
        self.name = name
        self._handlers: list[Callable[[T], object]] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable[[T], object]) -> Callable[[T], object]:
        """Register *handler* once and return it, so this also works as a decorator."""
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable[[T], object]) -> None:
        with self._lock:
            self._handlers.remove(handler)

    def emit(self, payload: T) -> int:
        """Deliver *payload* and return the number of handlers that succeeded."""
        with self._lock:
            handlers = list(self._handlers)
        delivered = 0
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                _logger.exception("%s handler %r failed", self.name, handler)
                continue
            delivered += 1
        return delivered

    @property
    def handler_count(self) -> int:
        with self._lock:
            return len(self._handlers)
