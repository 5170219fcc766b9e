"""Ordered, synchronous listener lists shared by the locale store and tilt feeds."""

from __future__ import annotations

import logging
from typing import Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by ``subscribe``. Unsubscribing twice is a no-op."""

    def __init__(self, cancel: Callable[[], None]):
        self._cancel: Optional[Callable[[], None]] = cancel

    @property
    def active(self) -> bool:
        return self._cancel is not None

    def unsubscribe(self):
        cancel, self._cancel = self._cancel, None
        if cancel is not None:
            cancel()

    close = unsubscribe

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc):
        self.unsubscribe()


class Observable(Generic[T]):
    """
    Listener registry with registration-order dispatch

    A failing listener is logged and skipped so the rest of the round
    still runs. Each round iterates over a snapshot, so unsubscribing
    from inside a callback only affects later rounds.
    """

    def __init__(self):
        self._listeners: List[Callable[[T], None]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        if not callable(callback):
            raise TypeError(f"listener must be callable, got {type(callback).__name__}")
        self._listeners.append(callback)

        def cancel():
            # identity match: the same function may be registered twice
            for i, cb in enumerate(self._listeners):
                if cb is callback:
                    del self._listeners[i]
                    return

        return Subscription(cancel)

    def _notify(self, value: T) -> int:
        delivered = 0
        for callback in list(self._listeners):
            try:
                callback(value)
                delivered += 1
            except Exception:
                logger.exception("listener %r failed for %r", callback, value)
        return delivered

    def _clear_listeners(self):
        self._listeners.clear()
