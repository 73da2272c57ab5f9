"""Quiet-period gate between the search box and the route."""

from __future__ import annotations

import threading
from typing import Callable, Optional, Protocol

from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_DELAY_SECONDS = 0.8
DEFAULT_MIN_LENGTH = 2


class CancellableTimer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], CancellableTimer]


def daemon_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class SearchDebouncer:
    """Propagate search text only after typing pauses.

    The text field already shows each keystroke; this only decides when the
    value reaches the route. A value propagates once the quiet period elapses
    with no further input, and only when it is empty (an explicit clear) or at
    least ``min_length`` characters, and differs from ``current_value()``.
    """

    def __init__(
        self,
        on_commit: Callable[[str], None],
        current_value: Callable[[], str],
        *,
        delay: float = DEFAULT_DELAY_SECONDS,
        min_length: int = DEFAULT_MIN_LENGTH,
        timer_factory: TimerFactory = daemon_timer,
    ) -> None:
        self.on_commit = on_commit
        self.current_value = current_value
        self.delay = delay
        self.min_length = min_length
        self._timer_factory = timer_factory
        self._timer: Optional[CancellableTimer] = None
        self._lock = threading.Lock()
        self._pending: Optional[str] = None

    @property
    def pending(self) -> Optional[str]:
        return self._pending

    def on_input(self, value: Optional[str]) -> None:
        """Restart the quiet period with the latest text."""

        text = (value or "").strip()
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = text
            timer = self._timer_factory(self.delay, lambda: self._fire(timer))
            self._timer = timer
        timer.start()

    def should_propagate(self, value: str) -> bool:
        if value and len(value) < self.min_length:
            return False
        return value != (self.current_value() or "")

    def _fire(self, timer: CancellableTimer) -> None:
        with self._lock:
            # a newer keystroke replaced this timer after it was already due
            if timer is not self._timer:
                return
            self._timer = None
            value = self._pending
            self._pending = None
        if value is None or not self.should_propagate(value):
            logger.debug("Search input suppressed", extra={"length": len(value or "")})
            return
        self.on_commit(value)

    def flush(self) -> None:
        """Fire a pending value now (Enter key)."""

        with self._lock:
            timer = self._timer
        if timer is not None:
            timer.cancel()
            self._fire(timer)

    def cancel(self) -> None:
        """Drop any pending propagation (view teardown)."""

        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None
