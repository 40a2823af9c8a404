"""Trailing-edge debounce driven by the host's event loop.

A restartable single-shot timer: every :meth:`Debouncer.call` cancels
whatever is pending and schedules the new call ``delay`` seconds out.
Nothing runs on another thread — the host calls :meth:`Debouncer.poll`
once per frame and the pending call fires from there once due.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any


class Debouncer:
    """Coalesce bursts of calls into the last one.

    Parameters:
        delay: Quiet period in seconds before the pending call fires.
        clock: Monotonic time source; injectable for tests.
    """

    def __init__(
        self,
        delay: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._delay = delay
        self._clock = clock
        self._pending: tuple[Callable[..., Any], tuple[Any, ...]] | None = None
        self._deadline: float | None = None

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def call(self, func: Callable[..., Any], *args: Any) -> None:
        """Schedule ``func(*args)``, replacing any pending call."""
        self._pending = (func, args)
        self._deadline = self._clock() + self._delay

    def cancel(self) -> None:
        self._pending = None
        self._deadline = None

    def poll(self) -> bool:
        """Fire the pending call if its deadline has passed.

        Returns True if a call fired.
        """
        if self._pending is None or self._deadline is None:
            return False
        if self._clock() < self._deadline:
            return False
        return self.flush()

    def flush(self) -> bool:
        """Fire the pending call now, regardless of the deadline."""
        if self._pending is None:
            return False
        func, args = self._pending
        self.cancel()
        func(*args)
        return True
