"""
Timer service used by gates to schedule their callbacks.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

from shared.errors import TimerError


class TimerHandle:
    """Cancellable reference to a scheduled callback."""

    def __init__(self, delay_ms: float, repeating: bool):
        self.delay_ms = delay_ms
        self.repeating = repeating
        self._cancelled = False
        self._fired = False
        self._native: Optional[asyncio.TimerHandle] = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def active(self) -> bool:
        """True while the callback can still fire."""
        if self._cancelled:
            return False
        return self.repeating or not self._fired

    def _cancel(self) -> None:
        self._cancelled = True
        if self._native is not None:
            self._native.cancel()
            self._native = None

    def __repr__(self) -> str:
        kind = "repeating" if self.repeating else "once"
        return f"<TimerHandle {kind} {self.delay_ms}ms active={self.active}>"


class TimerService(ABC):
    """Schedules callbacks after or every N milliseconds.

    Callbacks never fire earlier than requested, and never fire once their
    handle has been cancelled.
    """

    @abstractmethod
    def schedule_once(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` once after ``delay_ms``."""

    @abstractmethod
    def schedule_repeating(self, period_ms: float, callback: Callable[[], None]) -> TimerHandle:
        """Run ``callback`` every ``period_ms`` until cancelled."""

    def cancel(self, handle: TimerHandle) -> None:
        """Cancel a handle. Cancelling a fired or cancelled handle is a no-op."""
        handle._cancel()


class AsyncioTimerService(TimerService):
    """Timer service backed by the asyncio event loop.

    Each repeating tick is armed one full period after the tick that
    just ran, so consecutive ticks are never closer than the period.
    Ticks missed while the loop was stalled are not replayed.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        return asyncio.get_running_loop()

    def schedule_once(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._get_loop()
        handle = TimerHandle(delay_ms, repeating=False)

        def fire() -> None:
            if handle.cancelled:
                return
            handle._fired = True
            handle._native = None
            callback()

        handle._native = loop.call_later(max(0.0, delay_ms) / 1000.0, fire)
        return handle

    def schedule_repeating(self, period_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if period_ms <= 0:
            raise TimerError("Repeating timer period must be > 0", {"period_ms": period_ms})

        loop = self._get_loop()
        handle = TimerHandle(period_ms, repeating=True)
        period_s = period_ms / 1000.0

        def fire(deadline: float) -> None:
            if handle.cancelled:
                return
            handle._fired = True
            # Re-arm first so the callback may cancel the next tick
            next_deadline = max(deadline + period_s, loop.time() + period_s)
            handle._native = loop.call_at(next_deadline, fire, next_deadline)
            callback()

        first_deadline = loop.time() + period_s
        handle._native = loop.call_at(first_deadline, fire, first_deadline)
        return handle
