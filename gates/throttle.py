"""
Leading-edge throttle gate with trailing collapse.
"""

import asyncio
from typing import Any, Dict, Optional

from .base import Gate, PendingCall
from .deferred import create_deferred
from .timers import TimerHandle, TimerService


class ThrottleGate(Gate):
    """Admits at most one call per ``interval_ms``.

    The first call of an idle period is admitted immediately and opens a
    window ticking every ``interval_ms``. Calls made while the window is
    open collapse into one queued call, admitted on the next tick. A tick
    with nothing queued closes the window.
    """

    kind = "throttle"

    def __init__(self,
                 interval_ms: float,
                 timers: Optional[TimerService] = None,
                 name: Optional[str] = None,
                 metrics_enabled: bool = True):
        super().__init__(interval_ms, timers=timers, name=name, metrics_enabled=metrics_enabled)
        self._window: Optional[TimerHandle] = None

    @property
    def window_active(self) -> bool:
        return self._window is not None

    def call(self) -> "asyncio.Future[bool]":
        future, resolve = create_deferred()
        if self._closed:
            self._reject_closed(resolve)
            return future

        if self._window is None:
            self._start_window()
            resolve(True)
            self.metrics.record_outcome("admitted")
            self.logger.debug("Call admitted on leading edge")
            return future

        self._supersede()
        self._pending = PendingCall(future=future, resolve=resolve)
        return future

    def flush(self, value: bool) -> bool:
        """Settle the queued call with ``value`` and restart the window from now."""
        if self._pending is None:
            return False

        self._stop_window()
        super().flush(value)
        self._start_window()
        return True

    def close(self) -> None:
        if self._closed:
            return
        self._stop_window()
        super().close()

    def get_state(self) -> Dict[str, Any]:
        state = super().get_state()
        state["window_active"] = self._window is not None
        return state

    def _start_window(self) -> None:
        self._window = self._timers.schedule_repeating(self._interval_ms, self._tick)
        self.logger.debug("Throttle window started")

    def _stop_window(self) -> None:
        if self._window is None:
            return
        self._timers.cancel(self._window)
        self._window = None

    def _tick(self) -> None:
        if self._pending is None:
            self._stop_window()
            self.logger.debug("Throttle window idle")
            return

        pending = self._release_pending()
        pending.resolve(True)
        self.metrics.record_outcome("admitted")
        self.logger.debug("Call admitted on window tick")
