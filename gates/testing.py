"""
Manually advanced timer service for deterministic gate tests.
"""

import heapq
import itertools
from typing import Callable, List, Tuple

from shared.errors import TimerError

from .timers import TimerHandle, TimerService


class ManualTimerService(TimerService):
    """Timer service driven by a virtual clock.

    Nothing fires until ``advance`` moves the clock; due callbacks then run
    in deadline order, with the clock set to each callback's deadline.
    """

    def __init__(self):
        self.now_ms = 0.0
        self._queue: List[Tuple[float, int, TimerHandle, Callable[[], None]]] = []
        self._seq = itertools.count()

    def schedule_once(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(delay_ms, repeating=False)
        self._push(self.now_ms + max(0.0, delay_ms), handle, callback)
        return handle

    def schedule_repeating(self, period_ms: float, callback: Callable[[], None]) -> TimerHandle:
        if period_ms <= 0:
            raise TimerError("Repeating timer period must be > 0", {"period_ms": period_ms})
        handle = TimerHandle(period_ms, repeating=True)
        self._push(self.now_ms + period_ms, handle, callback)
        return handle

    def advance(self, ms: float) -> None:
        """Move the clock forward by ``ms``, firing everything that falls due."""
        if ms < 0:
            raise TimerError("Cannot move the clock backwards", {"ms": ms})

        target = self.now_ms + ms
        while self._queue and self._queue[0][0] <= target:
            deadline, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now_ms = deadline
            handle._fired = True
            if handle.repeating:
                self._push(deadline + handle.delay_ms, handle, callback)
            callback()
        self.now_ms = target

    def active_timers(self) -> int:
        """Number of scheduled callbacks that can still fire."""
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def _push(self, deadline: float, handle: TimerHandle, callback: Callable[[], None]) -> None:
        heapq.heappush(self._queue, (deadline, next(self._seq), handle, callback))
