"""
Trailing-edge debounce gate.
"""

import asyncio

from .base import Gate, PendingCall
from .deferred import create_deferred


class DebounceGate(Gate):
    """Admits only the last call of a burst, ``interval_ms`` after it arrives.

    Every call restarts the timer. A call superseded by a newer one
    resolves False at the moment it is superseded.
    """

    kind = "debounce"

    def call(self) -> "asyncio.Future[bool]":
        future, resolve = create_deferred()
        if self._closed:
            self._reject_closed(resolve)
            return future

        self._supersede()

        pending = PendingCall(future=future, resolve=resolve)
        pending.timer = self._timers.schedule_once(
            self._interval_ms, lambda: self._admit(pending)
        )
        self._pending = pending
        return future

    def _admit(self, pending: PendingCall) -> None:
        self._pending = None
        pending.resolve(True)
        self.metrics.record_outcome("admitted")
        self.logger.debug("Call admitted on trailing edge")
