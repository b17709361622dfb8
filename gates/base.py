"""
Common state machine shared by the debounce and throttle gates.
"""

import asyncio
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from shared.errors import InvalidIntervalError
from shared.logging import get_logger
from shared.metrics import GateMetrics

from .deferred import Resolver
from .timers import AsyncioTimerService, TimerHandle, TimerService


@dataclass
class PendingCall:
    """The single caller waiting on a gate.

    ``timer`` is the callback that will settle the call on its own, or
    None when the call is settled by a shared window tick.
    """
    future: "asyncio.Future[bool]"
    resolve: Resolver
    timer: Optional[TimerHandle] = None


def validate_interval(interval_ms: Any) -> float:
    """Return ``interval_ms`` if it is a positive finite number, else raise."""
    if isinstance(interval_ms, bool) or not isinstance(interval_ms, (int, float)):
        raise InvalidIntervalError(interval_ms)
    if not math.isfinite(interval_ms) or interval_ms <= 0:
        raise InvalidIntervalError(interval_ms)
    return interval_ms


class Gate(ABC):
    """Admission primitive resolving each call to admitted (True) or not (False)."""

    kind = "gate"

    def __init__(self,
                 interval_ms: float,
                 timers: Optional[TimerService] = None,
                 name: Optional[str] = None,
                 metrics_enabled: bool = True):
        self._interval_ms = validate_interval(interval_ms)
        self._timers = timers if timers is not None else AsyncioTimerService()
        self.name = name or self.kind
        self.logger = get_logger(f"gates.{self.kind}").bind(gate=self.name)
        self.metrics = GateMetrics(self.kind, enabled=metrics_enabled)

        self._closed = False
        self._pending: Optional[PendingCall] = None

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    def __call__(self) -> "asyncio.Future[bool]":
        return self.call()

    @abstractmethod
    def call(self) -> "asyncio.Future[bool]":
        """Request admission. The returned future resolves to the outcome."""

    def flush(self, value: bool) -> bool:
        """Settle the pending call with ``value`` now.

        Returns False when nothing was pending.
        """
        if self._pending is None:
            return False

        pending = self._release_pending()
        pending.resolve(value)
        self.metrics.record_flush(value)
        self.logger.info("Pending call flushed", value=value)
        return True

    def close(self) -> None:
        """Permanently close the gate, rejecting the pending call if any."""
        if self._closed:
            return

        self._closed = True
        if self._pending is not None:
            pending = self._release_pending()
            pending.resolve(False)
            self.metrics.record_outcome("closed")
        self.logger.info("Gate closed")

    def is_closed(self) -> bool:
        return self._closed

    def has_pending(self) -> bool:
        return self._pending is not None

    def get_state(self) -> Dict[str, Any]:
        """Get current gate state."""
        return {
            "name": self.name,
            "kind": self.kind,
            "interval_ms": self._interval_ms,
            "closed": self._closed,
            "pending": self._pending is not None,
        }

    def _release_pending(self) -> PendingCall:
        """Cancel the pending call's timer and empty the slot."""
        pending, self._pending = self._pending, None
        if pending.timer is not None:
            self._timers.cancel(pending.timer)
        return pending

    def _supersede(self) -> None:
        if self._pending is None:
            return
        pending = self._release_pending()
        pending.resolve(False)
        self.metrics.record_outcome("superseded")
        self.logger.debug("Pending call superseded")

    def _reject_closed(self, resolve: Resolver) -> None:
        resolve(False)
        self.metrics.record_outcome("rejected_closed")
        self.logger.debug("Call rejected, gate is closed")

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} name={self.name!r} interval_ms={self._interval_ms} "
            f"closed={self._closed} pending={self._pending is not None}>"
        )
