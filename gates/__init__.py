"""
Asynchronous rate gates.

Two admission primitives collapse bursts of calls into at most one
effective action per window:

- DebounceGate: admits the last call of a burst, once the burst goes quiet
- ThrottleGate: admits the first call immediately, then at most one
  collapsed call per window

Each ``call()`` returns an asyncio future resolving to True (admitted)
or False (superseded or rejected).
"""

from .base import Gate, PendingCall
from .debounce import DebounceGate
from .deferred import create_deferred
from .factory import GateKind, create_debounce_gate, create_gate, create_throttle_gate
from .throttle import ThrottleGate
from .timers import AsyncioTimerService, TimerHandle, TimerService

__all__ = [
    "AsyncioTimerService",
    "DebounceGate",
    "Gate",
    "GateKind",
    "PendingCall",
    "ThrottleGate",
    "TimerHandle",
    "TimerService",
    "create_debounce_gate",
    "create_deferred",
    "create_gate",
    "create_throttle_gate",
]
