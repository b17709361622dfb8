"""
Factories for creating gates.
"""

from enum import Enum
from typing import Optional, Union

from shared.config import GateSettings, get_settings
from shared.errors import ValidationError

from .base import Gate
from .debounce import DebounceGate
from .throttle import ThrottleGate
from .timers import TimerService


class GateKind(Enum):
    """Available gate kinds."""
    DEBOUNCE = "debounce"
    THROTTLE = "throttle"


_GATE_CLASSES = {
    GateKind.DEBOUNCE: DebounceGate,
    GateKind.THROTTLE: ThrottleGate,
}


def create_debounce_gate(interval_ms: float,
                         *,
                         timers: Optional[TimerService] = None,
                         name: Optional[str] = None,
                         settings: Optional[GateSettings] = None) -> DebounceGate:
    """Create a trailing-edge debounce gate."""
    settings = settings or get_settings()
    return DebounceGate(interval_ms, timers=timers, name=name,
                        metrics_enabled=settings.metrics_enabled)


def create_throttle_gate(interval_ms: float,
                         *,
                         timers: Optional[TimerService] = None,
                         name: Optional[str] = None,
                         settings: Optional[GateSettings] = None) -> ThrottleGate:
    """Create a leading-edge throttle gate."""
    settings = settings or get_settings()
    return ThrottleGate(interval_ms, timers=timers, name=name,
                        metrics_enabled=settings.metrics_enabled)


def create_gate(kind: Union[GateKind, str],
                interval_ms: Optional[float] = None,
                *,
                timers: Optional[TimerService] = None,
                name: Optional[str] = None,
                settings: Optional[GateSettings] = None) -> Gate:
    """Create a gate by kind, falling back to the configured default interval."""
    try:
        gate_kind = GateKind(kind)
    except ValueError:
        raise ValidationError(
            f"Unknown gate kind: {kind!r}",
            {"valid_kinds": [k.value for k in GateKind]}
        )

    settings = settings or get_settings()
    if interval_ms is None:
        interval_ms = settings.default_interval_ms

    gate_class = _GATE_CLASSES[gate_kind]
    return gate_class(interval_ms, timers=timers, name=name,
                      metrics_enabled=settings.metrics_enabled)
