"""
Shared error handling for rate gates.
"""

from typing import Dict, Any, Optional


class GateError(Exception):
    """Base exception for rate gates."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationError(GateError):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class InvalidIntervalError(ValidationError):
    """Interval is not a positive, finite number of milliseconds."""

    def __init__(self, interval_ms: Any):
        super().__init__(
            f"interval_ms must be a positive finite number, got {interval_ms!r}",
            {"interval_ms": repr(interval_ms)}
        )
        self.code = "INVALID_INTERVAL"


class TimerError(GateError):
    """Timer service errors."""

    def __init__(self, message: str = "Timer error", details: Optional[Dict[str, Any]] = None):
        super().__init__("TIMER_ERROR", message, details)
