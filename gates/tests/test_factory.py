"""
Unit tests for gate factories, configuration and errors.
"""

import math

import pytest
from prometheus_client import REGISTRY
from pydantic import ValidationError as SettingsValidationError

from gates import DebounceGate, GateKind, ThrottleGate
from gates.factory import create_debounce_gate, create_gate, create_throttle_gate
from gates.timers import AsyncioTimerService
from shared.config import GateSettings, get_settings
from shared.errors import InvalidIntervalError, ValidationError


def _calls_total(kind: str, outcome: str) -> float:
    value = REGISTRY.get_sample_value("gate_calls_total", {"kind": kind, "outcome": outcome})
    return value or 0.0


class TestFactories:
    """Test cases for gate factories."""

    def test_create_debounce_gate(self, timers, settings):
        """Test the debounce factory builds a DebounceGate."""
        gate = create_debounce_gate(250, timers=timers, name="search", settings=settings)

        assert isinstance(gate, DebounceGate)
        assert gate.interval_ms == 250
        assert gate.name == "search"

    def test_create_throttle_gate(self, timers, settings):
        """Test the throttle factory builds a ThrottleGate."""
        gate = create_throttle_gate(250, timers=timers, settings=settings)

        assert isinstance(gate, ThrottleGate)
        assert gate.name == "throttle"

    def test_default_timer_service(self, settings):
        """Test gates default to the asyncio timer service."""
        gate = create_debounce_gate(100, settings=settings)

        assert isinstance(gate._timers, AsyncioTimerService)

    @pytest.mark.parametrize("kind,expected", [
        ("debounce", DebounceGate),
        ("throttle", ThrottleGate),
        (GateKind.DEBOUNCE, DebounceGate),
        (GateKind.THROTTLE, ThrottleGate),
    ])
    def test_create_gate_by_kind(self, kind, expected, timers, settings):
        """Test create_gate accepts kinds as enum members or strings."""
        gate = create_gate(kind, 500, timers=timers, settings=settings)

        assert isinstance(gate, expected)
        assert gate.interval_ms == 500

    def test_create_gate_uses_default_interval(self, timers):
        """Test create_gate falls back to the configured interval."""
        settings = GateSettings(default_interval_ms=750)

        gate = create_gate("throttle", timers=timers, settings=settings)

        assert gate.interval_ms == 750

    def test_create_gate_unknown_kind(self, timers, settings):
        """Test an unknown kind is a validation error."""
        with pytest.raises(ValidationError) as exc_info:
            create_gate("leaky_bucket", 100, timers=timers, settings=settings)

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert exc_info.value.details["valid_kinds"] == ["debounce", "throttle"]

    def test_gates_are_independent(self, timers, settings):
        """Test two gates on one timer service do not share state."""
        first = create_throttle_gate(100, timers=timers, settings=settings)
        second = create_throttle_gate(100, timers=timers, settings=settings)

        first.close()

        assert first.is_closed() is True
        assert second.is_closed() is False


class TestIntervalValidation:
    """Test cases for interval preconditions."""

    @pytest.mark.parametrize("interval_ms", [0, -1, -0.5, math.inf, math.nan, True, None, "1000"])
    def test_invalid_interval_rejected(self, interval_ms, timers):
        """Test non-positive, non-finite and non-numeric intervals are rejected."""
        with pytest.raises(InvalidIntervalError) as exc_info:
            DebounceGate(interval_ms, timers=timers)

        assert exc_info.value.code == "INVALID_INTERVAL"

    def test_invalid_interval_via_factory(self, timers, settings):
        """Test the factories apply the same precondition."""
        with pytest.raises(ValidationError):
            create_throttle_gate(0, timers=timers, settings=settings)

    def test_fractional_interval_accepted(self, timers):
        """Test positive fractional intervals are valid."""
        gate = ThrottleGate(0.5, timers=timers)

        assert gate.interval_ms == 0.5

    def test_error_fields(self):
        """Test the interval error carries code, message and details."""
        error = InvalidIntervalError(-5)

        assert isinstance(error, ValidationError)
        assert error.code == "INVALID_INTERVAL"
        assert "-5" in error.message
        assert str(error) == error.message
        assert error.details == {"interval_ms": "-5"}


class TestSettings:
    """Test cases for GateSettings."""

    def test_defaults(self, monkeypatch):
        """Test default settings values."""
        monkeypatch.delenv("GATES_DEFAULT_INTERVAL_MS", raising=False)
        settings = GateSettings(_env_file=None)

        assert settings.default_interval_ms == 1000
        assert settings.log_level == "info"
        assert settings.metrics_enabled is True

    def test_environment_overrides(self, monkeypatch):
        """Test settings are read from GATES_ prefixed variables."""
        monkeypatch.setenv("GATES_DEFAULT_INTERVAL_MS", "250")
        monkeypatch.setenv("GATES_METRICS_ENABLED", "false")

        settings = GateSettings(_env_file=None)

        assert settings.default_interval_ms == 250
        assert settings.metrics_enabled is False

    def test_non_positive_default_interval_rejected(self):
        """Test the configured default interval must be positive."""
        with pytest.raises(SettingsValidationError):
            GateSettings(default_interval_ms=0)

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()


class TestMetrics:
    """Test cases for gate outcome metrics."""

    @pytest.mark.asyncio
    async def test_outcomes_counted(self, timers, settings):
        """Test admissions and supersessions are counted by kind."""
        admitted_before = _calls_total("debounce", "admitted")
        superseded_before = _calls_total("debounce", "superseded")

        gate = create_debounce_gate(100, timers=timers, settings=settings)
        gate.call()
        gate.call()
        timers.advance(100)

        assert _calls_total("debounce", "admitted") == admitted_before + 1
        assert _calls_total("debounce", "superseded") == superseded_before + 1

    @pytest.mark.asyncio
    async def test_flush_counted(self, timers, settings):
        """Test flushes are counted with their delivered outcome."""
        flushed_before = _calls_total("throttle", "flushed_false")

        gate = create_throttle_gate(100, timers=timers, settings=settings)
        gate.call()
        gate.call()
        gate.flush(False)

        assert _calls_total("throttle", "flushed_false") == flushed_before + 1

    @pytest.mark.asyncio
    async def test_metrics_disabled(self, timers):
        """Test nothing is recorded when metrics are disabled."""
        rejected_before = _calls_total("throttle", "rejected_closed")

        gate = create_throttle_gate(100, timers=timers, settings=GateSettings(metrics_enabled=False))
        gate.close()
        gate.call()

        assert _calls_total("throttle", "rejected_closed") == rejected_before
