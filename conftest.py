"""
Shared pytest fixtures for rate gates.
"""

import pytest

from gates.testing import ManualTimerService
from shared.config import GateSettings
from shared.logging import configure_logging


configure_logging("gates", log_level="warning")


@pytest.fixture
def timers():
    """Manually advanced timer service."""
    return ManualTimerService()


@pytest.fixture
def settings():
    """Settings with metrics enabled and the default interval."""
    return GateSettings(default_interval_ms=1000, metrics_enabled=True)
