"""Shared fixtures for the StartDay test suite."""

import pytest
from unittest.mock import patch

from startday.sequencer import StepSequencer


@pytest.fixture
def definitions():
    """Two-step definition list used by most sequencer tests."""
    return (
        {"title": "LIGHTS ON", "description": "Switch on all lights."},
        {"title": "SYSTEM UP", "description": "Switch on the PC."},
    )


@pytest.fixture
def sleeps():
    """Records settle delays instead of sleeping."""
    calls = []

    def _sleep(seconds):
        calls.append(seconds)

    _sleep.calls = calls
    return _sleep


@pytest.fixture
def sequencer(definitions, sleeps):
    """Sequencer over the two-step list with a recorded 700 ms settle delay."""
    return StepSequencer(definitions, settle_seconds=0.7, sleep=sleeps)


@pytest.fixture
def mock_config():
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "settle_delay_ms": 250,
        "exit_transition_ms": 100,
        "suggester_model": "gemini-2.0-flash",
        "suggester_temperature": 0,
        "default_context": "Morning start-up",
        "reset_prompt": "Start over?",
    }
    with patch("startday.config._config", test_config):
        yield test_config
