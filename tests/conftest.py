"""
Shared fixtures for TideCurve tests
"""
import os
import sys
from pathlib import Path

# Headless pygame; must be set before pygame is imported
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.constants import HOUR
from config.settings import Settings
from tidecurve.core.events import TidalEvent, TideKind
from tidecurve.core.state import VisualizationState
from tidecurve.data.predictions import synthesize_predictions

# A whole minute, so minute buckets start exactly here
T0 = 1_699_999_980.0


class FakeClock:
    """Manually advanced clock usable wherever a time source is injected."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(scope="session", autouse=True)
def pygame_headless():
    pygame.init()
    pygame.font.init()
    yield
    pygame.quit()


@pytest.fixture
def settings():
    """Default settings, independent of the shipped YAML."""
    return Settings()


@pytest.fixture
def wall_clock():
    return FakeClock(T0)


@pytest.fixture
def mono_clock():
    return FakeClock(100.0)


@pytest.fixture
def two_extrema():
    """High at T0 then low one half-cycle later."""
    return [
        TidalEvent(TideKind.HIGH, T0, 3.2),
        TidalEvent(TideKind.LOW, T0 + 6.2 * HOUR, 0.1),
    ]


@pytest.fixture
def predictions():
    return synthesize_predictions(T0 - 24 * HOUR, T0 + 24 * HOUR, mean_level=0.5, amplitude=3.0)


@pytest.fixture
def view_state(predictions):
    return VisualizationState(
        width=400,
        height=300,
        dpr=1.0,
        current_level=0.5,
        predictions=predictions,
        station_id="tower-pier",
    )
