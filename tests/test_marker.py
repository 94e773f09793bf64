"""
Unit tests for the live marker
"""
import numpy as np
import pygame
import pytest

from tidecurve.core.events import CurveSamples, RenderWindow
from tidecurve.core.scale import CurveBounds, CurveGeometry, LevelRange
from tidecurve.visualization.marker import LiveMarker, find_bracket, level_at_time


@pytest.fixture
def samples():
    return CurveSamples(np.array([0.0, 10.0, 20.0, 30.0]), np.array([0.0, 1.0, 3.0, 2.0]))


@pytest.fixture
def geometry():
    return CurveGeometry(
        window=RenderWindow(0.0, 30.0),
        level_range=LevelRange(0.0, 4.0),
        bounds=CurveBounds(left=0.0, right=300.0, top=100.0, bottom=140.0),
    )


class TestFindBracket:
    """Tests for locating the surrounding samples."""

    def test_interior(self, samples):
        assert find_bracket(samples, 15.0) == 1

    def test_on_sample(self, samples):
        assert find_bracket(samples, 10.0) == 1
        assert find_bracket(samples, 0.0) == 0

    def test_last_sample(self, samples):
        """The final sample still has a bracket ending at it."""
        assert find_bracket(samples, 30.0) == 2

    def test_out_of_range(self, samples):
        assert find_bracket(samples, -1.0) is None
        assert find_bracket(samples, 31.0) is None

    def test_too_few_samples(self):
        assert find_bracket(CurveSamples(np.array([5.0]), np.array([1.0])), 5.0) is None


class TestLevelAtTime:
    """Tests for linear interpolation between samples."""

    def test_linear(self, samples):
        assert level_at_time(samples, 15.0, fallback=-1.0) == pytest.approx(2.0)
        assert level_at_time(samples, 25.0, fallback=-1.0) == pytest.approx(2.5)

    def test_exact_samples(self, samples):
        assert level_at_time(samples, 20.0, fallback=-1.0) == 3.0
        assert level_at_time(samples, 30.0, fallback=-1.0) == 2.0

    def test_fallback_outside(self, samples):
        """Unbracketed times use the supplied level instead of failing."""
        assert level_at_time(samples, 100.0, fallback=1.23) == 1.23
        assert level_at_time(CurveSamples(), 0.0, fallback=0.7) == 0.7


class TestLiveMarker:
    """Tests for marker placement and drawing."""

    def test_locate(self, samples, geometry):
        x, y, level = LiveMarker().locate(geometry, samples, 15.0, fallback_level=0.0)

        assert x == pytest.approx(150.0)
        assert level == pytest.approx(2.0)
        assert y == pytest.approx(120.0)

    def test_locate_uses_fallback(self, samples, geometry):
        _, y, level = LiveMarker().locate(geometry, samples, 60.0, fallback_level=4.0)

        assert level == 4.0
        assert y == pytest.approx(100.0)

    def test_draw_returns_position(self, samples, geometry):
        surface = pygame.Surface((300, 160))
        position = LiveMarker().draw(surface, geometry, samples, 15.0, 0.0, theme_blend=0.0)

        assert position == pytest.approx((150.0, 120.0))

    def test_draw_marks_surface(self, samples, geometry):
        surface = pygame.Surface((300, 160))
        surface.fill((0, 0, 0))
        LiveMarker().draw(surface, geometry, samples, 15.0, 0.0, theme_blend=0.0)

        assert surface.get_at((150, 120))[:3] != (0, 0, 0)
