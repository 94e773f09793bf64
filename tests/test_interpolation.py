"""
Unit tests for cosine curve interpolation
"""
import numpy as np
import pytest

from config.constants import HOUR
from tidecurve.core.events import RenderWindow, TidalEvent, TideKind
from tidecurve.core.interpolation import cosine_ease, interpolate_curve, level_at
from tidecurve.core.padding import pad_extrema

from conftest import T0


class TestCosineEase:
    """Tests for the easing function."""

    def test_endpoints(self):
        assert cosine_ease(0.0) == 0.0
        assert cosine_ease(1.0) == pytest.approx(1.0)

    def test_midpoint(self):
        assert cosine_ease(0.5) == pytest.approx(0.5)

    def test_accepts_arrays(self):
        result = cosine_ease(np.array([0.0, 0.5, 1.0]))
        assert result.shape == (3,)


class TestInterpolateCurve:
    """Tests for dense sampling between extrema."""

    def test_boundary_exactness(self, two_extrema):
        """First sample equals A's level and the appended last point equals B's."""
        window = RenderWindow(T0, T0 + 6.2 * HOUR)
        samples = interpolate_curve(two_extrema, window, 180)

        assert samples.first.time == T0
        assert samples.first.level == 3.2
        assert samples.last.time == T0 + 6.2 * HOUR
        assert samples.last.level == 0.1

    def test_midpoint_level(self, two_extrema):
        """Halfway between 3.2 and 0.1 the curve sits at 1.65."""
        window = RenderWindow(T0, T0 + 6.2 * HOUR)
        samples = interpolate_curve(two_extrema, window, 180)

        mid = T0 + 3.1 * HOUR
        index = int(np.argmin(np.abs(samples.times - mid)))
        assert samples.times[index] == pytest.approx(mid)
        assert samples.levels[index] == pytest.approx(1.65)

    def test_times_strictly_increasing(self, two_extrema):
        """Samples from a padded series never repeat or go backwards."""
        window = RenderWindow(T0 - 18 * HOUR, T0 + 18 * HOUR)
        series = pad_extrema(two_extrema, window, 6.2 * HOUR)
        samples = interpolate_curve(series, window, 180)

        assert len(samples) > 100
        assert np.all(np.diff(samples.times) > 0)

    def test_samples_inside_window(self, two_extrema):
        """Samples outside the window are dropped."""
        window = RenderWindow(T0 + HOUR, T0 + 2 * HOUR)
        samples = interpolate_curve(two_extrema, window, 180)

        assert len(samples) > 0
        assert samples.times.min() >= window.start
        assert samples.times.max() <= window.end

    def test_levels_within_extrema(self, two_extrema):
        """Cosine easing never overshoots the bracketing levels."""
        window = RenderWindow(T0, T0 + 6.2 * HOUR)
        samples = interpolate_curve(two_extrema, window, 60)

        assert samples.levels.min() >= 0.1
        assert samples.levels.max() <= 3.2

    def test_fewer_than_two_extrema(self):
        window = RenderWindow(T0, T0 + HOUR)
        assert len(interpolate_curve([], window)) == 0
        assert len(interpolate_curve([TidalEvent(TideKind.HIGH, T0, 1.0)], window)) == 0

    def test_skips_non_increasing_pairs(self):
        """Duplicate timestamps contribute no samples."""
        events = [
            TidalEvent(TideKind.HIGH, T0, 3.0),
            TidalEvent(TideKind.LOW, T0, 0.0),
            TidalEvent(TideKind.HIGH, T0 + HOUR, 3.0),
        ]
        samples = interpolate_curve(events, RenderWindow(T0, T0 + HOUR), 600)

        assert np.all(np.diff(samples.times) > 0)

    def test_invalid_step(self, two_extrema):
        with pytest.raises(ValueError):
            interpolate_curve(two_extrema, RenderWindow(T0, T0 + HOUR), 0)


class TestLevelAt:
    """Tests for single-instant evaluation."""

    def test_at_extrema(self, two_extrema):
        assert level_at(two_extrema, T0) == 3.2
        assert level_at(two_extrema, T0 + 6.2 * HOUR) == pytest.approx(0.1)

    def test_midpoint(self, two_extrema):
        assert level_at(two_extrema, T0 + 3.1 * HOUR) == pytest.approx(1.65)

    def test_outside_range(self, two_extrema):
        assert level_at(two_extrema, T0 - 1) is None
        assert level_at(two_extrema, T0 + 7 * HOUR) is None
