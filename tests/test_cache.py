"""
Unit tests for the static layer cache
"""
import pygame
import pytest

from tidecurve.visualization.cache import StaticLayerCache


class NullRenderer:
    """Renderer stand-in whose builds always come back empty."""

    def __init__(self):
        self.calls = 0

    def render(self, *args, **kwargs):
        self.calls += 1
        return None


@pytest.fixture
def cache(settings, wall_clock):
    return StaticLayerCache(settings, clock=wall_clock)


def pixels(entry):
    return pygame.image.tobytes(entry.buffer, "RGBA")


class TestCacheStability:
    """Tests for when the cache must not rebuild."""

    def test_first_get_builds(self, cache, view_state):
        entry = cache.get(view_state)

        assert entry is not None
        assert cache.build_count == 1
        assert len(entry.points) >= 2

    def test_consecutive_frames_reuse_entry(self, cache, view_state, wall_clock):
        first = cache.get(view_state)
        wall_clock.advance(1.0)
        second = cache.get(view_state)

        assert cache.build_count == 1
        assert second is first

    def test_theme_within_bucket_reuses_entry(self, cache, view_state):
        view_state.theme_blend = 0.02
        cache.get(view_state)
        view_state.theme_blend = 0.04
        cache.get(view_state)

        assert cache.build_count == 1


class TestCacheRebuild:
    """Tests for each rebuild trigger."""

    def test_size_change(self, cache, view_state):
        cache.get(view_state)
        view_state.width = 500
        cache.get(view_state)

        assert cache.build_count == 2

    def test_theme_bucket_change(self, cache, view_state):
        cache.get(view_state)
        view_state.theme_blend = 0.5
        cache.get(view_state)

        assert cache.build_count == 2

    def test_prediction_count_change(self, cache, view_state):
        cache.get(view_state)
        view_state.predictions = view_state.predictions[:-1]
        cache.get(view_state)

        assert cache.build_count == 2

    def test_minute_rollover(self, cache, view_state, wall_clock):
        cache.get(view_state)
        wall_clock.advance(60.0)
        cache.get(view_state)

        assert cache.build_count == 2

    def test_ttl_expiry(self, cache, view_state, wall_clock):
        """TTL forces a rebuild even inside the same minute."""
        cache.get(view_state)
        wall_clock.advance(29.0)
        cache.get(view_state)
        assert cache.build_count == 1

        wall_clock.advance(2.0)
        cache.get(view_state)
        assert cache.build_count == 2

    def test_invalidate(self, cache, view_state):
        cache.get(view_state)
        cache.invalidate()
        cache.get(view_state)

        assert cache.build_count == 2

    def test_invalidate_is_pixel_identical(self, cache, view_state, wall_clock):
        """A rebuild later in the same minute reproduces the buffer exactly."""
        wall_clock.advance(5.0)
        before = cache.get(view_state)
        wall_clock.advance(25.0)
        cache.invalidate()
        after = cache.get(view_state)

        assert after is not before
        assert after.key == before.key
        assert after.buffer.get_size() == before.buffer.get_size()
        assert pixels(after) == pixels(before)

    def test_build_anchored_to_minute_start(self, cache, view_state, wall_clock):
        wall_clock.advance(42.5)
        entry = cache.get(view_state)

        assert entry.now_at_build == wall_clock.now - 42.5
        assert entry.built_at == wall_clock.now


class TestFailedBuild:
    """Tests for builds that yield too few points."""

    def test_too_few_predictions_leaves_cache_empty(self, cache, view_state):
        view_state.predictions = view_state.predictions[:1]

        assert cache.get(view_state) is None
        assert cache.entry is None

    def test_no_retry_until_trigger(self, settings, wall_clock, view_state):
        renderer = NullRenderer()
        cache = StaticLayerCache(settings, clock=wall_clock, renderer=renderer)

        for _ in range(5):
            assert cache.get(view_state) is None
            wall_clock.advance(1.0)
        assert renderer.calls == 1

        wall_clock.advance(30.0)
        cache.get(view_state)
        assert renderer.calls == 2

    def test_invalidate_retries(self, settings, wall_clock, view_state):
        renderer = NullRenderer()
        cache = StaticLayerCache(settings, clock=wall_clock, renderer=renderer)

        cache.get(view_state)
        cache.invalidate()
        cache.get(view_state)

        assert renderer.calls == 2


class TestCacheKey:
    """Tests for key derivation."""

    def test_theme_bucket(self, cache, view_state, wall_clock):
        view_state.theme_blend = 0.26
        key = cache.make_key(view_state, wall_clock())
        assert key.theme_bucket == 3

    def test_minute_bucket(self, cache, view_state, wall_clock):
        now = wall_clock()
        assert cache.make_key(view_state, now).minute_bucket == cache.make_key(view_state, now + 59).minute_bucket
        assert cache.make_key(view_state, now).minute_bucket != cache.make_key(view_state, now + 60).minute_bucket

    def test_clear(self, cache, view_state):
        cache.get(view_state)
        cache.clear()

        assert cache.entry is None
        cache.get(view_state)
        assert cache.build_count == 2
