"""
Integration tests for the tide curve layer and renderer
"""
import time

import pygame
import pytest

from tidecurve.core.event_bus import Event, EventBus, EventType
from tidecurve.data.predictions import synthesize_predictions
from tidecurve.visualization.renderer import Renderer
from tidecurve.visualization.layers.curve_layer import TideCurveLayer
from tidecurve.visualization.scrub import ScrubPhase


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def layer(settings, bus, wall_clock, mono_clock):
    return TideCurveLayer(settings, bus, clock=wall_clock, scrub_clock=mono_clock)


@pytest.fixture
def surface(view_state):
    return pygame.Surface(view_state.pixel_size)


def mouse(event_type, pos, button=1):
    if event_type == pygame.MOUSEMOTION:
        return pygame.event.Event(event_type, pos=pos, rel=(0, 0), buttons=(1, 0, 0))
    return pygame.event.Event(event_type, pos=pos, button=button)


class TestCurveLayerRender:
    """Tests for per-frame drawing."""

    def test_render_draws_marker_at_centre(self, layer, surface, view_state):
        layer.render(surface, view_state)

        assert layer.cache.build_count == 1
        x, y = layer.last_marker_position
        # Unscrubbed, "now" sits halfway across the 60..340 plot
        assert x == pytest.approx(200.0)
        assert 255 - 24 <= y <= 280

    def test_frames_reuse_cache(self, layer, surface, view_state, wall_clock):
        for _ in range(10):
            layer.render(surface, view_state)
            wall_clock.advance(0.5)

        assert layer.cache.build_count == 1

    def test_too_few_predictions_is_noop(self, layer, surface, view_state):
        view_state.predictions = view_state.predictions[:1]
        layer.render(surface, view_state)

        assert layer.cache.build_count == 0
        assert layer.last_marker_position is None

    def test_hidden_layer_skips_drawing(self, layer, surface, view_state):
        layer.set_visible(False)
        layer.render(surface, view_state)

        assert layer.last_marker_position is None

    def test_scrub_does_not_rebuild(self, layer, surface, view_state, wall_clock):
        layer.render(surface, view_state)
        layer.scrub.state.offset = 3 * 3600.0
        layer.render(surface, view_state)

        assert layer.cache.build_count == 1
        assert layer.virtual_now() == wall_clock() + 3 * 3600.0

    @pytest.mark.parametrize("width", [400, 1920])
    def test_invalidate_redraws_identical_frame(self, layer, view_state, wall_clock, width):
        """Rebuilding later in the same minute leaves the composited frame unchanged."""
        view_state.width = width
        wall_clock.advance(7.0)
        layer.render(pygame.Surface(view_state.pixel_size), view_state)
        wall_clock.advance(25.0)

        before = pygame.Surface(view_state.pixel_size)
        layer.render(before, view_state)
        key = layer.cache.entry.key
        layer.invalidate()
        after = pygame.Surface(view_state.pixel_size)
        layer.render(after, view_state)

        assert layer.cache.build_count == 2
        assert layer.cache.entry.key == key
        assert pygame.image.tobytes(after, "RGB") == pygame.image.tobytes(before, "RGB")


class TestCurveLayerInput:
    """Tests for pointer and wheel routing."""

    def test_drag_in_band(self, layer, surface, view_state):
        layer.render(surface, view_state)

        assert layer.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (200, 270)), view_state)
        layer.handle_event(mouse(pygame.MOUSEMOTION, (150, 270)), view_state)
        layer.handle_event(mouse(pygame.MOUSEBUTTONUP, (150, 270)), view_state)

        # 400px shows 24h: 216 s per pixel
        assert layer.scrub.offset == pytest.approx(50 * 216.0)
        assert layer.scrub.snapback_pending

    def test_press_above_band_not_consumed(self, layer, surface, view_state):
        layer.render(surface, view_state)

        assert not layer.handle_event(mouse(pygame.MOUSEBUTTONDOWN, (200, 50)), view_state)
        assert layer.scrub.phase is ScrubPhase.IDLE

    def test_wheel(self, layer, surface, view_state):
        layer.render(surface, view_state)
        event = pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=1, precise_x=0.0, precise_y=1.0)

        assert layer.handle_event(event, view_state)
        assert layer.scrub.offset == pytest.approx(-40 * 216.0 * 0.5)

    def test_emulated_touch_mouse_ignored(self, layer, surface, view_state):
        layer.render(surface, view_state)
        event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=(200, 270), button=1, touch=True)

        assert not layer.handle_event(event, view_state)
        assert not layer.scrub.state.dragging

    def test_finger_drag(self, layer, surface, view_state):
        layer.render(surface, view_state)
        down = pygame.event.Event(pygame.FINGERDOWN, finger_id=0, touch_id=0, x=0.5, y=0.9, dx=0.0, dy=0.0)
        move = pygame.event.Event(pygame.FINGERMOTION, finger_id=0, touch_id=0, x=0.25, y=0.9, dx=0.0, dy=0.0)

        assert layer.handle_event(down, view_state)
        layer.handle_event(move, view_state)

        assert layer.scrub.offset == pytest.approx(100 * 216.0)

    def test_finger_up_without_drag_not_consumed(self, layer, surface, view_state):
        layer.render(surface, view_state)
        up = pygame.event.Event(pygame.FINGERUP, finger_id=0, touch_id=0, x=0.5, y=0.2, dx=0.0, dy=0.0)

        assert not layer.handle_event(up, view_state)

    def test_finger_up_ends_drag(self, layer, surface, view_state):
        layer.render(surface, view_state)
        down = pygame.event.Event(pygame.FINGERDOWN, finger_id=0, touch_id=0, x=0.5, y=0.9, dx=0.0, dy=0.0)
        up = pygame.event.Event(pygame.FINGERUP, finger_id=0, touch_id=0, x=0.5, y=0.9, dx=0.0, dy=0.0)
        layer.handle_event(down, view_state)

        assert layer.handle_event(up, view_state)
        assert not layer.scrub.state.dragging


class TestCurveLayerEvents:
    """Tests for bus notifications."""

    def test_every_event_type_handled(self, layer, bus):
        """No notification is published without the layer listening for it."""
        assert all(bus._handlers[event_type] for event_type in EventType)

    def test_station_change_invalidates_and_resets(self, layer, bus, surface, view_state):
        layer.render(surface, view_state)
        layer.scrub.state.offset = 3600.0

        bus.publish(Event(EventType.STATION_CHANGED, {"station_id": "richmond"}))
        bus.flush()

        assert layer.scrub.offset == 0.0
        layer.render(surface, view_state)
        assert layer.cache.build_count == 2

    def test_predictions_updated_invalidates(self, layer, bus, surface, view_state):
        layer.render(surface, view_state)
        bus.publish_immediate(Event(EventType.PREDICTIONS_UPDATED))
        layer.render(surface, view_state)

        assert layer.cache.build_count == 2

    def test_teardown_unsubscribes(self, layer, bus, surface, view_state):
        layer.render(surface, view_state)
        layer.teardown()
        layer.scrub.state.offset = 3600.0

        bus.publish_immediate(Event(EventType.SCRUB_RESET))
        assert layer.scrub.offset == 3600.0


class TestRenderer:
    """Tests for layer coordination."""

    @pytest.fixture
    def live_state(self, view_state):
        now = time.time()
        view_state.predictions = synthesize_predictions(now - 24 * 3600, now + 24 * 3600)
        return view_state

    @pytest.fixture
    def renderer(self, surface, settings, bus):
        renderer = Renderer(surface, settings, bus)
        renderer.initialize()
        return renderer

    def test_layers_created(self, renderer):
        assert renderer.get_layer_visibility() == {"background": True, "tide_curve": True}

    def test_render_frame(self, renderer, live_state):
        renderer.render(live_state)
        assert renderer.curve_layer.last_marker_position is not None

    def test_toggle_layer(self, renderer, live_state):
        assert renderer.toggle_layer("tide_curve") is False
        renderer.render(live_state)
        assert renderer.curve_layer.last_marker_position is None

    def test_invalidate_reaches_cache(self, renderer, live_state):
        renderer.render(live_state)
        renderer.invalidate()
        renderer.render(live_state)

        assert renderer.curve_layer.cache.build_count == 2

    def test_teardown(self, renderer):
        renderer.teardown()
        assert renderer.get_layer_visibility() == {}
        assert renderer.curve_layer is None
