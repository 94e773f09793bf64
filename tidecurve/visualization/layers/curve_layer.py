"""Tide curve layer: cached static curve plus live marker and scrubbing."""

from typing import Callable, Optional, Tuple
import logging
import math
import time

import pygame

from config.settings import Settings
from tidecurve.core.event_bus import Event, EventBus, EventType
from tidecurve.core.events import RenderWindow
from tidecurve.core.scale import CurveGeometry
from tidecurve.core.state import VisualizationState
from ..cache import CacheEntry, StaticLayerCache
from ..labels import CurveLabels
from ..marker import LiveMarker
from ..scrub import TimeScrubController
from .base import BaseLayer

logger = logging.getLogger(__name__)


class TideCurveLayer(BaseLayer):
    """
    Layer for the tide curve along the bottom of the view.

    Owns its cache, scrub controller and marker, so several views (one per
    station, say) can live side by side. Per frame it advances the scrub
    animation, blits the slice of the cached buffer matching the scrubbed
    window, labels the extrema and hours inside the plot, then draws the
    live marker on top.
    """

    def __init__(
        self,
        settings: Settings,
        event_bus: Optional[EventBus] = None,
        clock: Callable[[], float] = time.time,
        scrub_clock: Callable[[], float] = time.monotonic
    ) -> None:
        super().__init__(settings)
        self._clock = clock
        self.cache = StaticLayerCache(settings, clock=clock)
        self.scrub = TimeScrubController(settings.scrub, clock=scrub_clock)
        self.labels = CurveLabels(settings.curve)
        self.marker = LiveMarker()
        self.last_marker_position: Optional[Tuple[float, float]] = None

        self.event_bus = event_bus
        if event_bus is not None:
            event_bus.subscribe(EventType.STATION_CHANGED, self._on_station_changed)
            event_bus.subscribe(EventType.PREDICTIONS_UPDATED, self._on_predictions_updated)
            event_bus.subscribe(EventType.SCRUB_RESET, self._on_scrub_reset)

    @property
    def name(self) -> str:
        return "tide_curve"

    def invalidate(self) -> None:
        """Force the static layer to rebuild on the next frame."""
        self.cache.invalidate()

    def virtual_now(self) -> float:
        return self._clock() + self.scrub.offset

    def _configure_scrub(self, state: VisualizationState) -> None:
        curve = self.settings.curve
        self.scrub.configure(
            width_px=state.width,
            window_seconds=curve.past_seconds + curve.future_seconds,
            band_top=state.height * (1 - curve.height_fraction),
            band_bottom=state.height - curve.bottom_margin,
        )

    def render(self, surface: pygame.Surface, state: VisualizationState) -> None:
        """Blit the cached curve for the scrubbed window and draw the marker."""
        self._configure_scrub(state)
        self.scrub.update()
        self.last_marker_position = None

        if not self.visible or len(state.predictions) < 2:
            return

        entry = self.cache.get(state)
        if entry is None:
            return

        virtual_now = self.virtual_now()
        curve = self.settings.curve
        window = RenderWindow.around(virtual_now, curve.past_seconds, curve.future_seconds)
        geometry = CurveGeometry(window, entry.level_range, entry.curve_bounds)
        self._blit_slice(surface, entry, geometry)
        self.labels.draw(surface, geometry, entry.extrema, state.theme_blend, state.dpr)

        self.last_marker_position = self.marker.draw(
            surface,
            geometry,
            entry.points,
            virtual_now,
            state.current_level,
            state.theme_blend,
            state.dpr,
        )

    def _blit_slice(
        self,
        surface: pygame.Surface,
        entry: CacheEntry,
        geometry: CurveGeometry
    ) -> None:
        bounds = entry.curve_bounds
        slice_width = int(math.ceil(bounds.width))
        max_x = max(0, entry.buffer.get_width() - slice_width)
        src_x = round((geometry.window.start - entry.window.start) * geometry.pixels_per_second)
        src_x = min(max(0, src_x), max_x)

        area = pygame.Rect(src_x, 0, slice_width, entry.buffer.get_height())
        surface.blit(entry.buffer, (int(bounds.left), entry.buffer_top), area)

    def handle_event(self, event: pygame.event.Event, state: VisualizationState) -> bool:
        """Route pointer, touch and wheel input to the scrub controller."""
        dpr = state.dpr or 1.0

        # Touch also arrives as emulated mouse events; take it from FINGER* only
        if getattr(event, "touch", False):
            return False

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            x, y = event.pos
            return self.scrub.pointer_down(x / dpr, y / dpr)

        if event.type == pygame.MOUSEMOTION:
            x, y = event.pos
            self.scrub.pointer_move(x / dpr, y / dpr)
            return self.scrub.state.dragging

        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            was_dragging = self.scrub.state.dragging
            self.scrub.pointer_up()
            return was_dragging

        if event.type == pygame.FINGERDOWN:
            return self.scrub.pointer_down(
                event.x * state.width, event.y * state.height, self._finger_id(event)
            )

        if event.type == pygame.FINGERMOTION:
            self.scrub.pointer_move(
                event.x * state.width, event.y * state.height, self._finger_id(event)
            )
            return self.scrub.state.dragging

        if event.type == pygame.FINGERUP:
            was_dragging = self.scrub.state.dragging
            self.scrub.pointer_up(self._finger_id(event))
            return was_dragging

        if event.type == pygame.MOUSEWHEEL:
            ticks_x = getattr(event, "precise_x", event.x)
            ticks_y = getattr(event, "precise_y", event.y)
            pixels = self.settings.scrub.wheel_pixels_per_tick
            # pygame reports "up" as positive y; scroll deltas grow downward
            self.scrub.wheel(ticks_x * pixels, -ticks_y * pixels)
            return True

        if event.type == pygame.WINDOWLEAVE:
            self.scrub.pointer_leave()
            return False

        return False

    @staticmethod
    def _finger_id(event: pygame.event.Event) -> int:
        # Offset past the mouse's pointer id 0
        return int(event.finger_id) + 1

    def _on_station_changed(self, event: Event) -> None:
        logger.info(f"Station changed to {event.data.get('station_id', '?')}")
        self.cache.invalidate()
        self.scrub.reset()

    def _on_predictions_updated(self, event: Event) -> None:
        self.cache.invalidate()

    def _on_scrub_reset(self, event: Event) -> None:
        self.scrub.reset()

    def teardown(self) -> None:
        """Cancel scrub timers and drop bus subscriptions."""
        self.scrub.cancel()
        if self.event_bus is not None:
            self.event_bus.unsubscribe(EventType.STATION_CHANGED, self._on_station_changed)
            self.event_bus.unsubscribe(EventType.PREDICTIONS_UPDATED, self._on_predictions_updated)
            self.event_bus.unsubscribe(EventType.SCRUB_RESET, self._on_scrub_reset)
