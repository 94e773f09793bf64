"""Fingerprinted, TTL-bounded cache for the static curve layer."""

from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional
import logging
import time

import pygame

from config.constants import CACHE_MINUTE_SECONDS
from config.settings import Settings
from tidecurve.core.events import CurveSamples, RenderWindow, TidalEvent
from tidecurve.core.scale import CurveBounds, CurveGeometry, LevelRange
from tidecurve.core.state import VisualizationState
from .static_layer import StaticLayerRenderer

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    """Inputs whose change invalidates the cached buffer."""
    width: int
    height: int
    dpr: float
    theme_bucket: int
    prediction_count: int
    minute_bucket: int


@dataclass(frozen=True)
class CacheEntry:
    """One built static layer. Replaced wholesale, never mutated."""

    key: CacheKey
    buffer: pygame.Surface
    points: CurveSamples
    extrema: List[TidalEvent]
    level_range: LevelRange
    window: RenderWindow
    curve_bounds: CurveBounds
    buffer_geometry: CurveGeometry
    buffer_top: int
    now_at_build: float
    built_at: float


class StaticLayerCache:
    """
    Holds the most recent static layer and decides when to rebuild it.

    A rebuild happens when nothing was built yet, the key changed, the TTL
    since the last build attempt elapsed, or `invalidate()` was called. A
    build that yields fewer than 2 points leaves the cache empty until one
    of those conditions fires again.
    """

    def __init__(
        self,
        settings: Settings,
        clock: Callable[[], float] = time.time,
        renderer: Optional[StaticLayerRenderer] = None
    ) -> None:
        self.settings = settings
        self._clock = clock
        self.renderer = renderer or StaticLayerRenderer(settings)

        self._entry: Optional[CacheEntry] = None
        self._key: Optional[CacheKey] = None
        self._attempted_at: Optional[float] = None
        self._invalidated = False
        self.build_count = 0

    @property
    def entry(self) -> Optional[CacheEntry]:
        """Most recent entry without triggering a rebuild."""
        return self._entry

    def make_key(self, state: VisualizationState, now: float) -> CacheKey:
        bucket_size = self.settings.cache.theme_bucket_size
        theme_bucket = int(round(state.theme_blend / bucket_size)) if bucket_size > 0 else 0
        return CacheKey(
            width=state.width,
            height=state.height,
            dpr=state.dpr,
            theme_bucket=theme_bucket,
            prediction_count=len(state.predictions),
            minute_bucket=int(now // CACHE_MINUTE_SECONDS),
        )

    def invalidate(self) -> None:
        """Force an unconditional rebuild on next `get`."""
        self._invalidated = True

    def clear(self) -> None:
        """Drop the entry and all bookkeeping."""
        self._entry = None
        self._key = None
        self._attempted_at = None
        self._invalidated = False

    def _rebuild_reason(self, key: CacheKey, now: float) -> Optional[str]:
        if self._invalidated:
            return "invalidated"
        if self._attempted_at is None:
            return "empty"
        if key != self._key:
            return "key changed"
        if now - self._attempted_at >= self.settings.cache.ttl_seconds:
            return "ttl expired"
        return None

    def get(self, state: VisualizationState) -> Optional[CacheEntry]:
        """Return the current entry, rebuilding first if it is stale."""
        now = self._clock()
        key = self.make_key(state, now)

        reason = self._rebuild_reason(key, now)
        if reason is not None:
            self._rebuild(state, key, now, reason)

        return self._entry

    def _rebuild(
        self,
        state: VisualizationState,
        key: CacheKey,
        now: float,
        reason: str
    ) -> None:
        # Builds sharing a key draw from the same instant; the per-frame
        # slice offset absorbs the sub-minute drift
        anchor = key.minute_bucket * CACHE_MINUTE_SECONDS
        layer = self.renderer.render(
            state.predictions,
            anchor,
            state.width,
            state.height,
            state.dpr,
            state.theme_blend,
        )

        self.build_count += 1
        self._key = key
        self._attempted_at = now
        self._invalidated = False

        if layer is None:
            self._entry = None
            logger.debug(f"Static layer build produced too few points ({reason}); cache cleared")
            return

        self._entry = CacheEntry(
            key=key,
            buffer=layer.buffer,
            points=layer.points,
            extrema=layer.extrema,
            level_range=layer.level_range,
            window=layer.window,
            curve_bounds=layer.curve_bounds,
            buffer_geometry=layer.buffer_geometry,
            buffer_top=layer.buffer_top,
            now_at_build=layer.now,
            built_at=now,
        )
        logger.debug(
            f"Static layer rebuilt ({reason}): {len(layer.points)} points, key={key}"
        )
