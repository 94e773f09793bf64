"""Rendering, caching and interaction for the tide curve."""

from .cache import CacheEntry, CacheKey, StaticLayerCache
from .labels import CurveLabels, format_clock, pick_label_interval
from .marker import LiveMarker, find_bracket, level_at_time
from .renderer import Renderer
from .scrub import ScrubPhase, ScrubState, TimeScrubController
from .static_layer import StaticLayer, StaticLayerRenderer

__all__ = [
    "CacheEntry",
    "CacheKey",
    "StaticLayerCache",
    "CurveLabels",
    "format_clock",
    "pick_label_interval",
    "LiveMarker",
    "find_bracket",
    "level_at_time",
    "Renderer",
    "ScrubPhase",
    "ScrubState",
    "TimeScrubController",
    "StaticLayer",
    "StaticLayerRenderer",
]
