"""Core curve synthesis components."""

from .events import CurveSamples, InterpolatedPoint, RenderWindow, TidalEvent, TideKind
from .padding import pad_extrema
from .interpolation import cosine_ease, interpolate_curve, level_at
from .scale import CurveBounds, CurveGeometry, LevelRange, compute_level_range
from .state import PointerState, VisualizationState
from .clock import FrameClock
from .theme import Theme, ThemeTransition
from .event_bus import Event, EventBus, EventType

__all__ = [
    "CurveSamples",
    "InterpolatedPoint",
    "RenderWindow",
    "TidalEvent",
    "TideKind",
    "pad_extrema",
    "cosine_ease",
    "interpolate_curve",
    "level_at",
    "CurveBounds",
    "CurveGeometry",
    "LevelRange",
    "compute_level_range",
    "PointerState",
    "VisualizationState",
    "FrameClock",
    "Theme",
    "ThemeTransition",
    "Event",
    "EventBus",
    "EventType",
]
