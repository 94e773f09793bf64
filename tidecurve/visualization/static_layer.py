"""Offscreen rendering of the slowly-changing parts of the tide curve."""

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import math

import numpy as np
import pygame

from config.colors import Colors, RGBA
from config.constants import CACHE_DRIFT_MARGIN_SECONDS
from config.settings import Settings
from tidecurve.core.events import CurveSamples, RenderWindow, TidalEvent
from tidecurve.core.interpolation import interpolate_curve
from tidecurve.core.padding import pad_extrema
from tidecurve.core.scale import (
    CurveBounds,
    CurveGeometry,
    LevelRange,
    compute_level_range,
)
from .marker import level_at_time

Point = Tuple[float, float]

# (line width, alpha) per glow pass, widest first
GLOW_PASSES = ((12, 0.3), (5, 0.6), (3, 1.0))
FORECAST_PASSES = ((8, 0.15), (2, 0.35))
FORECAST_MIN_FADE = 0.25


@dataclass(frozen=True)
class StaticLayer:
    """Result of one offscreen build."""

    buffer: pygame.Surface
    points: CurveSamples
    extrema: List[TidalEvent]
    level_range: LevelRange
    window: RenderWindow  # Time span the buffer covers
    curve_bounds: CurveBounds  # Curve band on the target surface
    buffer_geometry: CurveGeometry  # Mappings in buffer coordinates
    buffer_top: int  # Surface row of the buffer's first row
    now: float


def split_at(samples: CurveSamples, t: float) -> Tuple[CurveSamples, CurveSamples]:
    """
    Split samples into the parts at/before and at/after `t`.

    Both halves share an interpolated point at `t` so the strokes meet.
    """
    times, levels = samples.times, samples.levels
    if len(times) == 0 or t <= times[0]:
        return CurveSamples(), samples
    if t >= times[-1]:
        return samples, CurveSamples()

    level = level_at_time(samples, t, fallback=float(levels[-1]))
    cut = int(np.searchsorted(times, t, side="left"))
    past = CurveSamples(np.append(times[:cut], t), np.append(levels[:cut], level))
    start = cut + 1 if times[cut] == t else cut
    future = CurveSamples(np.insert(times[start:], 0, t), np.insert(levels[start:], 0, level))
    return past, future


class StaticLayerRenderer:
    """
    Builds the cached curve buffer.

    The buffer spans the render window widened on both sides by the maximum
    scrub offset plus a drift margin, at the same pixels-per-second as the
    visible plot, so any scrubbed window is a horizontal slice of it.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def render(
        self,
        predictions: Sequence[TidalEvent],
        now: float,
        width: int,
        height: int,
        dpr: float,
        theme_blend: float
    ) -> Optional[StaticLayer]:
        """
        Pad, interpolate, scale and draw the curve around `now`.

        Args:
            predictions: Time-ordered extrema
            now: Wall-clock anchor of the build, POSIX seconds
            width: Surface width, logical pixels
            height: Surface height, logical pixels
            dpr: Device pixel ratio
            theme_blend: 0 = dark, 1 = light

        Returns:
            The built layer, or None when fewer than 2 usable points exist
        """
        if len(predictions) < 2:
            return None

        curve = self.settings.curve
        bounds = CurveBounds.from_surface(width, height, curve, dpr)
        if bounds.width <= 0 or bounds.height <= 0:
            return None

        view = RenderWindow.around(now, curve.past_seconds, curve.future_seconds)
        margin = self.settings.scrub.max_offset_seconds + CACHE_DRIFT_MARGIN_SECONDS
        window = view.widened(margin)

        series = pad_extrema(predictions, window, curve.half_cycle_seconds)
        points = interpolate_curve(series, window, curve.sample_step_seconds)
        if len(points) < 2:
            return None

        level_range = compute_level_range(
            points, curve.level_padding_fraction, curve.level_padding_fallback
        )

        pixels_per_second = bounds.width / view.duration
        buffer_width = int(math.ceil(window.duration * pixels_per_second))
        headroom = int(round(24 * dpr))
        buffer_top = max(0, int(bounds.top) - headroom)
        buffer_height = max(1, int(round(height * dpr)) - buffer_top)

        buffer_geometry = CurveGeometry(
            window=window,
            level_range=level_range,
            bounds=CurveBounds(
                left=0.0,
                right=window.duration * pixels_per_second,
                top=bounds.top - buffer_top,
                bottom=bounds.bottom - buffer_top,
            ),
        )

        buffer = pygame.Surface((buffer_width, buffer_height), pygame.SRCALPHA)
        buffer.fill(Colors.TRANSPARENT)

        tint_level = level_at_time(points, now, fallback=float(points.levels.mean()))
        past, future = split_at(points, now)

        self._draw_forecast(buffer, buffer_geometry, future, tint_level, theme_blend, dpr)
        self._draw_fill(buffer, buffer_geometry, past, tint_level, theme_blend)
        self._draw_glow(buffer, buffer_geometry, past, tint_level, theme_blend, dpr)
        extrema = [e for e in series if window.contains(e.time)]

        return StaticLayer(
            buffer=buffer,
            points=points,
            extrema=extrema,
            level_range=level_range,
            window=window,
            curve_bounds=bounds,
            buffer_geometry=buffer_geometry,
            buffer_top=buffer_top,
            now=now,
        )

    def _path(self, geometry: CurveGeometry, samples: CurveSamples) -> List[Point]:
        return [(geometry.time_to_x(p.time), geometry.level_to_y(p.level)) for p in samples]

    def _stroke(
        self,
        target: pygame.Surface,
        path: List[Point],
        color: RGBA,
        width: int
    ) -> None:
        """Polyline with round joins, composited onto target."""
        if len(path) < 2:
            return
        layer = pygame.Surface(target.get_size(), pygame.SRCALPHA)
        pygame.draw.lines(layer, color, False, path, width)
        if width > 2:
            radius = width / 2
            for point in path:
                pygame.draw.circle(layer, color, point, radius)
        target.blit(layer, (0, 0))

    def _draw_glow(
        self,
        buffer: pygame.Surface,
        geometry: CurveGeometry,
        past: CurveSamples,
        tint_level: float,
        theme_blend: float,
        dpr: float
    ) -> None:
        """Solid past curve as decreasing-width, increasing-opacity passes."""
        path = self._path(geometry, past)
        for width, alpha in GLOW_PASSES:
            color = Colors.level_to_glow_color(tint_level, alpha, theme_blend)
            self._stroke(buffer, path, color, max(1, int(round(width * dpr))))

    def _draw_fill(
        self,
        buffer: pygame.Surface,
        geometry: CurveGeometry,
        past: CurveSamples,
        tint_level: float,
        theme_blend: float
    ) -> None:
        """Area under the past curve with a vertical alpha gradient."""
        if len(past) < 2:
            return

        bounds = geometry.bounds
        path = self._path(geometry, past)
        polygon = [(path[0][0], bounds.bottom)] + path + [(path[-1][0], bounds.bottom)]

        gradient = pygame.Surface(buffer.get_size(), pygame.SRCALPHA)
        top, bottom = int(bounds.top), int(math.ceil(bounds.bottom))
        span = max(1, bottom - top)
        for row in range(top, bottom + 1):
            alpha = 0.5 + (0.05 - 0.5) * min(1.0, (row - top) / span)
            color = Colors.level_to_glow_color(tint_level, alpha, theme_blend)
            pygame.draw.line(gradient, color, (0, row), (gradient.get_width(), row))

        mask = pygame.Surface(buffer.get_size(), pygame.SRCALPHA)
        pygame.draw.polygon(mask, (255, 255, 255, 255), polygon)
        gradient.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
        buffer.blit(gradient, (0, 0))

    def _draw_forecast(
        self,
        buffer: pygame.Surface,
        geometry: CurveGeometry,
        future: CurveSamples,
        tint_level: float,
        theme_blend: float,
        dpr: float
    ) -> None:
        """Dashed future curve fading with distance from now."""
        path = self._path(geometry, future)
        if len(path) < 2:
            return

        total = float(sum(math.dist(a, b) for a, b in zip(path, path[1:])))
        for width, alpha in FORECAST_PASSES:
            layer = pygame.Surface(buffer.get_size(), pygame.SRCALPHA)
            for start, end, distance in dash_segments(path, 6 * dpr, 4 * dpr):
                fade = 1.0 - (1.0 - FORECAST_MIN_FADE) * (distance / total if total else 0.0)
                color = Colors.level_to_glow_color(tint_level, alpha * fade, theme_blend)
                pygame.draw.line(layer, color, start, end, max(1, int(round(width * dpr))))
            buffer.blit(layer, (0, 0))


def dash_segments(path: Sequence[Point], dash: float, gap: float):
    """
    Yield (start, end, distance) dashes along a polyline.

    `distance` is the arc length from the path start to the dash start. A
    dash crossing a vertex is yielded as one piece per segment.
    """
    if dash <= 0 or gap <= 0:
        raise ValueError(f"dash and gap must be positive, got {dash}, {gap}")

    drawing = True
    left = dash  # Length remaining in the current dash or gap
    travelled = 0.0
    for a, b in zip(path, path[1:]):
        seg = math.dist(a, b)
        if seg == 0:
            continue
        pos = 0.0
        while pos < seg:
            step = min(left, seg - pos)
            if drawing:
                start = (a[0] + (b[0] - a[0]) * pos / seg, a[1] + (b[1] - a[1]) * pos / seg)
                end_pos = pos + step
                end = (a[0] + (b[0] - a[0]) * end_pos / seg, a[1] + (b[1] - a[1]) * end_pos / seg)
                yield start, end, travelled + pos
            pos += step
            left -= step
            if left <= 0:
                drawing = not drawing
                left = dash if drawing else gap
        travelled += seg
