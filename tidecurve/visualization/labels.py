"""Per-frame extremum markers and time-axis labels."""

from datetime import datetime
from typing import Sequence
import math

import pygame

from config.colors import Colors
from config.constants import HOUR, LABEL_INTERVAL_HOURS
from config.settings import CurveSettings
from tidecurve.core.events import TidalEvent, TideKind
from tidecurve.core.scale import CurveGeometry


def pick_label_interval(pixels_per_hour: float, min_spacing: float) -> int:
    """Smallest hour interval whose labels sit at least `min_spacing` px apart."""
    for hours in LABEL_INTERVAL_HOURS:
        if hours * pixels_per_hour >= min_spacing:
            return hours
    return LABEL_INTERVAL_HOURS[-1]


def format_clock(t: float) -> str:
    """Local HH:MM for a POSIX timestamp."""
    return datetime.fromtimestamp(t).strftime("%H:%M")


class CurveLabels:
    """
    Diamonds and HH:MM labels for highs/lows, plus the hour axis.

    Drawn straight onto the target surface with the frame's geometry, so the
    label margin is measured from the visible plot edges rather than from the
    wider cached buffer. Anything whose x falls within `label_margin` of
    either edge is skipped instead of being cut by the edge.
    """

    def __init__(self, curve: CurveSettings) -> None:
        self.curve = curve
        pygame.font.init()
        self._fonts: dict[int, pygame.font.Font] = {}

    def _font(self, dpr: float) -> pygame.font.Font:
        size = max(8, int(round(self.curve.font_size * dpr)))
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _inside(self, geometry: CurveGeometry, x: float, dpr: float) -> bool:
        margin = self.curve.label_margin * dpr
        bounds = geometry.bounds
        return bounds.left + margin <= x <= bounds.right - margin

    def draw(
        self,
        surface: pygame.Surface,
        geometry: CurveGeometry,
        extrema: Sequence[TidalEvent],
        theme_blend: float,
        dpr: float
    ) -> None:
        self.draw_extrema(surface, geometry, extrema, theme_blend, dpr)
        self.draw_time_axis(surface, geometry, theme_blend, dpr)

    def draw_extrema(
        self,
        surface: pygame.Surface,
        geometry: CurveGeometry,
        extrema: Sequence[TidalEvent],
        theme_blend: float,
        dpr: float
    ) -> int:
        """Diamond markers with HH:MM labels. Returns how many were drawn."""
        font = self._font(dpr)
        size = 5 * dpr
        label_color = Colors.label_color(theme_blend, 0.7)
        drawn = 0

        for event in extrema:
            if not geometry.window.contains(event.time):
                continue
            x = geometry.time_to_x(event.time)
            if not self._inside(geometry, x, dpr):
                continue
            y = geometry.level_to_y(event.level)

            diamond = [(x, y - size), (x + size, y), (x, y + size), (x - size, y)]
            pygame.draw.polygon(surface, Colors.level_to_glow_color(event.level, 1.0, theme_blend), diamond)

            text = font.render(format_clock(event.time), True, label_color)
            text_y = y - size - 2 * dpr - text.get_height()
            if event.kind is TideKind.LOW and text_y < geometry.bounds.top:
                text_y = y + size + 2 * dpr
            surface.blit(text, (x - text.get_width() / 2, max(0, text_y)))
            drawn += 1

        return drawn

    def draw_time_axis(
        self,
        surface: pygame.Surface,
        geometry: CurveGeometry,
        theme_blend: float,
        dpr: float
    ) -> int:
        """Hour labels under the curve at an interval that fits the width."""
        font = self._font(dpr)
        interval = pick_label_interval(
            geometry.pixels_per_second * HOUR,
            self.curve.min_label_spacing * dpr,
        )
        color = Colors.label_color(theme_blend, 0.4)
        y = geometry.bounds.bottom + 2 * dpr
        drawn = 0

        t = math.ceil(geometry.window.start / HOUR) * HOUR
        while t <= geometry.window.end:
            local = datetime.fromtimestamp(t)
            if local.minute == 0 and local.hour % interval == 0:
                x = geometry.time_to_x(t)
                if self._inside(geometry, x, dpr):
                    text = font.render(f"{local.hour:02d}:00", True, color)
                    surface.blit(text, (x - text.get_width() / 2, y))
                    drawn += 1
            t += HOUR

        return drawn
