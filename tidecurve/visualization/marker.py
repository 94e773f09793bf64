"""Per-frame "now" marker drawn on top of the cached curve."""

from typing import Optional, Tuple

import numpy as np
import pygame

from config.colors import Colors
from tidecurve.core.events import CurveSamples
from tidecurve.core.scale import CurveGeometry


def find_bracket(samples: CurveSamples, t: float) -> Optional[int]:
    """
    Index i with times[i] <= t <= times[i+1], or None if t is out of range.
    """
    times = samples.times
    if len(times) < 2 or t < times[0] or t > times[-1]:
        return None

    i = int(np.searchsorted(times, t, side="right")) - 1
    return min(i, len(times) - 2)


def level_at_time(samples: CurveSamples, t: float, fallback: float) -> float:
    """Linear level between the samples bracketing t; fallback outside them."""
    i = find_bracket(samples, t)
    if i is None:
        return fallback

    t0, t1 = samples.times[i], samples.times[i + 1]
    l0, l1 = samples.levels[i], samples.levels[i + 1]
    if t1 == t0:
        return float(l0)
    return float(l0 + (l1 - l0) * (t - t0) / (t1 - t0))


class LiveMarker:
    """
    Glowing dot at the (virtual) current time.

    Redrawn every frame; its position follows the scrubbed clock, so none of
    it goes into the static layer cache.
    """

    GLOW_ALPHA = 0.15  # Per disc; overlapping discs brighten toward the centre

    def __init__(
        self,
        glow_radius: float = 14.0,
        dot_radius: float = 4.0,
        glow_steps: int = 10
    ) -> None:
        self.glow_radius = glow_radius
        self.dot_radius = dot_radius
        self.glow_steps = glow_steps

    def locate(
        self,
        geometry: CurveGeometry,
        samples: CurveSamples,
        virtual_now: float,
        fallback_level: float
    ) -> Tuple[float, float, float]:
        """Returns (x, y, level) of the marker."""
        level = level_at_time(samples, virtual_now, fallback_level)
        return geometry.time_to_x(virtual_now), geometry.level_to_y(level), level

    def draw(
        self,
        surface: pygame.Surface,
        geometry: CurveGeometry,
        samples: CurveSamples,
        virtual_now: float,
        fallback_level: float,
        theme_blend: float,
        dpr: float = 1.0
    ) -> Tuple[float, float]:
        """
        Draw the hairline, glow and dot.

        Returns:
            Marker position in surface pixels
        """
        x, y, level = self.locate(geometry, samples, virtual_now, fallback_level)
        bounds = geometry.bounds

        line_width = max(1, int(dpr))
        hairline = pygame.Surface((line_width, max(1, int(bounds.height))), pygame.SRCALPHA)
        hairline.fill(Colors.with_alpha(Colors.lerp(Colors.NOW_LINE, Colors.LABEL_LIGHT, theme_blend), 26))
        surface.blit(hairline, (x - line_width / 2, bounds.top))

        # Radial glow: stacked translucent discs, largest first
        glow_radius = self.glow_radius * dpr
        glow = pygame.Surface((int(glow_radius * 2) + 2, int(glow_radius * 2) + 2), pygame.SRCALPHA)
        center = (glow.get_width() / 2, glow.get_height() / 2)
        for step in range(self.glow_steps):
            frac = 1.0 - step / self.glow_steps
            color = Colors.level_to_glow_color(level, self.GLOW_ALPHA, theme_blend)
            disc = pygame.Surface(glow.get_size(), pygame.SRCALPHA)
            pygame.draw.circle(disc, color, center, glow_radius * frac)
            glow.blit(disc, (0, 0))
        surface.blit(glow, (x - center[0], y - center[1]))

        pygame.draw.circle(
            surface,
            Colors.level_to_glow_color(level, 1.0, theme_blend),
            (x, y),
            self.dot_radius * dpr,
        )
        return x, y
