"""Color scheme for the tide curve."""

from dataclasses import dataclass
from typing import List, Tuple

import pygame

from tidecurve.utils.math import clamp

# Type alias for RGB colors
RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]
HSL = Tuple[float, float, float]

# Water level (metres above datum) -> (hue, saturation %, lightness %)
LEVEL_COLOR_STOPS: List[Tuple[float, HSL]] = [
    (-2.0, (230.0, 70.0, 12.0)),  # Deep midnight blue
    (-0.5, (195.0, 60.0, 18.0)),  # Dark teal
    (0.5, (175.0, 55.0, 30.0)),   # Aquamarine
    (2.0, (165.0, 50.0, 42.0)),   # Cyan-green
    (3.5, (42.0, 80.0, 55.0)),    # Warm gold
]


def _alpha_byte(alpha: float) -> int:
    return int(round(clamp(alpha, 0.0, 1.0) * 255))


def hsl_to_rgb(h: float, s: float, l: float) -> RGB:
    """Convert HSL (degrees, percent, percent) to an RGB triple."""
    color = pygame.Color(0, 0, 0)
    color.hsla = (h % 360.0, clamp(s, 0.0, 100.0), clamp(l, 0.0, 100.0), 100.0)
    return (color.r, color.g, color.b)


@dataclass(frozen=True)
class Colors:
    """Fixed palette plus level-driven color lookups."""

    # Hairlines and labels
    LABEL_DARK: RGB = (255, 255, 255)
    LABEL_LIGHT: RGB = (30, 40, 50)
    NOW_LINE: RGB = (255, 255, 255)
    TRANSPARENT: RGBA = (0, 0, 0, 0)

    @classmethod
    def with_alpha(cls, color: RGB, alpha: int) -> RGBA:
        """Add alpha channel to RGB color."""
        return (color[0], color[1], color[2], alpha)

    @classmethod
    def lerp(cls, color1: RGB, color2: RGB, t: float) -> RGB:
        """Linear interpolation between two colors."""
        t = clamp(t, 0.0, 1.0)
        return (
            int(color1[0] + (color2[0] - color1[0]) * t),
            int(color1[1] + (color2[1] - color1[1]) * t),
            int(color1[2] + (color2[2] - color1[2]) * t),
        )

    @classmethod
    def level_to_hsl(cls, level: float) -> HSL:
        """Interpolate the color stops at a water level (clamped to the stop range)."""
        first_level = LEVEL_COLOR_STOPS[0][0]
        last_level = LEVEL_COLOR_STOPS[-1][0]
        clamped = clamp(level, first_level, last_level)

        for (lvl_a, col_a), (lvl_b, col_b) in zip(LEVEL_COLOR_STOPS, LEVEL_COLOR_STOPS[1:]):
            if lvl_a <= clamped <= lvl_b:
                t = (clamped - lvl_a) / (lvl_b - lvl_a)
                return (
                    col_a[0] + (col_b[0] - col_a[0]) * t,
                    col_a[1] + (col_b[1] - col_a[1]) * t,
                    col_a[2] + (col_b[2] - col_a[2]) * t,
                )

        return LEVEL_COLOR_STOPS[-1][1]

    @classmethod
    def level_to_glow_color(cls, level: float, alpha: float, theme_blend: float) -> RGBA:
        """Curve/marker glow color, blended between the dark and light variants."""
        h, s, l = cls.level_to_hsl(level)
        dark = hsl_to_rgb(h, s + 10, min(l + 30, 85))
        light = hsl_to_rgb(h, min(s + 20, 100), clamp(l + 30, 40, 65))
        return cls.with_alpha(cls.lerp(dark, light, theme_blend), _alpha_byte(alpha))

    @classmethod
    def level_to_background(cls, level: float, theme_blend: float) -> RGB:
        """Background fill tinted by water level."""
        h, s, l = cls.level_to_hsl(level)
        dark = hsl_to_rgb(h, s * 0.5, l * 0.15)
        light = hsl_to_rgb(h, s * 0.15, 92 + l * 0.1)
        return cls.lerp(dark, light, theme_blend)

    @classmethod
    def label_color(cls, theme_blend: float, alpha: float = 0.4) -> RGBA:
        """Axis/extremum label color."""
        base = cls.lerp(cls.LABEL_DARK, cls.LABEL_LIGHT, theme_blend)
        return cls.with_alpha(base, _alpha_byte(alpha))
