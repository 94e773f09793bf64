"""Time/level to surface coordinate mappings."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from config.constants import LEVEL_PADDING_FALLBACK, LEVEL_PADDING_FRACTION
from tidecurve.utils.math import map_range
from .events import CurveSamples, RenderWindow

if TYPE_CHECKING:
    from config.settings import CurveSettings


@dataclass(frozen=True)
class LevelRange:
    """Vertical extent of the curve in metres, headroom included."""

    minimum: float
    maximum: float

    @property
    def span(self) -> float:
        return self.maximum - self.minimum


def compute_level_range(
    samples: CurveSamples,
    padding_fraction: float = LEVEL_PADDING_FRACTION,
    fallback: float = LEVEL_PADDING_FALLBACK
) -> LevelRange:
    """Min/max over all samples, padded by a fraction of the span."""
    if len(samples) == 0:
        return LevelRange(-fallback, fallback)

    low = float(samples.levels.min())
    high = float(samples.levels.max())
    padding = (high - low) * padding_fraction or fallback
    return LevelRange(low - padding, high + padding)


@dataclass(frozen=True)
class CurveBounds:
    """Pixel rectangle the curve is drawn into."""

    left: float
    right: float
    top: float
    bottom: float

    @classmethod
    def from_surface(
        cls,
        width: float,
        height: float,
        settings: "CurveSettings",
        scale: float = 1.0
    ) -> "CurveBounds":
        """
        Curve band along the bottom of a width x height surface.

        Args:
            width: Surface width in logical pixels
            height: Surface height in logical pixels
            settings: Curve layout settings
            scale: Device pixel ratio applied to every coordinate
        """
        top = height * (1 - settings.height_fraction)
        bottom = height - settings.bottom_margin
        return cls(
            left=settings.padding_x * scale,
            right=(width - settings.padding_x) * scale,
            top=top * scale,
            bottom=bottom * scale,
        )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class CurveGeometry:
    """
    Pure affine mappings for one window, level range and pixel rectangle.

    The cache build and the per-frame marker both derive their coordinates
    from instances of this class, so equal inputs give equal pixels.
    """

    window: RenderWindow
    level_range: LevelRange
    bounds: CurveBounds

    @property
    def pixels_per_second(self) -> float:
        if self.window.duration <= 0:
            return 0.0
        return self.bounds.width / self.window.duration

    def time_to_x(self, t: float) -> float:
        return map_range(t, self.window.start, self.window.end, self.bounds.left, self.bounds.right)

    def x_to_time(self, x: float) -> float:
        return map_range(x, self.bounds.left, self.bounds.right, self.window.start, self.window.end)

    def level_to_y(self, level: float) -> float:
        return self.bounds.bottom - map_range(
            level,
            self.level_range.minimum,
            self.level_range.maximum,
            0.0,
            self.bounds.height,
        )
