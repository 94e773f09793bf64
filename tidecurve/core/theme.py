"""Animated dark/light theme blending."""

from enum import Enum
from typing import Callable
import time

from tidecurve.utils.math import ease_in_out_quad


class Theme(Enum):
    DARK = "dark"
    LIGHT = "light"

    @property
    def blend_target(self) -> float:
        return 1.0 if self is Theme.LIGHT else 0.0


class ThemeTransition:
    """Eases the theme blend scalar toward the active theme's target."""

    def __init__(
        self,
        theme: Theme = Theme.DARK,
        duration: float = 0.8,
        clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.theme = theme
        self.duration = duration
        self._clock = clock
        self._blend = theme.blend_target
        self._start_blend = self._blend
        self._start_time: float | None = None

    def set_theme(self, theme: Theme) -> None:
        """Start easing from the current blend toward the new theme."""
        self._start_blend = self.blend
        self.theme = theme
        self._start_time = self._clock()
        if self._start_blend == theme.blend_target or self.duration <= 0:
            self._blend = theme.blend_target
            self._start_time = None

    def toggle(self) -> Theme:
        self.set_theme(Theme.LIGHT if self.theme is Theme.DARK else Theme.DARK)
        return self.theme

    @property
    def in_transition(self) -> bool:
        return self._start_time is not None

    @property
    def blend(self) -> float:
        """Current blend in [0, 1]; advances with the clock."""
        if self._start_time is None:
            return self._blend

        t = (self._clock() - self._start_time) / self.duration
        target = self.theme.blend_target
        if t >= 1.0:
            self._blend = target
            self._start_time = None
            return self._blend

        self._blend = self._start_blend + (target - self._start_blend) * ease_in_out_quad(t)
        return self._blend
