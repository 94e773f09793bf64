"""Direct-manipulation time scrubbing with an eased return to real time."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional
import logging
import time

from config.settings import ScrubSettings
from tidecurve.core.interpolation import cosine_ease
from tidecurve.utils.math import clamp

logger = logging.getLogger(__name__)


class ScrubPhase(Enum):
    """Controller states."""
    IDLE = auto()
    DRAGGING = auto()
    SNAPBACK = auto()


@dataclass
class ScrubState:
    """Scrub offset and drag bookkeeping. Offsets are seconds, positions logical pixels."""

    offset: float = 0.0
    dragging: bool = False
    drag_anchor_x: float = 0.0
    drag_anchor_offset: float = 0.0
    pointer_id: Optional[int] = None
    phase: ScrubPhase = ScrubPhase.IDLE


class TimeScrubController:
    """
    Translates drag and wheel input into a bounded time offset.

    Dragging left moves the virtual "now" into the future. Releasing the
    pointer (or leaving the surface) schedules an eased snapback to zero
    after an idle delay; any new drag or wheel input cancels both the
    pending and the running snapback.

    Timers are deadlines checked by `update()`, which the frame loop calls
    once per frame.
    """

    def __init__(
        self,
        settings: ScrubSettings,
        clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.settings = settings
        self._clock = clock
        self.state = ScrubState()

        # Geometry (logical pixels), refreshed every frame via configure()
        self._width_px = 1.0
        self._window_seconds = 0.0
        self._band_top = 0.0
        self._band_bottom = 0.0

        self._snapback_due: Optional[float] = None
        self._snapback_start: Optional[float] = None
        self._snapback_from = 0.0

    @property
    def offset(self) -> float:
        return self.state.offset

    @property
    def phase(self) -> ScrubPhase:
        return self.state.phase

    @property
    def max_offset(self) -> float:
        return self.settings.max_offset_seconds

    @property
    def snapback_pending(self) -> bool:
        return self._snapback_due is not None

    @property
    def seconds_per_pixel(self) -> float:
        if self._width_px <= 0:
            return 0.0
        return self._window_seconds / self._width_px

    def configure(
        self,
        width_px: float,
        window_seconds: float,
        band_top: float,
        band_bottom: float
    ) -> None:
        """Update the geometry that converts pixels to seconds and hit-tests presses."""
        self._width_px = width_px
        self._window_seconds = window_seconds
        self._band_top = band_top
        self._band_bottom = band_bottom

    def _clamp_offset(self, offset: float) -> float:
        return clamp(offset, -self.max_offset, self.max_offset)

    def _cancel_snapback(self) -> None:
        self._snapback_due = None
        self._snapback_start = None
        if self.state.phase is ScrubPhase.SNAPBACK:
            self.state.phase = ScrubPhase.IDLE

    def _schedule_snapback(self) -> None:
        self._snapback_due = self._clock() + self.settings.idle_delay

    def pointer_down(self, x: float, y: float, pointer_id: int = 0) -> bool:
        """
        Begin a drag if the press lands inside the curve band.

        Returns:
            True when the controller captured the pointer
        """
        if not self._band_top <= y <= self._band_bottom:
            return False
        if self.state.dragging:
            return False

        self._cancel_snapback()
        self.state.dragging = True
        self.state.phase = ScrubPhase.DRAGGING
        self.state.pointer_id = pointer_id
        self.state.drag_anchor_x = x
        self.state.drag_anchor_offset = self.state.offset
        return True

    def pointer_move(self, x: float, y: float, pointer_id: int = 0) -> None:
        """Drag update; ignored unless this pointer owns the drag."""
        if not self.state.dragging or pointer_id != self.state.pointer_id:
            return

        dx = x - self.state.drag_anchor_x
        self.state.offset = self._clamp_offset(
            self.state.drag_anchor_offset - dx * self.seconds_per_pixel
        )

    def pointer_up(self, pointer_id: int = 0) -> None:
        """End the drag and schedule the snapback."""
        if not self.state.dragging or pointer_id != self.state.pointer_id:
            return
        self._end_drag()

    def pointer_leave(self) -> None:
        """Pointer left the surface; treated as a release."""
        if self.state.dragging:
            self._end_drag()

    def _end_drag(self) -> None:
        self.state.dragging = False
        self.state.pointer_id = None
        self.state.phase = ScrubPhase.IDLE
        self._schedule_snapback()

    def wheel(self, delta_x: float, delta_y: float) -> None:
        """
        Nudge the offset from wheel/trackpad deltas (pixels).

        Horizontal deltas drive the offset; vertical deltas stand in when
        they dominate, for wheels without a horizontal axis.
        """
        if self.state.dragging:
            return

        delta = delta_y if abs(delta_y) > abs(delta_x) else delta_x
        if delta == 0:
            return

        self._cancel_snapback()
        self.state.offset = self._clamp_offset(
            self.state.offset + delta * self.seconds_per_pixel * self.settings.wheel_factor
        )
        self._schedule_snapback()

    def update(self) -> float:
        """Advance timers and the snapback animation. Returns the current offset."""
        now = self._clock()

        if self._snapback_due is not None and now >= self._snapback_due:
            due = self._snapback_due
            self._snapback_due = None
            if self.state.offset != 0.0:
                # Timed from the deadline, not from the frame that noticed it
                self._snapback_start = due
                self._snapback_from = self.state.offset
                self.state.phase = ScrubPhase.SNAPBACK
                logger.debug(f"Snapback from {self._snapback_from:.0f}s")

        if self.state.phase is ScrubPhase.SNAPBACK and self._snapback_start is not None:
            duration = self.settings.snapback_duration
            progress = (now - self._snapback_start) / duration if duration > 0 else 1.0
            if progress >= 1.0:
                self.state.offset = 0.0
                self.state.phase = ScrubPhase.IDLE
                self._snapback_start = None
            else:
                self.state.offset = self._snapback_from * (1.0 - float(cosine_ease(progress)))

        return self.state.offset

    def reset(self) -> None:
        """Jump back to real time immediately (e.g. station change)."""
        self.cancel()
        self.state.offset = 0.0

    def cancel(self) -> None:
        """Drop drags and timers (teardown or external reset)."""
        self._snapback_due = None
        self._snapback_start = None
        self.state.dragging = False
        self.state.pointer_id = None
        self.state.phase = ScrubPhase.IDLE
