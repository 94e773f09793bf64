"""Frame pacing for the render loop."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class FrameClock:
    """
    Caps rendering at a fixed rate by skipping callbacks.

    The event loop calls `should_render` on every wakeup; only wakeups at
    least one frame interval after the last rendered frame pass. Rendered
    frames advance the animation clock by the real elapsed time.
    """

    fps_target: int = 30

    # Internal state
    _last_frame: float | None = field(default=None, init=False)
    _animation_time: float = field(default=0.0, init=False)
    _last_dt: float = field(default=0.0, init=False)
    _frame_times: List[float] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if self.fps_target <= 0:
            raise ValueError(f"fps_target must be positive, got {self.fps_target}")

    @property
    def frame_interval(self) -> float:
        """Minimum seconds between rendered frames."""
        return 1.0 / self.fps_target

    @property
    def animation_time(self) -> float:
        """Accumulated seconds across rendered frames."""
        return self._animation_time

    @property
    def dt(self) -> float:
        """Elapsed seconds covered by the last rendered frame."""
        return self._last_dt

    @property
    def fps(self) -> float:
        """Rendered frames per second over the last second."""
        if len(self._frame_times) < 2:
            return 0.0
        duration = self._frame_times[-1] - self._frame_times[0]
        if duration <= 0:
            return 0.0
        return (len(self._frame_times) - 1) / duration

    def should_render(self, timestamp: float) -> bool:
        """
        Decide whether a wakeup at `timestamp` renders a frame.

        Args:
            timestamp: Monotonic seconds

        Returns:
            True when a frame should be drawn now
        """
        if self._last_frame is None:
            self._last_frame = timestamp
            self._last_dt = 0.0
            self._record(timestamp)
            return True

        elapsed = timestamp - self._last_frame
        if elapsed < self.frame_interval:
            return False

        self._last_frame = timestamp
        self._last_dt = elapsed
        self._animation_time += elapsed
        self._record(timestamp)
        return True

    def _record(self, timestamp: float) -> None:
        self._frame_times.append(timestamp)
        # Keep only last second of timing data
        cutoff = timestamp - 1.0
        self._frame_times = [t for t in self._frame_times if t > cutoff]

    def reset(self) -> None:
        """Reset clock to initial state."""
        self._last_frame = None
        self._animation_time = 0.0
        self._last_dt = 0.0
        self._frame_times.clear()
