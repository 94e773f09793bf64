"""Tidal extrema, interpolated samples and render windows."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, NamedTuple, Optional

import numpy as np


class TideKind(Enum):
    """High or low water."""
    HIGH = "high"
    LOW = "low"

    @property
    def opposite(self) -> "TideKind":
        return TideKind.LOW if self is TideKind.HIGH else TideKind.HIGH


@dataclass(frozen=True)
class TidalEvent:
    """A predicted high/low water extremum."""

    kind: TideKind
    time: float  # POSIX seconds
    level: float  # Metres above datum
    synthetic: bool = False  # Created by the padder, not supplied upstream


class InterpolatedPoint(NamedTuple):
    """One sample of the synthesized curve."""
    time: float
    level: float


@dataclass(frozen=True)
class RenderWindow:
    """Closed time interval [start, end] in POSIX seconds."""

    start: float
    end: float

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"Window end {self.end} precedes start {self.start}")

    @classmethod
    def around(cls, anchor: float, past: float, future: float) -> "RenderWindow":
        """Window spanning `past` seconds before and `future` seconds after anchor."""
        return cls(anchor - past, anchor + future)

    @property
    def duration(self) -> float:
        return self.end - self.start

    def contains(self, t: float) -> bool:
        return self.start <= t <= self.end

    def widened(self, margin: float) -> "RenderWindow":
        return RenderWindow(self.start - margin, self.end + margin)


@dataclass(frozen=True)
class CurveSamples:
    """
    Dense, strictly time-ordered curve samples.

    Backed by two parallel float64 arrays so bracketing and path building
    stay vectorised.
    """

    times: np.ndarray = field(default_factory=lambda: np.empty(0))
    levels: np.ndarray = field(default_factory=lambda: np.empty(0))

    def __len__(self) -> int:
        return len(self.times)

    def __iter__(self) -> Iterator[InterpolatedPoint]:
        for t, level in zip(self.times, self.levels):
            yield InterpolatedPoint(float(t), float(level))

    def __getitem__(self, index: int) -> InterpolatedPoint:
        return InterpolatedPoint(float(self.times[index]), float(self.levels[index]))

    @property
    def first(self) -> Optional[InterpolatedPoint]:
        return self[0] if len(self) else None

    @property
    def last(self) -> Optional[InterpolatedPoint]:
        return self[-1] if len(self) else None
