"""Per-frame visualization snapshot."""

from dataclasses import dataclass, field
from typing import List

from .events import TidalEvent


@dataclass
class PointerState:
    """Last known pointer position in logical pixels."""

    x: float = 0.0
    y: float = 0.0
    active: bool = False


@dataclass
class VisualizationState:
    """
    Snapshot handed to the renderer each frame.

    Owned and refreshed by the application; the curve layer only reads it.
    """

    width: int = 0
    height: int = 0
    dpr: float = 1.0
    current_level: float = 0.0  # Latest observed level, metres
    theme_blend: float = 0.0  # 0 = dark, 1 = light
    time: float = 0.0  # Animation clock, seconds
    pointer: PointerState = field(default_factory=PointerState)
    predictions: List[TidalEvent] = field(default_factory=list)
    station_id: str = ""

    @property
    def pixel_size(self) -> tuple[int, int]:
        """Surface size in device pixels."""
        return (int(round(self.width * self.dpr)), int(round(self.height * self.dpr)))
