"""Dense curve synthesis between consecutive tidal extrema."""

from typing import Optional, Sequence

import numpy as np

from config.constants import SAMPLE_STEP_SECONDS
from .events import CurveSamples, RenderWindow, TidalEvent


def cosine_ease(x):
    """(1 - cos(pi*x)) / 2: zero slope at both ends. Accepts floats or arrays."""
    return (1.0 - np.cos(np.pi * x)) / 2.0


def _ease_between(t, t_a: float, t_b: float, level_a: float, level_b: float):
    frac = (t - t_a) / (t_b - t_a)
    return level_a + (level_b - level_a) * cosine_ease(frac)


def interpolate_curve(
    series: Sequence[TidalEvent],
    window: RenderWindow,
    step: float = SAMPLE_STEP_SECONDS
) -> CurveSamples:
    """
    Sample a cosine-eased curve through padded extrema.

    Each consecutive pair (A, B) contributes samples at tA, tA+step, ...
    strictly before tB; samples outside the window are dropped. The last
    extremum itself is appended when it falls inside the window so the
    curve ends on a known level.

    Args:
        series: Padded extrema in ascending time order
        window: Time range to keep
        step: Sampling interval in seconds

    Returns:
        Strictly time-ordered samples (empty for fewer than 2 extrema)
    """
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    if len(series) < 2:
        return CurveSamples()

    time_chunks = []
    level_chunks = []

    for a, b in zip(series, series[1:]):
        if b.time <= a.time:
            continue

        # Skip pairs entirely outside the window
        if b.time < window.start or a.time > window.end:
            continue

        t = a.time + np.arange(int(np.ceil((b.time - a.time) / step))) * step
        t = t[(t < b.time) & (t >= window.start) & (t <= window.end)]
        if len(t) == 0:
            continue

        time_chunks.append(t)
        level_chunks.append(_ease_between(t, a.time, b.time, a.level, b.level))

    last = series[-1]
    if window.contains(last.time):
        time_chunks.append(np.array([last.time]))
        level_chunks.append(np.array([last.level]))

    if not time_chunks:
        return CurveSamples()

    return CurveSamples(np.concatenate(time_chunks), np.concatenate(level_chunks))


def level_at(events: Sequence[TidalEvent], t: float) -> Optional[float]:
    """Cosine-eased level at a single instant, None outside the events' range."""
    for a, b in zip(events, events[1:]):
        if a.time <= t <= b.time and b.time > a.time:
            return float(_ease_between(t, a.time, b.time, a.level, b.level))
    return None
