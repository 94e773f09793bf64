"""Extend sparse high/low predictions so they cover a render window."""

from typing import Iterable, List, Sequence

from config.constants import HALF_CYCLE_SECONDS
from .events import RenderWindow, TidalEvent, TideKind


def _nearest_level(
    events: Iterable[TidalEvent],
    kind: TideKind,
    fallback: float
) -> float:
    """Level of the first event of `kind` in iteration order, else fallback."""
    for event in events:
        if event.kind is kind:
            return event.level
    return fallback


def pad_extrema(
    events: Sequence[TidalEvent],
    window: RenderWindow,
    half_cycle: float = HALF_CYCLE_SECONDS
) -> List[TidalEvent]:
    """
    Pad a time-ordered extrema list so its time range covers the window.

    Synthetic events alternate kind with their neighbour and sit exactly one
    half-cycle before the first / after the last event. Their level is copied
    from the nearest real event of the same kind (searched from the front when
    prepending, from the back when appending), or the neighbour's own level
    if no such event exists.

    Args:
        events: Extrema in ascending time order
        window: Time range the result must cover
        half_cycle: Spacing of synthesized events in seconds

    Returns:
        New list; the input unchanged if it holds fewer than 2 events
    """
    if half_cycle <= 0:
        raise ValueError(f"half_cycle must be positive, got {half_cycle}")

    padded = list(events)
    if len(padded) < 2:
        return padded

    while padded[0].time > window.start:
        first = padded[0]
        kind = first.kind.opposite
        padded.insert(0, TidalEvent(
            kind=kind,
            time=first.time - half_cycle,
            level=_nearest_level(padded, kind, first.level),
            synthetic=True,
        ))

    while padded[-1].time < window.end:
        last = padded[-1]
        kind = last.kind.opposite
        padded.append(TidalEvent(
            kind=kind,
            time=last.time + half_cycle,
            level=_nearest_level(reversed(padded), kind, last.level),
            synthetic=True,
        ))

    return padded
